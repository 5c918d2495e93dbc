"""
Save/Load System - Saves and loads game progress to/from JSON
"""

import json
import logging
from pathlib import Path
from datetime import datetime

from config import GAME_VERSION
from game.game_state import GameProgress
from utils.constants import SAVE_DIR, SAVE_SLOT

logger = logging.getLogger(__name__)


class SaveManager:
    """
    Manages progress save and load operations
    """
    def __init__(self, save_dir=SAVE_DIR):
        """
        Args:
            save_dir: Directory to store save files
        """
        self.save_dir = Path(save_dir)
        self.save_dir.mkdir(parents=True, exist_ok=True)
        self.current_slot = None

    def _slot_path(self, slot_name):
        return self.save_dir / f"{slot_name}.json"

    def save_progress(self, progress, slot_name=SAVE_SLOT):
        """
        Save session progress

        Args:
            progress: GameProgress object
            slot_name: Save slot name

        Returns:
            bool: True if save successful
        """
        save_data = progress.to_dict()
        save_data['metadata'] = {
            'slot_name': slot_name,
            'timestamp': datetime.now().isoformat(),
            'version': GAME_VERSION,
        }

        try:
            with open(self._slot_path(slot_name), 'w') as f:
                json.dump(save_data, f, indent=2)
        except OSError as e:
            logger.warning("Save failed for slot %s: %s", slot_name, e)
            return False

        self.current_slot = slot_name
        return True

    def load_progress(self, slot_name=SAVE_SLOT):
        """
        Load session progress

        Returns:
            GameProgress, or None if the file is missing or unreadable
        """
        save_path = self._slot_path(slot_name)
        if not save_path.exists():
            logger.info("Save file not found: %s", save_path)
            return None

        try:
            with open(save_path, 'r') as f:
                save_data = json.load(f)
            progress = GameProgress.from_dict(save_data)
        except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
            logger.warning("Load failed for slot %s: %s", slot_name, e)
            return None

        self.current_slot = slot_name
        return progress

    def get_save_files(self):
        """
        Get list of available save files

        Returns:
            list: List of (slot_name, metadata) tuples
        """
        saves = []

        for save_file in sorted(self.save_dir.glob("*.json")):
            try:
                with open(save_file, 'r') as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("Skipping unreadable save %s: %s", save_file.name, e)
                continue
            metadata = data.get('metadata', {}) if isinstance(data, dict) else {}
            saves.append((save_file.stem, metadata))

        return saves

    def delete_save(self, slot_name):
        """
        Delete a save file

        Returns:
            bool: True if deleted successfully
        """
        save_path = self._slot_path(slot_name)
        try:
            save_path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning("Delete failed for slot %s: %s", slot_name, e)
            return False
        return True
