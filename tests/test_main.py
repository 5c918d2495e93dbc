import pytest

from main import main, parse_args


def test_prints_level_one(capsys):
    assert main(["--level", "1", "--seed", "3"]) == 0
    out = capsys.readouterr().out
    assert out.startswith("Level 1\n")
    assert out.rstrip().endswith("@.#\n#..\n##G")


def test_hint_route(capsys):
    main(["--level", "1", "--hint"])
    out = capsys.readouterr().out
    assert out.rstrip().endswith("@*#\n#**\n##G")


def test_fog_hides_far_cells(capsys):
    main(["--level", "20", "--seed", "1", "--fog"])
    out = capsys.readouterr().out
    assert "?" in out
    assert "G" in out


def test_level_out_of_range():
    with pytest.raises(SystemExit):
        parse_args(["--level", "0"])


def test_save_then_resume(tmp_path, capsys):
    save_dir = str(tmp_path / "saves")
    main(["--level", "7", "--seed", "2", "--save", "--save-dir", save_dir])
    first = capsys.readouterr().out

    main(["--resume", "--seed", "2", "--save-dir", save_dir])
    resumed = capsys.readouterr().out

    assert first.startswith("Level 7\n")
    assert resumed == first


def test_resume_without_save_uses_level(tmp_path, capsys):
    main(["--resume", "--level", "3", "--save-dir", str(tmp_path)])
    assert capsys.readouterr().out.startswith("Level 3\n")
