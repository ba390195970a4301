import io

import pytest

from hindentpy.cli import EXIT_ERRORS, EXIT_OK, EXIT_UNFORMATTED, main


def test_check_reports_files_that_would_change(tmp_path, capsys) -> None:
    clean = tmp_path / "Clean.hs"
    clean.write_text("x = 1\n", encoding="utf-8")
    messy = tmp_path / "Messy.hs"
    messy.write_text("x  =  1\n", encoding="utf-8")

    code = main(["--check", "--no-progress", str(clean), str(messy)])

    assert code == EXIT_UNFORMATTED
    err = capsys.readouterr().err
    assert f"would reformat {messy}" in err
    assert str(clean) not in err
    assert messy.read_text(encoding="utf-8") == "x  =  1\n"


def test_check_passes_for_formatted_files(tmp_path) -> None:
    path = tmp_path / "Clean.hs"
    path.write_text("x = 1\n", encoding="utf-8")

    assert main(["--check", str(path)]) == EXIT_OK


def test_write_rewrites_files_in_place(tmp_path) -> None:
    path = tmp_path / "Main.hs"
    path.write_text("x  =  1\n", encoding="utf-8")

    assert main(["--write", str(path)]) == EXIT_OK
    assert path.read_text(encoding="utf-8") == "x = 1\n"


def test_stdin_is_formatted_to_stdout(monkeypatch, capsys) -> None:
    monkeypatch.setattr("sys.stdin", io.StringIO("f  x  =  x\n"))

    code = main([])

    assert code == EXIT_OK
    assert capsys.readouterr().out == "f x = x\n"


def test_parse_errors_exit_with_error_code(tmp_path, capsys) -> None:
    path = tmp_path / "Broken.hs"
    path.write_text("f = (\n", encoding="utf-8")

    code = main(["--write", str(path)])

    assert code == EXIT_ERRORS
    assert path.read_text(encoding="utf-8") == "f = (\n"
    assert "PARSER_EXPECTED_EXPRESSION" in capsys.readouterr().err


def test_line_length_override(tmp_path, capsys) -> None:
    path = tmp_path / "T.hs"
    path.write_text("t = (alpha, beta, gamma)\n", encoding="utf-8")

    assert main(["--line-length", "12", str(path)]) == EXIT_OK
    assert capsys.readouterr().out == "t =\n  (alpha\n  ,beta\n  ,gamma)\n"


def test_invalid_line_length_is_a_usage_error() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--line-length", "0", "x.hs"])

    assert excinfo.value.code == 2


def test_write_requires_paths() -> None:
    with pytest.raises(SystemExit):
        main(["--write"])
