"""Tests for the console front end"""

import io

import pytest

import main
from CalcEngine.ScientificEngine import AngleMode


def test_handle_line_result(config_file):
    output, mode = main.handle_line("3 + 3 ^ 2\n", AngleMode.RADIANS, {})
    assert output == "= 12"
    assert mode is AngleMode.RADIANS


def test_handle_line_toggles_mode(config_file):
    output, mode = main.handle_line(":mode", AngleMode.RADIANS, {})
    assert output == "Mode: Deg"
    assert mode is AngleMode.DEGREES


def test_handle_line_error(config_file):
    output, _ = main.handle_line("1+", AngleMode.RADIANS, {})
    assert output == "Error 3001: Incomplete expression"


def test_handle_line_copies_result(config_file, monkeypatch):
    copied = []
    monkeypatch.setattr(main.pyperclip, "copy", copied.append)
    main.handle_line("2*3", AngleMode.RADIANS, {"copy_result": True})
    assert copied == ["6"]


def test_clipboard_failure_is_not_fatal(config_file, monkeypatch):
    def no_clipboard(text):
        raise main.pyperclip.PyperclipException("no backend")

    monkeypatch.setattr(main.pyperclip, "copy", no_clipboard)
    output, _ = main.handle_line("2*3", AngleMode.RADIANS, {"copy_result": True})
    assert output == "= 6"


def test_repl_session(config_file):
    config_file({"angle_mode": "deg", "decimal_places": 7})
    stdin = io.StringIO("cos(180)\n\n:mode\ncos(pi)\n3 .2\n:quit\n1+1\n")
    stdout = io.StringIO()
    main.repl(stdin, stdout)
    assert stdout.getvalue().splitlines() == [
        "= -1",
        "Mode: Rad",
        "= -1",
        "Error 3003: Unexpected character '.' at index 2",
    ]


def test_main_reports_config_error(config_file, monkeypatch, capsys):
    config_file({"angle_mode": "gradians"})
    monkeypatch.setattr(main.sys, "stdin", io.StringIO(""))
    with pytest.raises(SystemExit):
        main.main()
    assert "Error 5501" in capsys.readouterr().out
