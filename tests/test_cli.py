import json
import logging
import sys
from pathlib import Path
from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from emadocs import ema_cli
from emadocs.ema_errors import EmaError, LexError, ParseError

BUTTON_SOURCE = 'component Button { prop label: string = "Click"; }'


def test_run_emadocs_string_input_prints(capsys: pytest.CaptureFixture[str]) -> None:
    ema_cli.run_emadocs(source=BUTTON_SOURCE, is_string=True)
    out = capsys.readouterr().out
    data = json.loads(out)
    assert data["kind"] == "Program"
    assert data["body"][0]["kind"] == "Component"
    assert data["body"][0]["props"][0]["name"] == "label"


def test_run_emadocs_returns_text(capsys: pytest.CaptureFixture[str]) -> None:
    text = ema_cli.run_emadocs(source="x = 1", is_string=True, indent=None)
    assert "\n" not in text
    assert capsys.readouterr().out.strip() == text


def test_run_emadocs_file_input(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    file_path = tmp_path / "button.ema"
    file_path.write_text(BUTTON_SOURCE, encoding="utf-8")
    ema_cli.run_emadocs(source=str(file_path))
    data = json.loads(capsys.readouterr().out)
    assert data["body"][0]["name"] == "Button"


def test_run_emadocs_rejects_non_ema_file() -> None:
    with pytest.raises(ValueError, match="Only .ema files are supported."):
        ema_cli.run_emadocs(source="foo.txt")


def test_run_emadocs_output_file(
    tmp_path: Path, capsys: pytest.CaptureFixture[str]
) -> None:
    output_path = tmp_path / "ast.json"
    ema_cli.run_emadocs(source=BUTTON_SOURCE, is_string=True, out=str(output_path))
    assert capsys.readouterr().out == ""
    contents = output_path.read_text(encoding="utf-8")
    assert contents.endswith("\n")
    assert json.loads(contents)["body"][0]["kind"] == "Component"


def test_run_emadocs_output_file_logs(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    output_path = tmp_path / "ast.json"
    with caplog.at_level(logging.INFO, logger="emadocs.ema_cli"):
        ema_cli.run_emadocs(source="x", is_string=True, out=str(output_path))
    assert f"wrote {output_path}" in caplog.text


def test_run_emadocs_tokens(capsys: pytest.CaptureFixture[str]) -> None:
    ema_cli.run_emadocs(source="page Home", is_string=True, tokens=True)
    data = json.loads(capsys.readouterr().out)
    assert [t["type"] for t in data] == ["PAGE", "IDENTIFIER", "EOF"]
    assert data[1] == {"type": "IDENTIFIER", "value": "Home", "line": 1, "col": 6}


def test_run_emadocs_propagates_parse_error() -> None:
    with pytest.raises(ParseError):
        ema_cli.run_emadocs(source="component Foo { ", is_string=True)


def test_run_emadocs_propagates_lex_error() -> None:
    with pytest.raises(LexError):
        ema_cli.run_emadocs(source="a # b", is_string=True)


def test_main_string_source(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["emadocs-parse", "-s", "a + b"])
    ema_cli.main()
    data = json.loads(capsys.readouterr().out)
    assert data["body"][0]["kind"] == "Binary"


def test_main_passes_arguments(monkeypatch: pytest.MonkeyPatch) -> None:
    called: dict[str, Any] = {}
    monkeypatch.setattr(
        sys, "argv", ["emadocs-parse", "app.ema", "--tokens", "-o", "o.json"]
    )
    monkeypatch.setattr(ema_cli, "run_emadocs", lambda **kwargs: called.update(kwargs))
    ema_cli.main()
    assert called == {
        "source": "app.ema",
        "is_string": False,
        "out": "o.json",
        "tokens": True,
        "indent": 2,
    }


def test_main_zero_indent_is_compact(monkeypatch: pytest.MonkeyPatch) -> None:
    called: dict[str, Any] = {}
    monkeypatch.setattr(sys, "argv", ["emadocs-parse", "-s", "x", "--indent", "0"])
    monkeypatch.setattr(ema_cli, "run_emadocs", lambda **kwargs: called.update(kwargs))
    ema_cli.main()
    assert called["indent"] is None


def test_main_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    src = tmp_path / "main.ema"
    out = tmp_path / "main.json"
    src.write_text("layout Main { render { header() } }", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["emadocs-parse", str(src), "-o", str(out)])
    ema_cli.main()
    assert json.loads(out.read_text(encoding="utf-8"))["body"][0]["kind"] == "Layout"


def test_main_reports_parse_error(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.setattr(sys, "argv", ["emadocs-parse", "-s", "page {"])
    with pytest.raises(SystemExit) as e:
        ema_cli.main()
    assert e.value.code == 1
    err = capsys.readouterr().err
    assert "<string>:1:6: Expected page name" in err


def test_main_reports_lex_error_with_filename(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    capsys: pytest.CaptureFixture[str],
) -> None:
    src = tmp_path / "bad.ema"
    src.write_text("x = 1\ny = @", encoding="utf-8")
    monkeypatch.setattr(sys, "argv", ["emadocs-parse", str(src)])
    with pytest.raises(SystemExit) as e:
        ema_cli.main()
    assert e.value.code == 1
    err = capsys.readouterr().err
    assert f"{src}:2:5: Unexpected character '@' at position 10" in err


def test_main_rejects_bad_flag(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(sys, "argv", ["emadocs-parse", "--indent", "wide"])
    with pytest.raises(SystemExit) as e:
        ema_cli.main()
    assert e.value.code == 2


def test_main_calls_repl_on_no_args(monkeypatch: pytest.MonkeyPatch) -> None:
    called = {}

    def fake_repl(*args: Any, **kwargs: Any) -> None:
        called["ran"] = True

    monkeypatch.setattr(sys, "argv", ["emadocs-parse"])
    monkeypatch.setattr("emadocs.ema_repl.start_repl", fake_repl)

    ema_cli.main()

    assert called.get("ran") is True


def test_main_repl_flag_calls_repl(monkeypatch: pytest.MonkeyPatch) -> None:
    called_args = {}

    def fake_repl(*, verbose: Any) -> None:
        called_args["verbose"] = verbose

    monkeypatch.setattr("emadocs.ema_repl.start_repl", fake_repl)
    monkeypatch.setattr(sys, "argv", ["emadocs-parse", "--repl", "--verbose"])

    ema_cli.main()

    assert called_args["verbose"] is True


@given(st.text(max_size=60))  # type: ignore[misc]
def test_run_emadocs_random_input_fails_cleanly(source: str) -> None:
    try:
        text = ema_cli.run_emadocs(source, is_string=True, indent=None)
    except EmaError:
        return
    except RecursionError:
        return
    assert json.loads(text)["kind"] == "Program"
