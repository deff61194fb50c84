import io

from rich.console import Console

from event_manager.utils import ui


def test_ui_functions_write_to_console(monkeypatch):
    buffer = io.StringIO()
    monkeypatch.setattr(ui, "_CONSOLE", Console(file=buffer, width=120, highlight=False))

    ui.section("Events")
    ui.info("info")
    ui.success("ok")
    ui.warn("careful")
    ui.error("err")

    text = buffer.getvalue()
    for expected in ("Events", "ℹ info", "✓ ok", "! careful", "✗ err"):
        assert expected in text


def test_get_console_is_singleton(monkeypatch):
    monkeypatch.setattr(ui, "_CONSOLE", None)
    assert ui.get_console() is ui.get_console()
