"""Tests for command line parsing and the command catalog."""

from practice_scheduler.command_catalog import Command, help_text
from practice_scheduler.services.commands import parse_command


def test_parse_splits_name_and_args() -> None:
    parsed = parse_command("add_session C1 2024-01-01 09:00 60")

    assert parsed.name == "add_session"
    assert parsed.args == ["C1", "2024-01-01", "09:00", "60"]


def test_parse_keeps_quoted_span_as_one_token() -> None:
    parsed = parse_command('create_user C1 "Jane Q Public"')

    assert parsed.args == ["C1", "Jane Q Public"]


def test_parse_lowercases_command_name_only() -> None:
    parsed = parse_command("SHOW_USER Client-A")

    assert parsed.name == "show_user"
    assert parsed.args == ["Client-A"]


def test_parse_collapses_repeated_whitespace() -> None:
    parsed = parse_command("  list_sessions   C1  ")

    assert parsed.name == "list_sessions"
    assert parsed.args == ["C1"]


def test_parse_empty_line() -> None:
    parsed = parse_command("")

    assert parsed.name == ""
    assert parsed.args == []


def test_parse_drops_empty_quotes() -> None:
    parsed = parse_command('add_note "" hello')

    assert parsed.args == ["hello"]


def test_command_lookup() -> None:
    assert Command.lookup("available_slots") is Command.AVAILABLE_SLOTS
    assert Command.lookup("drop_tables") is None


def test_help_lists_every_command() -> None:
    text = help_text()

    for entry in Command:
        assert entry.value.usage in text
    assert "caseType" in text
