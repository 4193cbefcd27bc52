import pytest

from devconsole.core import parser
from devconsole.core.parser import flatten_args, parse_line, tokenize


def test_long_flags_with_value_and_boolean() -> None:
    parsed = parse_line("--name John --verbose")
    assert parsed.flags == {"name": "John", "verbose": True}
    assert parsed.positional == []


def test_bundled_short_flags() -> None:
    parsed = parse_line("-ab")
    assert parsed.flags == {"a": True, "b": True}
    assert parsed.positional == []


def test_quoted_spans_rejoin_to_unquoted_content() -> None:
    line = 'say "hello big world" to "everyone here"'
    parsed = parse_line(line)
    assert parsed.positional == ["say", "hello big world", "to", "everyone here"]
    assert " ".join(parsed.positional) == line.replace('"', "")


def test_equals_form_coerces_numbers() -> None:
    parsed = parse_line("deploy --count=3 --ratio 2.5 --label=blue")
    assert parsed.flags == {"count": 3, "ratio": 2.5, "label": "blue"}
    assert parsed.positional == ["deploy"]


def test_leading_zero_values_stay_text() -> None:
    assert parse_line("lookup --id 007").flags == {"id": "007"}


def test_flag_followed_by_dash_token_is_boolean() -> None:
    parsed = parse_line("build --release --target x86")
    assert parsed.flags == {"release": True, "target": "x86"}


def test_negative_numbers_and_lone_dash_are_positional() -> None:
    assert parse_line("calc -5 + 3 - 1").positional == ["calc", "-5", "+", "3", "-", "1"]


def test_repeated_flag_collects_values() -> None:
    assert parse_line("tag --add a --add b --add c").flags == {"add": ["a", "b", "c"]}


def test_quoted_flag_value() -> None:
    parsed = parse_line('greet --name="Ada Lovelace"')
    assert parsed.flags == {"name": "Ada Lovelace"}


def test_unbalanced_quote_runs_to_end_of_line() -> None:
    assert tokenize('echo "unterminated text here') == ["echo", "unterminated text here"]


@pytest.mark.parametrize("line", ["", "   ", "\t\n"])
def test_blank_input_has_no_positionals(line: str) -> None:
    parsed = parse_line(line)
    assert parsed.positional == []
    assert parsed.flags == {}
    assert parsed.is_empty


def test_internal_failure_degrades_to_plain_split(monkeypatch: pytest.MonkeyPatch) -> None:
    def _explode(_tokens: list[str]) -> parser.ParsedLine:
        raise RuntimeError("boom")

    monkeypatch.setattr(parser, "_parse_tokens", _explode)
    parsed = parse_line('deploy --force "my app"')
    assert parsed.positional == ["deploy", "--force", "my app"]
    assert parsed.flags == {}


def test_flatten_args_rebuilds_argv_without_command_name() -> None:
    parsed = parse_line("deploy app --force --env prod -v")
    assert parsed.name == "deploy"
    assert flatten_args(parsed) == ["app", "--force", "--env", "prod", "--v"]


def test_flatten_args_repeats_list_flags() -> None:
    parsed = parse_line("tag x --add a --add b")
    assert flatten_args(parsed) == ["x", "--add", "a", "--add", "b"]
