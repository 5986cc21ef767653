import pytest

from treecli import Command
from treecli.exceptions import (
    InvalidOptionValueError,
    MissingOptionValueError,
    UnknownOptionError,
)
from treecli.option import BoolOption, IntOption, StringOption
from treecli.parser import parse_command_args
from treecli.parser.tokens import (
    extract_equal_value,
    is_flag_equal_token,
    is_flag_token,
    is_option_token,
)


def test_tokens():
    port = IntOption(name="port", short="p")
    assert is_option_token("--port")
    assert is_option_token("-p")
    assert not is_option_token("sub")

    assert is_flag_token(port, "--port")
    assert is_flag_token(port, "-p")
    assert not is_flag_token(port, "--po")
    assert not is_flag_token(port, "--port=1")

    assert is_flag_equal_token(port, "--port=1")
    assert is_flag_equal_token(port, "-p=")
    assert not is_flag_equal_token(port, "--portal=1")

    assert extract_equal_value("--url=a=b=c") == "a=b=c"
    assert extract_equal_value("--url=") == ""


def test_empty_flags_never_match():
    env_only = StringOption(environment="TOKEN")
    assert not is_flag_token(env_only, "--")
    assert not is_flag_token(env_only, "-")
    assert not is_flag_equal_token(env_only, "--=x")


def test_positional_and_options(main_cli):
    sub = main_cli.subcommands[0]
    remaining = parse_command_args(sub, ["a", "--port", "1", "b", "-p=2", "c"])
    assert remaining == ["a", "b", "c"]
    assert sub.options[0].value == 2
    assert sub.called_commands == ["sub"]


def test_recurses_into_subcommand(main_cli):
    remaining = parse_command_args(main_cli, ["-v", "sub", "x"])
    sub = main_cli.subcommands[0]
    assert remaining == ["x"]
    assert main_cli.remaining_args == ["x"]
    assert main_cli.called_commands == ["main-cli"]
    assert sub.called_commands == ["main-cli", "sub"]
    assert main_cli.options[0].value is True


def test_alias_records_canonical_name(main_cli):
    parse_command_args(main_cli, ["serve"])
    assert main_cli.subcommands[0].called_commands == ["main-cli", "sub"]


def test_break_marker(main_cli):
    remaining = parse_command_args(main_cli, ["a", "--", "--verbose", "sub", "--"])
    assert remaining == ["a", "--verbose", "sub", "--"]
    assert main_cli.options[0].value is None
    assert main_cli.subcommands[0].called_commands == []


def test_subcommand_stops_parent_scan(main_cli):
    remaining = parse_command_args(main_cli, ["sub", "version"])
    assert remaining == ["version"]
    assert main_cli.subcommands[1].called_commands == []


def test_parent_option_not_accepted_in_subcommand(main_cli):
    with pytest.raises(UnknownOptionError) as excinfo:
        parse_command_args(main_cli, ["sub", "--verbose"])
    assert str(excinfo.value) == "sub: --verbose: unknown option"


def test_no_abbreviation(main_cli):
    with pytest.raises(UnknownOptionError):
        parse_command_args(main_cli, ["--verb"])


def test_missing_value(main_cli):
    with pytest.raises(MissingOptionValueError) as excinfo:
        parse_command_args(main_cli, ["sub", "--port"])
    assert excinfo.value.subject == "--port"
    assert excinfo.value.context == ["sub"]


def test_value_token_is_taken_verbatim():
    command = Command(name="c", options=[StringOption(name="name")])
    assert parse_command_args(command, ["--name", "--not-a-flag"]) == []
    assert command.options[0].value == "--not-a-flag"


def test_empty_equal_value():
    command = Command(name="c", options=[StringOption(name="name"), IntOption(name="n")])
    parse_command_args(command, ["--name="])
    assert command.options[0].value == ""
    with pytest.raises(InvalidOptionValueError) as excinfo:
        parse_command_args(command, ["--n="])
    assert str(excinfo.value) == "--n=: invalid syntax for int: ''"


@pytest.mark.parametrize(
    "token, expected",
    [("--debug", True), ("--debug=false", False), ("-d=0", False), ("-d", True)],
)
def test_bool_forms(token, expected):
    command = Command(name="c", options=[BoolOption(name="debug", short="d")])
    assert parse_command_args(command, [token, "rest"]) == ["rest"]
    assert command.options[0].value is expected


def test_bool_invalid_value():
    command = Command(name="c", options=[BoolOption(name="debug")])
    with pytest.raises(InvalidOptionValueError) as excinfo:
        parse_command_args(command, ["--debug=yes"])
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_first_declared_option_wins():
    command = Command(
        name="c",
        options=[StringOption(name="a", short="x"), StringOption(name="b", short="x")],
    )
    parse_command_args(command, ["-x", "1"])
    assert command.options[0].value == "1"
    assert command.options[1].value is None


def test_int_out_of_range():
    command = Command(name="c", options=[IntOption(name="n")])
    with pytest.raises(InvalidOptionValueError) as excinfo:
        parse_command_args(command, ["--n=99999999999999999999999"])
    assert str(excinfo.value) == (
        "--n=99999999999999999999999: value out of range for int: '99999999999999999999999'"
    )
    assert command.options[0].value is None
