import logging

import pytest

from treecli import BoolOption, Command, FloatOption, IntOption, StringOption

ENV_KEYS = (
    "VERBOSE",
    "PORT",
    "HOST_ADDR",
    "TREECLI_CONFIG",
    "TREECLI_LOG_MODE",
    "TREECLI_LOG_FILE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def restore_treecli_logger():
    log = logging.getLogger("treecli")
    handlers, level, propagate = list(log.handlers), log.level, log.propagate
    yield
    for handler in log.handlers:
        if handler not in handlers:
            handler.close()
    log.handlers[:] = handlers
    log.setLevel(level)
    log.propagate = propagate


@pytest.fixture
def main_cli() -> Command:
    return Command(
        name="main-cli",
        description="My awesome CLI tool.",
        options=[
            BoolOption(
                name="verbose",
                short="v",
                environment="VERBOSE",
                description="output verbose",
                default=False,
            ),
        ],
        subcommands=[
            Command(
                name="sub",
                aliases=["serve"],
                description="Run the server.",
                options=[
                    IntOption(
                        name="port",
                        short="p",
                        environment="PORT",
                        description="port to listen on",
                        default=8080,
                    ),
                    StringOption(name="host", environment="HOST_ADDR", default="localhost"),
                    FloatOption(name="ratio", default=0.5),
                ],
            ),
            Command(name="version", description="Show the version."),
        ],
    )
