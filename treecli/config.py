# Treecli CLI Framework — (c) 2025 rtj.dev LLC — MIT Licensed
"""config.py
Configuration loader for treecli command trees.

A tree can be declared in YAML or TOML instead of Python:

    name: deploy
    description: Deploy services.
    options:
      - name: verbose
        short: v
        type: bool
        environment: DEPLOY_VERBOSE
        default: false
    subcommands:
      - name: push
        run_func: my_project.cli.push
        options:
          - name: replicas
            type: int
            default: 1

Function fields (`run_func`, `pre_run_func`, `post_run_func`, `usage_func`) are
dotted import paths. Option `type` is one of `string`, `bool`, `int`, `float`.
"""
from __future__ import annotations

import importlib
import os
from pathlib import Path
from typing import Any, Callable, Literal

import toml
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from treecli.command import Command
from treecli.exceptions import ConfigError
from treecli.logger import logger
from treecli.option import BaseOption, BoolOption, FloatOption, IntOption, StringOption

MAX_DEPTH = 10

CONFIG_FILENAMES = (
    "treecli.yaml",
    "treecli.yml",
    "treecli.toml",
    ".treecli.yaml",
    ".treecli.toml",
)

OPTION_KINDS: dict[str, type[BaseOption]] = {
    "string": StringOption,
    "bool": BoolOption,
    "int": IntOption,
    "float": FloatOption,
}


def import_action(dotted_path: str) -> Callable[..., Any]:
    """Dynamically imports a callable from a dotted path like 'my.module.func'."""
    module_path, _, attr = dotted_path.rpartition(".")
    if not module_path:
        raise ConfigError(dotted_path, "invalid import path")
    try:
        module = importlib.import_module(module_path)
    except ModuleNotFoundError as error:
        logger.error("Failed to import module '%s': %s", module_path, error)
        raise ConfigError(dotted_path, f"could not import: {error}") from error
    try:
        action = getattr(module, attr)
    except AttributeError as error:
        logger.error("Module '%s' does not have attribute '%s'", module_path, attr)
        raise ConfigError(dotted_path, f"module has no attribute '{attr}'") from error
    if not callable(action):
        raise ConfigError(dotted_path, "not callable")
    return action


class RawOption(BaseModel):
    """Raw option entry of a treecli configuration file."""

    name: str = ""
    short: str = ""
    environment: str = ""
    description: str = ""
    type: Literal["string", "bool", "int", "float"] = "string"
    default: str | bool | int | float | None = None

    model_config = ConfigDict(extra="forbid")

    def to_option(self) -> BaseOption:
        option_cls = OPTION_KINDS[self.type]
        return option_cls(
            name=self.name,
            short=self.short,
            environment=self.environment,
            description=self.description,
            default=self.default,
        )


class RawCommand(BaseModel):
    """Raw command entry of a treecli configuration file."""

    name: str
    description: str = ""
    aliases: list[str] = Field(default_factory=list)
    usage: str = ""
    usage_func: str | None = None
    pre_run_func: str | None = None
    run_func: str | None = None
    post_run_func: str | None = None
    options: list[RawOption] = Field(default_factory=list)
    subcommands: list[RawCommand] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    def to_command(self, depth: int = 0) -> Command:
        if depth > MAX_DEPTH:
            raise ConfigError(self.name, f"maximum subcommand depth exceeded ({MAX_DEPTH})")
        functions = {
            field: import_action(path)
            for field in ("usage_func", "pre_run_func", "run_func", "post_run_func")
            if (path := getattr(self, field))
        }
        try:
            return Command(
                name=self.name,
                description=self.description,
                aliases=self.aliases,
                usage=self.usage,
                options=[option.to_option() for option in self.options],
                subcommands=[sub.to_command(depth + 1) for sub in self.subcommands],
                **functions,
            )
        except ValidationError as error:
            raise ConfigError(self.name, str(error)) from error


def find_config(cwd: Path | None = None) -> Path | None:
    """Return the first existing config file: `TREECLI_CONFIG`, then the cwd."""
    env_path = os.environ.get("TREECLI_CONFIG")
    if env_path and Path(env_path).is_file():
        return Path(env_path)
    cwd = cwd or Path.cwd()
    return next(
        (cwd / name for name in CONFIG_FILENAMES if (cwd / name).is_file()), None
    )


def load_raw_config(path: Path) -> dict[str, Any]:
    suffix = path.suffix
    with path.open("r", encoding="UTF-8") as config_file:
        try:
            if suffix in (".yaml", ".yml"):
                raw_config = yaml.safe_load(config_file)
            elif suffix == ".toml":
                raw_config = toml.load(config_file)
            else:
                raise ConfigError(str(path), f"unsupported config format: {suffix}")
        except (yaml.YAMLError, toml.TomlDecodeError) as error:
            raise ConfigError(str(path), f"could not be parsed: {error}") from error

    if not isinstance(raw_config, dict):
        raise ConfigError(
            str(path), "configuration must be a mapping describing the root command"
        )
    return raw_config


def loader(file_path: Path | str) -> Command:
    """
    Load a command tree from a YAML or TOML file.

    Args:
        file_path (Path | str): Path to the config file.

    Returns:
        Command: The root command.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigError: If the file cannot be parsed or does not describe a valid tree.
    """
    if not isinstance(file_path, (str, Path)):
        raise TypeError("file_path must be a string or Path object.")

    path = Path(file_path)
    if not path.is_file():
        raise FileNotFoundError(f"No such config file: {file_path}")

    raw_config = load_raw_config(path)
    try:
        raw_command = RawCommand.model_validate(raw_config)
    except ValidationError as error:
        raise ConfigError(str(path), str(error)) from error

    command = raw_command.to_command()
    logger.debug("Loaded command tree '%s' from %s", command.name, path)
    return command
