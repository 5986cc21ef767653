import os
from pathlib import Path

import pytest

from treecli import BoolOption, FloatOption, IntOption, StringOption
from treecli.config import MAX_DEPTH, find_config, import_action, loader
from treecli.exceptions import ConfigError

YAML_CONFIG = """\
name: deploy
description: Deploy services.
aliases: [dp]
run_func: builtins.print
options:
  - name: verbose
    short: v
    type: bool
    environment: DEPLOY_VERBOSE
    default: false
subcommands:
  - name: push
    usage_func: builtins.print
    options:
      - name: replicas
        type: int
        default: 2
      - name: ratio
        type: float
        default: 1
      - name: region
"""

TOML_CONFIG = """\
name = "deploy"
run_func = "os.getcwd"

[[options]]
name = "verbose"
type = "bool"
default = true

[[subcommands]]
name = "push"
"""


def test_import_action():
    assert import_action("os.getcwd") is os.getcwd


@pytest.mark.parametrize(
    "path, reason",
    [
        ("getcwd", "invalid import path"),
        ("no_such_module_xyz.func", "could not import"),
        ("os.no_such_attr", "has no attribute"),
        ("os.sep", "not callable"),
    ],
)
def test_import_action_errors(path, reason):
    with pytest.raises(ConfigError, match=reason):
        import_action(path)


def test_loader_yaml(tmp_path):
    config = tmp_path / "treecli.yaml"
    config.write_text(YAML_CONFIG)

    root = loader(config)
    assert root.name == "deploy"
    assert root.aliases == ["dp"]
    assert root.run_func is print
    assert isinstance(root.options[0], BoolOption)
    assert root.options[0].default is False

    push = root.subcommands[0]
    assert push.usage_func is print
    replicas, ratio, region = push.options
    assert isinstance(replicas, IntOption) and replicas.default == 2
    assert isinstance(ratio, FloatOption) and ratio.default == 1.0
    assert isinstance(region, StringOption) and not region.has_default()

    root.parse(["deploy", "push", "--region", "eu"], environ={"DEPLOY_VERBOSE": "1"})
    assert root.get_option_bool("verbose") is True
    assert root.get_option_string("region") == "eu"


def test_loader_toml(tmp_path):
    config = tmp_path / "treecli.toml"
    config.write_text(TOML_CONFIG)

    root = loader(str(config))
    assert root.run_func is os.getcwd
    assert root.options[0].default is True
    assert [sub.name for sub in root.subcommands] == ["push"]


def test_loader_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        loader(tmp_path / "missing.yaml")


def test_loader_bad_path_type():
    with pytest.raises(TypeError):
        loader(42)


@pytest.mark.parametrize(
    "filename, content, reason",
    [
        ("treecli.json", "{}", "unsupported config format"),
        ("treecli.yaml", "- a\n- b\n", "must be a mapping"),
        ("treecli.yaml", "name: [unclosed\n", "could not be parsed"),
        ("treecli.toml", "name = \n", "could not be parsed"),
        ("treecli.yaml", "description: no name\n", "name"),
        ("treecli.yaml", "name: x\nunknown: 1\n", "unknown"),
        ("treecli.yaml", "name: x\noptions:\n  - name: a\n    type: list\n", "type"),
        ("treecli.yaml", "name: x\noptions:\n  - name: a\n    default: 5\n", "valid string"),
    ],
)
def test_loader_invalid(tmp_path, filename, content, reason):
    config = tmp_path / filename
    config.write_text(content)
    with pytest.raises(ConfigError, match=reason):
        loader(config)


def test_loader_depth_limit(tmp_path):
    lines = []
    for depth in range(MAX_DEPTH + 2):
        indent = "  " * depth
        prefix = "" if depth == 0 else f"{indent[:-2]}- "
        if depth:
            lines.append(f"{indent[:-2]}subcommands:")
        lines.append(f"{prefix}name: level{depth}")
    config = tmp_path / "treecli.yaml"
    config.write_text("\n".join(lines) + "\n")
    with pytest.raises(ConfigError, match="maximum subcommand depth"):
        loader(config)


def test_find_config_in_cwd(tmp_path):
    assert find_config(tmp_path) is None
    (tmp_path / ".treecli.toml").write_text(TOML_CONFIG)
    assert find_config(tmp_path) == tmp_path / ".treecli.toml"
    (tmp_path / "treecli.yaml").write_text(YAML_CONFIG)
    assert find_config(tmp_path) == tmp_path / "treecli.yaml"


def test_find_config_from_environment(tmp_path, monkeypatch):
    config = tmp_path / "custom.toml"
    config.write_text(TOML_CONFIG)
    monkeypatch.setenv("TREECLI_CONFIG", str(config))
    assert find_config(tmp_path / "elsewhere") == Path(config)
