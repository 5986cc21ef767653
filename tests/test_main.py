import json
import logging

from treecli.__main__ import EXIT_ERROR, EXIT_NO_CONFIG, EXIT_OK, main

CONFIG = """\
name: deploy
run_func: builtins.print
options:
  - name: verbose
    type: bool
    default: false
subcommands:
  - name: push
    options:
      - name: replicas
        type: int
        default: 1
"""


def test_main_without_config(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    assert main([]) == EXIT_NO_CONFIG
    assert "no treecli.yaml or treecli.toml found" in capsys.readouterr().err


def test_main_runs_root(tmp_path, monkeypatch, capsys):
    (tmp_path / "treecli.yaml").write_text(CONFIG)
    monkeypatch.chdir(tmp_path)
    assert main(["--verbose", "extra"]) == EXIT_OK
    assert "['extra']" in capsys.readouterr().out


def test_main_help(tmp_path, monkeypatch, capsys):
    config = tmp_path / "cli.yaml"
    config.write_text(CONFIG)
    monkeypatch.setenv("TREECLI_CONFIG", str(config))
    monkeypatch.chdir(tmp_path)
    assert main(["push", "--help"]) == EXIT_OK
    err = capsys.readouterr().err
    assert "deploy push [options]" in err
    assert "--replicas (default: 1)" in err


def test_main_reports_errors(tmp_path, monkeypatch, capsys):
    (tmp_path / "treecli.yaml").write_text(CONFIG)
    monkeypatch.chdir(tmp_path)
    assert main(["push", "--replicas", "many"]) == EXIT_ERROR
    assert capsys.readouterr().err.startswith(
        "error: deploy: failed to parse commands and options: deploy: push: "
        "--replicas: invalid syntax for int: 'many'"
    )


def test_main_missing_run_func(tmp_path, monkeypatch, capsys):
    (tmp_path / "treecli.yaml").write_text(CONFIG)
    monkeypatch.chdir(tmp_path)
    assert main(["push"]) == EXIT_ERROR
    assert "deploy push: command func not set" in capsys.readouterr().err


def test_main_json_log_mode(tmp_path, monkeypatch, capsys):
    (tmp_path / "treecli.yaml").write_text("name: deploy\nrun_func: no_such_module_xyz.run\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TREECLI_LOG_MODE", "json")

    assert main([]) == EXIT_ERROR
    lines = capsys.readouterr().err.splitlines()
    records = [json.loads(line) for line in lines if line.startswith("{")]
    assert records[0]["levelname"] == "ERROR"
    assert records[0]["name"] == "treecli"
    assert "no_such_module_xyz" in records[0]["message"]
    assert lines[-1].startswith("error: no_such_module_xyz.run: could not import")
    assert logging.getLogger("treecli").propagate is False


def test_main_invalid_log_mode(tmp_path, monkeypatch, capsys):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TREECLI_LOG_MODE", "xml")
    assert main([]) == EXIT_ERROR
    assert "Invalid log mode: xml" in capsys.readouterr().err
