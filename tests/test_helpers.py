"""Tests for configuration loading and the logger."""

import pytest
import yaml

from virtinv.cli.helpers import DEFAULT_CONFIG, ConfigError, get_config
from virtinv.lib.log import Logger


@pytest.fixture(autouse=True)
def no_default_config(monkeypatch, tmp_path):
    monkeypatch.setenv("VIRTINV_CONFIG", str(tmp_path / "absent.yaml"))


def test_defaults_without_file():
    assert get_config() == DEFAULT_CONFIG


def test_config_file(tmp_path):
    cfgfile = tmp_path / "virtinv.yaml"
    cfgfile.write_text(
        yaml.safe_dump(
            {
                "report": {"storage_listing": "names", "show_xml": False},
                "log": {"dates": True, "debug": True},
            }
        )
    )

    config = get_config(str(cfgfile))

    assert config["storage_listing"] == "names"
    assert config["show_xml"] is False
    assert config["show_capabilities"] is True
    assert config["log_dates"] is True
    assert config["log_debug"] is True
    assert config["cfgfile"] == str(cfgfile)


def test_default_config_file_from_environment(monkeypatch, tmp_path):
    cfgfile = tmp_path / "env.yaml"
    cfgfile.write_text("report:\n  show_capabilities: false\n")
    monkeypatch.setenv("VIRTINV_CONFIG", str(cfgfile))

    assert get_config()["show_capabilities"] is False


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigError):
        get_config(str(tmp_path / "nope.yaml"))


@pytest.mark.parametrize(
    "content",
    ["report: [unclosed\n", "- just\n- a list\n", "report:\n  storage_listing: some\n"],
)
def test_invalid_config_file(tmp_path, content):
    cfgfile = tmp_path / "bad.yaml"
    cfgfile.write_text(content)

    with pytest.raises(ConfigError):
        get_config(str(cfgfile))


def test_empty_config_file(tmp_path):
    cfgfile = tmp_path / "empty.yaml"
    cfgfile.write_text("")

    assert get_config(str(cfgfile))["storage_listing"] == "all"


def test_logger_textual_prompts(capsys):
    logger = Logger({"log_colours": False, "log_dates": False})

    logger.out("connection lost", state="e")
    logger.out("hidden", state="d")
    logger.out("plain")

    assert capsys.readouterr().err == "failed: connection lost\nplain\n"


def test_logger_quiet_and_file(tmp_path, capsys):
    logfile = tmp_path / "virtinv.log"
    logger = Logger({"quiet": True, "log_debug": True, "log_file": str(logfile)})

    logger.out("checking", state="d", prefix="web01")
    logger.terminate()

    assert capsys.readouterr().err == ""
    assert logfile.read_text() == "debug: web01 - checking\n"
