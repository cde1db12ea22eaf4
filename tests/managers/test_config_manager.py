"""
ConfigManager: YAML loading, includes, validation and fallback.
"""

import signal
import textwrap

import pytest

from appboot import Bootstrap
from appboot.managers.config_manager import ConfigManager, CONFIG_ENV_VAR
from appboot.models.enums import LogLevel
from appboot.models.errors import ConfigurationError
from appboot.utils.logger import get_logger


def write(path, content):
    path.write_text(textwrap.dedent(content), encoding="utf-8")
    return path


def test_factory_defaults(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
    settings = ConfigManager().load()

    assert settings.logging.level is LogLevel.INFO
    assert settings.lifecycle.should_exit_on_error is True
    assert settings.lifecycle.signals == [signal.SIGINT, signal.SIGTERM]
    assert settings.lifecycle.exit_on_interpreter_shutdown is True


def test_loads_custom_file(tmp_path):
    path = write(tmp_path / "app.yaml", """
        logging:
          level: debug
          colors: false
        lifecycle:
          should_exit_on_error: false
          signals: [term, SIGHUP]
    """)

    settings = ConfigManager(path).load()

    assert settings.logging.level is LogLevel.DEBUG
    assert settings.logging.colors is False
    assert settings.lifecycle.should_exit_on_error is False
    assert settings.lifecycle.signals == [signal.SIGTERM, signal.SIGHUP]


def test_env_var_selects_file(tmp_path, monkeypatch):
    path = write(tmp_path / "env.yaml", """
        lifecycle:
          signals: []
    """)
    monkeypatch.setenv(CONFIG_ENV_VAR, str(path))

    settings = ConfigManager().load()

    assert settings.lifecycle.signals == []


def test_includes_are_merged(tmp_path):
    write(tmp_path / "logging.yaml", """
        logging:
          level: WARN
    """)
    write(tmp_path / "lifecycle.yaml", """
        lifecycle:
          exit_on_interpreter_shutdown: false
    """)
    path = write(tmp_path / "main.yaml", """
        include:
          - logging.yaml
          - lifecycle.yaml
    """)

    settings = ConfigManager(path).load()

    assert settings.logging.level is LogLevel.WARN
    assert settings.lifecycle.exit_on_interpreter_shutdown is False


def test_missing_include_is_an_error(tmp_path):
    path = write(tmp_path / "main.yaml", """
        include:
          - nowhere.yaml
    """)

    with pytest.raises(ConfigurationError, match="nowhere.yaml"):
        ConfigManager(path).load()


def test_missing_file_falls_back_to_defaults(tmp_path, capsys):
    settings = ConfigManager(tmp_path / "absent.yaml").load()

    assert settings.lifecycle.should_exit_on_error is True
    assert "Falling back to factory defaults" in capsys.readouterr().out


@pytest.mark.parametrize("content", [
    "logging:\n  level: LOUD\n",
    "lifecycle:\n  signals: [SIGNOPE]\n",
    "lifecycle:\n  should_exit_on_error: [1, 2]\n",
    "- just\n- a list\n",
    "logging: [unclosed\n",
])
def test_invalid_files_raise(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")

    with pytest.raises(ConfigurationError):
        ConfigManager(path).load()


def test_bootstrap_from_config(tmp_path, terminate, restore_logger):
    path = write(tmp_path / "app.yaml", """
        logging:
          level: ERROR
          colors: false
        lifecycle:
          should_exit_on_error: false
          exit_on_interpreter_shutdown: false
    """)

    app = Bootstrap.from_config({"run": lambda: None}, config_path=path, terminate=terminate)

    assert app.should_exit_on_error is False
    assert get_logger().min_level is LogLevel.ERROR
    assert get_logger().use_colors is False
