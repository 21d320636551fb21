import json

import pytest

from termview import config
from termview.cancel import DEFAULT_INTERRUPT_TIMEOUT
from termview.config import (
    ConfigOptions,
    Option,
    config_options,
    is_writable,
    load_config,
    store_config,
)


@pytest.fixture(autouse=True)
def reset_config():
    yield
    config_options.reset()


def write_config(path, config):
    path.write_text(json.dumps(config))
    return str(path)


class TestConfigOptions:
    def test_value(self):
        assert config_options.loop is True
        assert config_options.interrupt_timeout == DEFAULT_INTERRUPT_TIMEOUT
        assert config_options["color mode"].value == "auto"

    def test_set_value(self):
        config_options.loop = False
        assert config_options["loop"].value is False
        assert config_options._loop is True

    def test_unknown(self):
        with pytest.raises(AttributeError):
            config_options.width
        with pytest.raises(AttributeError):
            config_options.width = 1

    def test_reset(self):
        options = ConfigOptions(speed=Option(1, lambda x: True, ""))
        options.speed = 2
        options.reset()
        assert options.speed == 1

    @pytest.mark.parametrize(
        "name,valid,invalid",
        [
            ("color mode", ["auto", "direct", "indexed"], ["", "kitty", None]),
            ("frame duration", [None, 0.01, 2.5], [0.0, -1.0, 1, "1"]),
            ("interrupt timeout", [0.5, 10.0], [None, 0.0, 1, "1"]),
            ("loop", [True, False], [None, 0, "yes"]),
            ("transparent", [True, False], [None, 1, "no"]),
        ],
    )
    def test_validation(self, name, valid, invalid):
        option = config_options[name]
        for value in valid:
            assert option.is_valid(value)
        for value in invalid:
            assert not option.is_valid(value)


class TestLoadConfig:
    def test_valid(self, tmp_path):
        file = write_config(
            tmp_path / "config.json",
            {"loop": False, "color mode": "indexed", "frame duration": 0.05},
        )
        assert load_config(file)
        assert config_options.loop is False
        assert config_options.color_mode == "indexed"
        assert config_options.frame_duration == 0.05

    def test_unknown_option(self, tmp_path, capsys):
        file = write_config(tmp_path / "config.json", {"speed": 2, "loop": False})
        assert load_config(file)
        assert "Unknown option 'speed'" in capsys.readouterr().err
        assert config_options.loop is False

    def test_invalid_value(self, tmp_path, capsys):
        config_options.transparent = True
        file = write_config(tmp_path / "config.json", {"transparent": "yes"})
        assert load_config(file)
        assert "Invalid type/value for 'transparent'" in capsys.readouterr().err
        assert config_options.transparent is True

    def test_not_an_object(self, tmp_path, capsys):
        file = write_config(tmp_path / "config.json", [1, 2])
        assert not load_config(file)
        assert "not a JSON object" in capsys.readouterr().err

    def test_malformed(self, tmp_path, capsys):
        file = tmp_path / "config.json"
        file.write_text("{'loop': false}")
        assert not load_config(str(file))
        assert "JSONDecodeError" in capsys.readouterr().err

    def test_missing(self, tmp_path, capsys):
        assert not load_config(str(tmp_path / "config.json"))
        assert "FileNotFoundError" in capsys.readouterr().err


class TestInitConfig:
    def test_user_file(self, tmp_path, monkeypatch):
        file = write_config(tmp_path / "user.json", {"loop": False})
        monkeypatch.setattr(config, "user_config_file", file)
        monkeypatch.setattr(config, "xdg_config_file", str(tmp_path / "none.json"))
        config.init_config()
        assert config_options.loop is False

    def test_xdg(self, tmp_path, monkeypatch):
        system_dir = tmp_path / "etc"
        (system_dir / "termview").mkdir(parents=True)
        write_config(
            system_dir / "termview" / "config.json",
            {"loop": False, "transparent": True},
        )
        user_file = write_config(tmp_path / "config.json", {"transparent": False})
        monkeypatch.setenv("XDG_CONFIG_DIRS", f"relative/dir:{system_dir}")
        monkeypatch.setattr(config, "user_config_file", None)
        monkeypatch.setattr(config, "xdg_config_file", user_file)
        config.init_config()
        assert config_options.loop is False
        # The user's file takes precedence
        assert config_options.transparent is False


class TestStoreConfig:
    def test_non_defaults_only(self, tmp_path):
        config_options.loop = False
        config_options.interrupt_timeout = 3.0
        file = tmp_path / "dir" / "config.json"
        assert store_config(str(file))
        assert json.loads(file.read_text()) == {
            "interrupt timeout": 3.0,
            "loop": False,
        }

    def test_unwritable(self, tmp_path, capsys):
        parent = tmp_path / "file"
        parent.write_text("")
        assert not store_config(str(parent / "config.json"))
        assert "Failed to write user config" in capsys.readouterr().err


class TestIsWritable:
    def test_file(self, tmp_path):
        file = tmp_path / "file"
        file.write_text("")
        assert is_writable(file)

    def test_creatable(self, tmp_path):
        assert is_writable(tmp_path / "a" / "b" / "file")

    def test_directory(self, tmp_path):
        assert not is_writable(tmp_path)

    def test_parent_is_file(self, tmp_path):
        file = tmp_path / "file"
        file.write_text("")
        assert not is_writable(file / "child")
