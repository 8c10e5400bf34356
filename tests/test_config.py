import pytest

from simple_app.config import ConfigError, Settings


def test_defaults():
    settings = Settings.from_env({})
    assert settings.port == 3000
    assert settings.host == "0.0.0.0"


def test_port_from_env():
    assert Settings.from_env({"PORT": "8080"}).port == 8080
    assert Settings.from_env({"PORT": ""}).port == 3000
    assert Settings.from_env({"HOST": "127.0.0.1"}).host == "127.0.0.1"


@pytest.mark.parametrize("raw", ["abc", "-1", "70000", "80.5"])
def test_invalid_port(raw):
    with pytest.raises(ConfigError):
        Settings.from_env({"PORT": raw})
