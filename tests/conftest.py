import pytest

from bincodec.config import CONFIG_YAML_ENV_VAR, _reset_global_config


@pytest.fixture(autouse=True)
def clean_global_config(monkeypatch):
    # every test starts with the default global config, unless it sets the env var itself
    monkeypatch.delenv(CONFIG_YAML_ENV_VAR, raising=False)
    _reset_global_config()
    yield
    _reset_global_config()
