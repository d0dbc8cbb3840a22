import pytest
from pydantic import ValidationError

from bincodec import Config, Endianness, IntEncoding, encode, get_global_config, load_config_yaml
from bincodec.config import CONFIG_YAML_ENV_VAR, DEFAULT_CONFIG


def test_defaults() -> None:
    config = Config()
    assert config == DEFAULT_CONFIG
    assert config.endianness is Endianness.LITTLE
    assert config.int_encoding is IntEncoding.FIXED
    assert config.size_limit is None
    assert config.allow_trailing_bytes is False
    assert config.max_depth is None
    assert config.byteorder == 'little'
    assert not config.is_varint


def test_builders_return_new_instances() -> None:
    config = DEFAULT_CONFIG.with_big_endian().with_variable_int_encoding().with_limit(10).allow_trailing()
    assert config.endianness is Endianness.BIG
    assert config.byteorder == 'big'
    assert config.is_varint
    assert config.size_limit == 10
    assert config.allow_trailing_bytes
    # the original is untouched
    assert DEFAULT_CONFIG == Config()

    back = config.with_little_endian().with_fixed_int_encoding().with_no_limit().reject_trailing()
    assert back == DEFAULT_CONFIG

    assert DEFAULT_CONFIG.with_max_depth(3).max_depth == 3
    assert DEFAULT_CONFIG.with_max_depth(3).with_no_max_depth().max_depth is None


def test_config_is_frozen() -> None:
    with pytest.raises(ValidationError):
        DEFAULT_CONFIG.size_limit = 3  # type: ignore[misc]


@pytest.mark.parametrize('kwargs', [
    dict(size_limit=-1),
    dict(max_depth=0),
    dict(endianness='middle'),
    dict(unknown_option=True),
])
def test_invalid_values(kwargs: dict) -> None:
    with pytest.raises(ValidationError):
        Config(**kwargs)


def test_builder_validates() -> None:
    with pytest.raises(ValidationError):
        DEFAULT_CONFIG.with_limit(-5)


def test_load_yaml_with_extends(tmp_path) -> None:
    base = tmp_path / 'base.yml'
    base.write_text('endianness: big\nint_encoding: variable\nsize_limit: 100\n')
    child = tmp_path / 'child.yml'
    child.write_text('extends: base.yml\nsize_limit: 50\n')

    config = load_config_yaml(child)
    assert config.endianness is Endianness.BIG
    assert config.int_encoding is IntEncoding.VARIABLE
    assert config.size_limit == 50


def test_load_yaml_with_chained_extends(tmp_path) -> None:
    (tmp_path / 'base.yml').write_text('endianness: big\nsize_limit: 100\n')
    (tmp_path / 'middle.yml').write_text('extends: base.yml\nint_encoding: variable\n')
    (tmp_path / 'child.yml').write_text('extends: middle.yml\nsize_limit: 50\n')

    config = load_config_yaml(tmp_path / 'child.yml')
    assert config.endianness is Endianness.BIG
    assert config.int_encoding is IntEncoding.VARIABLE
    assert config.size_limit == 50


def test_load_yaml_rejects_extends_cycle(tmp_path) -> None:
    (tmp_path / 'a.yml').write_text('extends: b.yml\n')
    (tmp_path / 'b.yml').write_text('extends: a.yml\n')
    with pytest.raises(ValueError, match='extended more than once'):
        load_config_yaml(tmp_path / 'a.yml')


def test_load_yaml_rejects_missing_base(tmp_path) -> None:
    (tmp_path / 'child.yml').write_text('extends: nowhere.yml\n')
    with pytest.raises(ValueError, match='is not a file'):
        load_config_yaml(tmp_path / 'child.yml')


def test_load_yaml_rejects_unknown_keys(tmp_path) -> None:
    path = tmp_path / 'bad.yml'
    path.write_text('size_limt: 10\n')
    with pytest.raises(ValidationError):
        load_config_yaml(path)


def test_global_config_defaults() -> None:
    assert get_global_config() is DEFAULT_CONFIG
    assert encode(1).hex() == '0100000000000000'


def test_global_config_from_env(tmp_path, monkeypatch) -> None:
    path = tmp_path / 'bincodec.yml'
    path.write_text('int_encoding: variable\n')
    monkeypatch.setenv(CONFIG_YAML_ENV_VAR, str(path))

    config = get_global_config()
    assert config.is_varint
    assert get_global_config() is config
    # entry points use the global config when none is given
    assert encode(1).hex() == '02'
    assert encode(1, DEFAULT_CONFIG).hex() == '0100000000000000'


def test_global_config_cannot_change_source(tmp_path, monkeypatch) -> None:
    get_global_config()
    path = tmp_path / 'other.yml'
    path.write_text('endianness: big\n')
    monkeypatch.setenv(CONFIG_YAML_ENV_VAR, str(path))
    with pytest.raises(Exception, match='different file'):
        get_global_config()
