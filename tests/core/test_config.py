import pytest
import yaml
from graphcycle.core.config import Config, load_config


def test_load_config_defaults():
    config = load_config()
    assert config == Config()
    assert config.output_format == 'text'
    assert config.deduplicate_edges is False


def test_load_config_from_file(tmp_path):
    path = tmp_path / 'graphcycle.yaml'
    path.write_text(
        'verbosity: 2\n'
        'json_logs: true\n'
        'deduplicate_edges: true\n'
        'output_format: json\n'
    )
    config = load_config(str(path))
    assert config.verbosity == 2
    assert config.json_logs is True
    assert config.deduplicate_edges is True
    assert config.output_format == 'json'


def test_load_config_empty_file(tmp_path):
    path = tmp_path / 'empty.yaml'
    path.write_text('')
    assert load_config(str(path)) == Config()


def test_load_config_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_config(str(tmp_path / 'missing.yaml'))


def test_load_config_invalid_yaml(tmp_path):
    path = tmp_path / 'bad.yaml'
    path.write_text('verbosity: [1, 2\n')
    with pytest.raises(yaml.YAMLError):
        load_config(str(path))


def test_unknown_output_format(tmp_path):
    path = tmp_path / 'graphcycle.yaml'
    path.write_text('output_format: xml\n')
    with pytest.raises(ValueError):
        load_config(str(path))


def test_config_must_be_mapping(tmp_path):
    path = tmp_path / 'list.yaml'
    path.write_text('- verbosity\n')
    with pytest.raises(ValueError):
        load_config(str(path))


def test_null_settings_use_defaults(tmp_path):
    path = tmp_path / 'graphcycle.yaml'
    path.write_text('verbosity:\njson_logs:\noutput_format:\n')
    assert load_config(str(path)) == Config()


def test_numeric_string_verbosity(tmp_path):
    path = tmp_path / 'graphcycle.yaml'
    path.write_text('verbosity: "2"\n')
    assert load_config(str(path)).verbosity == 2


@pytest.mark.parametrize('line', [
    'verbosity: [1]',
    'verbosity: loud',
    'verbosity: -1',
    'verbosity: true',
    'json_logs: "false"',
    'json_logs: 1',
    'deduplicate_edges: "yes"',
    'output_format: [json]',
])
def test_bad_setting_types(tmp_path, line):
    path = tmp_path / 'graphcycle.yaml'
    path.write_text(line + '\n')
    with pytest.raises(ValueError):
        load_config(str(path))


def test_config_not_utf8(tmp_path):
    path = tmp_path / 'graphcycle.yaml'
    path.write_bytes(b'output_format: \xff\xfe\n')
    with pytest.raises(ValueError):
        load_config(str(path))
