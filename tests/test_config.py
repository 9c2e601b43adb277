"""Tests for pod configuration module."""

import json

from documents.config import Config


def test_config_creates_default_file(tmp_path):
    """Test that config file is created with defaults if missing."""
    config_path = tmp_path / '.podocs' / 'config.json'
    config = Config(config_path)

    assert config_path.exists()

    assert config.data['identity_provider'] == 'https://opencommons.net'
    assert config.data['pod_scheme'] == 'https'
    assert config.data['timeout'] == 30


def test_config_loads_existing_file(tmp_path):
    """Test loading existing config file."""
    config_path = tmp_path / '.podocs' / 'config.json'
    config_path.parent.mkdir(parents=True)

    with open(config_path, 'w') as f:
        json.dump({'identity_provider': 'https://solidcommunity.net/', 'timeout': 5}, f)

    config = Config(config_path)

    assert config.get_identity_provider() == 'https://solidcommunity.net'
    assert config.get_identity_provider_host() == 'solidcommunity.net'
    assert config.get_timeout() == 5
    assert config.get_pod_scheme() == 'https'


def test_config_handles_corrupted_file(tmp_path):
    """Test recovery from corrupted config file."""
    config_path = tmp_path / '.podocs' / 'config.json'
    config_path.parent.mkdir(parents=True)

    with open(config_path, 'w') as f:
        f.write('{ invalid json content')

    config = Config(config_path)
    assert config.get_identity_provider() == 'https://opencommons.net'

    backup_path = config_path.with_suffix('.json.bak')
    assert backup_path.exists()


def test_config_in_memory_overrides(tmp_path):
    """Test overrides without a config file."""
    config = Config(identity_provider='https://pods.example.org', pod_scheme='http')

    assert config.config_path is None
    assert config.get_identity_provider_host() == 'pods.example.org'
    assert config.get_pod_scheme() == 'http'
    assert list(tmp_path.iterdir()) == []


def test_config_save(temp_config):
    """Test saving changed values."""
    temp_config.data['timeout'] = 12
    temp_config.save()

    with open(temp_config.config_path, 'r') as f:
        assert json.load(f)['timeout'] == 12
