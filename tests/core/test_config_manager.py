import configparser
import os
import pytest
from unittest import mock

from syncmarx.core.config_manager import (
    ConfigManager,
    DEFAULT_DEVELOPMENT_REFRESH_URL,
    DEFAULT_PRODUCTION_REFRESH_URL,
)


@pytest.fixture
def temp_config_file(request, isolated_workspace):
    """
    Creates a temporary config file for testing.
    The content of the config file can be customized by passing a dictionary
    to `request.param`.
    """
    config_content = getattr(request, "param", {})
    config = configparser.ConfigParser()

    for section, options in config_content.items():
        config[section] = options

    config_path = os.path.join(isolated_workspace, "test_settings.ini")
    with open(config_path, 'w') as configfile:
        config.write(configfile)
    return config_path

def test_load_config_file_not_found_creates_default(isolated_workspace):
    """Test that a default config is created if the config file is not found."""
    config_path = os.path.join(isolated_workspace, "config", "settings.ini")

    cm = ConfigManager(config_file_path=config_path)

    assert os.path.exists(config_path)
    assert cm.config.get('GoogleDrive', 'environment') == 'production'

    reloaded = configparser.ConfigParser()
    reloaded.read(config_path)
    assert reloaded.get('GoogleDrive', 'production_refresh_url') == DEFAULT_PRODUCTION_REFRESH_URL


def test_default_config_path_is_inside_workspace_root(isolated_workspace):
    """Test that ConfigManager() without a path writes settings.ini under SYNCMARX_WORKSPACE_ROOT."""
    cm = ConfigManager()

    expected_path = os.path.join(os.path.abspath(isolated_workspace), "config", "settings.ini")
    assert cm.config_file_path == expected_path
    assert os.path.exists(expected_path)


def test_default_config_path_without_env_var_uses_default_workspace(monkeypatch, isolated_workspace):
    default_workspace = os.path.join(isolated_workspace, "default-workspace")
    monkeypatch.delenv('SYNCMARX_WORKSPACE_ROOT')

    with mock.patch('syncmarx.core.config_manager.DEFAULT_WORKSPACE_PATH', default_workspace):
        cm = ConfigManager()

    assert cm.workspace_path == os.path.abspath(default_workspace)
    assert os.path.exists(os.path.join(default_workspace, "config", "settings.ini"))


def test_get_workspace_path_from_env_var(monkeypatch, isolated_workspace):
    """Test that workspace path is taken from environment variable if set."""
    monkeypatch.setenv('SYNCMARX_WORKSPACE_ROOT', isolated_workspace)
    cm = ConfigManager(config_file_path=os.path.join(isolated_workspace, "settings.ini"))
    assert cm.get_workspace_path() == os.path.abspath(isolated_workspace)

@pytest.mark.parametrize("temp_config_file", [{
    'GoogleDrive': {'environment': 'development'},
}], indirect=True)
def test_incomplete_config_gets_missing_defaults(temp_config_file):
    cm = ConfigManager(config_file_path=temp_config_file)
    assert cm.config.has_section('GoogleDrive')
    assert cm.config.has_section('Encryption')
    assert cm.get_environment() == 'development'
    assert cm.get_refresh_token_url() == DEFAULT_DEVELOPMENT_REFRESH_URL

def test_refresh_url_defaults_to_production(temp_config_file):
    cm = ConfigManager(config_file_path=temp_config_file)
    assert cm.get_environment() == 'production'
    assert cm.get_refresh_token_url() == DEFAULT_PRODUCTION_REFRESH_URL

@pytest.mark.parametrize("temp_config_file", [{
    'GoogleDrive': {
        'environment': 'production',
        'production_refresh_url': 'https://sync.example.com/refresh',
        'development_refresh_url': 'http://127.0.0.1:9000/refresh',
    },
}], indirect=True)
def test_environment_variable_overrides_config(temp_config_file, monkeypatch):
    cm = ConfigManager(config_file_path=temp_config_file)
    assert cm.get_refresh_token_url() == 'https://sync.example.com/refresh'

    monkeypatch.setenv('SYNCMARX_ENVIRONMENT', ' Development ')
    assert cm.get_refresh_token_url() == 'http://127.0.0.1:9000/refresh'

def test_unknown_environment_raises(temp_config_file, monkeypatch):
    monkeypatch.setenv('SYNCMARX_ENVIRONMENT', 'staging')
    cm = ConfigManager(config_file_path=temp_config_file)
    with pytest.raises(ValueError):
        cm.get_refresh_token_url()

@pytest.mark.parametrize("temp_config_file", [{
    'Encryption': {'secret': 'from-config'},
}], indirect=True)
def test_get_encryption_secret(temp_config_file, monkeypatch):
    cm = ConfigManager(config_file_path=temp_config_file)
    assert cm.get_encryption_secret() == 'from-config'

    monkeypatch.setenv('SYNCMARX_ENCRYPTION_SECRET', 'from-env')
    assert cm.get_encryption_secret() == 'from-env'

@pytest.mark.parametrize("temp_config_file", [{
    'Encryption': {'secret': '   '},
}], indirect=True)
def test_get_encryption_secret_blank_is_none(temp_config_file):
    cm = ConfigManager(config_file_path=temp_config_file)
    assert cm.get_encryption_secret() is None

@pytest.mark.parametrize("temp_config_file", [{
    'Logging': {'level': 'DEBUG'}
}], indirect=True)
def test_get_setting(temp_config_file):
    """Test getting a specific setting."""
    cm = ConfigManager(config_file_path=temp_config_file)
    assert cm.get_setting('Logging', 'level') == 'DEBUG'

def test_get_setting_fallback(temp_config_file):
    """Test fallback for get_setting."""
    cm = ConfigManager(config_file_path=temp_config_file)
    assert cm.get_setting('NonExistentSection', 'non_existent_option', fallback='default_value') == 'default_value'

def test_config_manager_handles_ioerror_on_default_creation(isolated_workspace):
    """Test that ConfigManager keeps hardcoded defaults when the default config file cannot be written."""
    config_path = os.path.join(isolated_workspace, "settings.ini")

    with mock.patch('builtins.open', mock.mock_open()) as mocked_open:
        mocked_open.side_effect = IOError("Permission denied")
        cm = ConfigManager(config_file_path=config_path)

    assert not os.path.exists(config_path)
    assert cm.get_refresh_token_url() == DEFAULT_PRODUCTION_REFRESH_URL
