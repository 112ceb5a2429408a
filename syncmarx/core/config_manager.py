import configparser
import os
from typing import Optional

from syncmarx.utils.logger import get_logger

SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.dirname(os.path.dirname(SCRIPT_DIR)) # Up two levels from core/ to the project root
DEFAULT_WORKSPACE_PATH = os.path.join(PROJECT_ROOT, 'workspace')
CONFIG_DIR_NAME = 'config'
CONFIG_FILE_NAME = 'settings.ini'

ENVIRONMENTS = ('production', 'development')
DEFAULT_ENVIRONMENT = 'production'
DEFAULT_PRODUCTION_REFRESH_URL = 'https://syncmarx.gregmcleod.com/auth/googledrive/refreshtoken'
DEFAULT_DEVELOPMENT_REFRESH_URL = 'http://localhost:1800/auth/googledrive/refreshtoken'

logger = get_logger(__name__)


def _default_config() -> configparser.ConfigParser:
    config = configparser.ConfigParser()
    config['GoogleDrive'] = {
        'environment': DEFAULT_ENVIRONMENT,
        'production_refresh_url': DEFAULT_PRODUCTION_REFRESH_URL,
        'development_refresh_url': DEFAULT_DEVELOPMENT_REFRESH_URL,
    }
    config['Encryption'] = {'secret': ''}
    return config


class ConfigManager:
    def __init__(self, config_file_path=None):
        self.workspace_path = self.get_workspace_path()
        self.config_file_path = config_file_path or os.path.join(self.workspace_path, CONFIG_DIR_NAME, CONFIG_FILE_NAME)
        self.config = configparser.ConfigParser()
        self._load_config()

    def _load_config(self):
        """Loads the configuration from the INI file, writing a default one if it is missing."""
        if not os.path.exists(self.config_file_path):
            logger.warning(f"Config file not found at {self.config_file_path}. Creating a default config.")
            self.config = _default_config()
            try:
                os.makedirs(os.path.dirname(self.config_file_path), exist_ok=True)
                with open(self.config_file_path, 'w') as configfile:
                    self.config.write(configfile)
                logger.info(f"Created a default config file at: {self.config_file_path}")
            except OSError as e:
                logger.error(f"Error creating default config file: {e}. Using hardcoded defaults.", exc_info=True)
            return

        self.config.read(self.config_file_path)

        # Fill in sections/options an older or hand-written file may lack
        for section, options in _default_config().items():
            if section == configparser.DEFAULTSECT:
                continue
            if not self.config.has_section(section):
                self.config.add_section(section)
                logger.info(f"Added missing [{section}] section to the config.")
            for option, value in options.items():
                if not self.config.has_option(section, option):
                    self.config.set(section, option, value)

    @staticmethod
    def get_workspace_path() -> str:
        """
        Returns the workspace path; the default settings.ini lives under it.
        Priority:
        1. SYNCMARX_WORKSPACE_ROOT environment variable.
        2. Default workspace path inside the project.
        """
        env_workspace_path = os.getenv('SYNCMARX_WORKSPACE_ROOT')
        if env_workspace_path:
            logger.debug(f"Using workspace path from SYNCMARX_WORKSPACE_ROOT: {env_workspace_path}")
            return os.path.abspath(env_workspace_path)
        return os.path.abspath(DEFAULT_WORKSPACE_PATH)

    def get_setting(self, section: str, option: str, fallback=None) -> Optional[str]:
        """Gets a specific setting from the configuration."""
        try:
            return self.config.get(section, option, fallback=fallback)
        except (configparser.NoSectionError, configparser.NoOptionError):
            return fallback

    def get_environment(self) -> str:
        """
        Returns the deployment environment, 'production' or 'development'.
        SYNCMARX_ENVIRONMENT takes precedence over the config file.
        """
        environment = os.getenv('SYNCMARX_ENVIRONMENT') or self.get_setting('GoogleDrive', 'environment', DEFAULT_ENVIRONMENT)
        environment = environment.strip().lower()
        if environment not in ENVIRONMENTS:
            raise ValueError(f"Unknown environment '{environment}'. Expected one of: {', '.join(ENVIRONMENTS)}.")
        return environment

    def get_refresh_token_url(self) -> str:
        """Returns the token refresh proxy URL for the configured environment."""
        environment = self.get_environment()
        if environment == 'production':
            return self.get_setting('GoogleDrive', 'production_refresh_url', DEFAULT_PRODUCTION_REFRESH_URL)
        return self.get_setting('GoogleDrive', 'development_refresh_url', DEFAULT_DEVELOPMENT_REFRESH_URL)

    def get_encryption_secret(self) -> Optional[str]:
        """Returns the secret used to encrypt compressed files, or None if unset."""
        secret = os.getenv('SYNCMARX_ENCRYPTION_SECRET') or self.get_setting('Encryption', 'secret', '')
        if not secret or not secret.strip():
            logger.warning("Encryption secret is not configured.")
            return None
        return secret
