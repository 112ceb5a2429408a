from typing import Optional

import requests

from .base_storage_provider import BaseStorageProvider
from .exceptions import UnsupportedProviderError
from .google_drive import GoogleDriveStorage
from syncmarx.core.config_manager import ConfigManager


class StorageProviderFactory:
    """
    Factory class to build a configured storage provider from its type name.
    """

    @staticmethod
    def get_provider(provider_type: str, config_manager: Optional[ConfigManager] = None,
                     session: Optional[requests.Session] = None) -> BaseStorageProvider:
        """
        Returns an unauthorized instance of the provider registered under `provider_type`.

        Raises:
            UnsupportedProviderError: If no provider has that type.
            ValueError: If `provider_type` is empty.
        """
        if not provider_type:
            raise ValueError("Provider type cannot be empty.")

        config_manager = config_manager or ConfigManager()

        if provider_type.lower() == 'googledrive':
            return GoogleDriveStorage(
                refresh_url=config_manager.get_refresh_token_url(),
                encryption_secret=config_manager.get_encryption_secret(),
                session=session,
            )
        raise UnsupportedProviderError(f"Storage provider not supported: {provider_type}")
