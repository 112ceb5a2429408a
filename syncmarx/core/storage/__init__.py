from .base_storage_provider import BaseStorageProvider
from .google_drive import GoogleDriveStorage
from .models import Credentials, DownloadResult, RemoteFileRecord, UploadRequest
from .provider_factory import StorageProviderFactory

__all__ = [
    'BaseStorageProvider',
    'GoogleDriveStorage',
    'StorageProviderFactory',
    'Credentials',
    'DownloadResult',
    'RemoteFileRecord',
    'UploadRequest',
]
