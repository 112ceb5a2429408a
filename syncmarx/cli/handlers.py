import json
from typing import Optional, TextIO

import click

from syncmarx.core.storage import BaseStorageProvider, Credentials, StorageProviderFactory
from syncmarx.core.storage.exceptions import StorageProviderError
from syncmarx.utils.logger import get_logger

logger = get_logger(__name__)


def _authorized_provider(provider: str, access_token: str, refresh_token: str) -> BaseStorageProvider:
    storage = StorageProviderFactory.get_provider(provider)
    storage.authorize(Credentials(access_token=access_token, refresh_token=refresh_token))
    return storage


def _fail(message: str):
    click.echo(click.style(message, fg="red"), err=True)
    raise click.exceptions.Exit(1)


def list_handler(provider: str, access_token: str, refresh_token: str):
    """Handles the logic for the 'list' CLI command."""
    try:
        storage = _authorized_provider(provider, access_token, refresh_token)
        files = storage.files_list()
    except (StorageProviderError, ValueError) as e:
        logger.error(f"Listing files failed: {e}")
        _fail(f"Error: Failed to list files: {e}")

    if not files:
        click.echo("No files found.")
        return
    for record in files:
        click.echo(f"{record.logical_path}\t{record.id}")


def upload_handler(provider: str, access_token: str, refresh_token: str, path: str, source: TextIO, compress: bool):
    """Handles the logic for the 'upload' CLI command."""
    try:
        contents = json.load(source)
    except ValueError as e:
        _fail(f"Error: Source is not valid JSON: {e}")

    if not path.startswith('/'):
        click.echo(click.style(f"Warning: Path '{path}' has no leading '/'; it will not match listed files.", fg="yellow"), err=True)

    try:
        storage = _authorized_provider(provider, access_token, refresh_token)
        storage.file_upload(path, contents, compression=compress)
    except (StorageProviderError, ValueError) as e:
        logger.error(f"Upload of '{path}' failed: {e}")
        _fail(f"Error: Failed to upload '{path}': {e}")

    click.echo(click.style(f"Uploaded {path}" + (" (compressed)" if compress else ""), fg="green"))


def download_handler(provider: str, access_token: str, refresh_token: str, path: str, output: Optional[str]):
    """Handles the logic for the 'download' CLI command."""
    try:
        storage = _authorized_provider(provider, access_token, refresh_token)
        result = storage.file_download(path)
    except (StorageProviderError, ValueError) as e:
        logger.error(f"Download of '{path}' failed: {e}")
        _fail(f"Error: Failed to download '{path}': {e}")

    document = json.dumps(result.content, indent=2)
    if output:
        with open(output, 'w', encoding='utf-8') as f:
            f.write(document)
        click.echo(f"Saved {path} to {output}")
    else:
        click.echo(document)
    click.echo(f"Compressed: {'yes' if result.was_compressed else 'no'}", err=True)


def revoke_handler(provider: str, access_token: str, refresh_token: str):
    """Handles the logic for the 'revoke' CLI command."""
    try:
        storage = _authorized_provider(provider, access_token, refresh_token)
        storage.deauthorize()
    except (StorageProviderError, ValueError) as e:
        logger.error(f"Revoking credentials failed: {e}")
        _fail(f"Error: Failed to revoke credentials: {e}")

    click.echo(click.style("Credentials revoked.", fg="green"))
