import click
from typing import Optional

from syncmarx.cli.handlers import download_handler, list_handler, revoke_handler, upload_handler

TOKEN_OPTIONS = [
    click.option('--access-token', envvar='SYNCMARX_ACCESS_TOKEN', required=True,
                 help='OAuth access token. Defaults to $SYNCMARX_ACCESS_TOKEN.'),
    click.option('--refresh-token', envvar='SYNCMARX_REFRESH_TOKEN', required=True,
                 help='OAuth refresh token. Defaults to $SYNCMARX_REFRESH_TOKEN.'),
    click.option('--provider', default='googledrive', type=click.Choice(['googledrive'], case_sensitive=False),
                 help='Storage provider to use. Default: googledrive'),
]


def token_options(func):
    for option in reversed(TOKEN_OPTIONS):
        func = option(func)
    return func


@click.group()
def syncmarx():
    """Inspect and manage files stored by syncmarx in remote storage."""
    pass

@syncmarx.command(name='list')
@token_options
def list_command(access_token: str, refresh_token: str, provider: str):
    """Lists the files stored in the application folder."""
    list_handler(provider=provider, access_token=access_token, refresh_token=refresh_token)

@syncmarx.command()
@click.argument('path')
@click.argument('source', type=click.File('r', encoding='utf-8'))
@click.option('--compress', is_flag=True, default=False, help='Compress and encrypt the stored file.')
@token_options
def upload(path: str, source, compress: bool, access_token: str, refresh_token: str, provider: str):
    """
    Uploads the JSON document in SOURCE to the logical PATH (e.g. /bookmarks.json).

    Use '-' as SOURCE to read from stdin.
    """
    upload_handler(
        provider=provider,
        access_token=access_token,
        refresh_token=refresh_token,
        path=path,
        source=source,
        compress=compress
    )

@syncmarx.command()
@click.argument('path')
@click.option('--output', default=None, type=click.Path(dir_okay=False), help='Write the document to a file instead of stdout.')
@token_options
def download(path: str, output: Optional[str], access_token: str, refresh_token: str, provider: str):
    """Downloads the file at the logical PATH and prints its JSON content."""
    download_handler(
        provider=provider,
        access_token=access_token,
        refresh_token=refresh_token,
        path=path,
        output=output
    )

@syncmarx.command()
@token_options
def revoke(access_token: str, refresh_token: str, provider: str):
    """Revokes the given credentials with the provider."""
    revoke_handler(provider=provider, access_token=access_token, refresh_token=refresh_token)

if __name__ == '__main__':
    syncmarx()
