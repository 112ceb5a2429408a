import json

import pytest
from click.testing import CliRunner
from unittest import mock

from syncmarx.cli.main import syncmarx
from syncmarx.core.storage.exceptions import AuthExpiredError, RemoteFileNotFoundError
from syncmarx.core.storage.models import Credentials, DownloadResult, RemoteFileRecord

FACTORY_PATH = "syncmarx.cli.handlers.StorageProviderFactory.get_provider"
TOKENS = ['--access-token', 'access', '--refresh-token', 'refresh']


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def mock_storage():
    storage = mock.MagicMock()
    with mock.patch(FACTORY_PATH, return_value=storage) as get_provider:
        storage.get_provider = get_provider
        yield storage


def test_list_prints_paths_and_ids(runner, mock_storage):
    mock_storage.files_list.return_value = [RemoteFileRecord('a1', 'notes.txt'), RemoteFileRecord('b2', 'bookmarks.json')]

    result = runner.invoke(syncmarx, ['list'] + TOKENS)

    assert result.exit_code == 0, result.output
    assert "/notes.txt\ta1" in result.output
    assert "/bookmarks.json\tb2" in result.output
    mock_storage.get_provider.assert_called_once_with('googledrive')
    mock_storage.authorize.assert_called_once_with(Credentials('access', 'refresh'))


def test_list_empty(runner, mock_storage):
    mock_storage.files_list.return_value = []
    result = runner.invoke(syncmarx, ['list'] + TOKENS)
    assert "No files found." in result.output


def test_list_auth_failure_exits_non_zero(runner, mock_storage):
    mock_storage.files_list.side_effect = AuthExpiredError("refresh failed")

    result = runner.invoke(syncmarx, ['list'] + TOKENS)

    assert result.exit_code == 1
    assert "Failed to list files: refresh failed" in result.output


def test_upload_reads_json_source(runner, mock_storage):
    result = runner.invoke(syncmarx, ['upload', '/notes.txt', '-', '--compress'] + TOKENS, input='{"x": 1}')

    assert result.exit_code == 0, result.output
    mock_storage.file_upload.assert_called_once_with('/notes.txt', {'x': 1}, compression=True)
    assert "Uploaded /notes.txt (compressed)" in result.output


def test_upload_invalid_json_does_not_contact_provider(runner, mock_storage):
    result = runner.invoke(syncmarx, ['upload', '/notes.txt', '-'] + TOKENS, input='{not json')

    assert result.exit_code == 1
    assert "Source is not valid JSON" in result.output
    mock_storage.get_provider.assert_not_called()


def test_upload_warns_about_relative_path(runner, mock_storage):
    result = runner.invoke(syncmarx, ['upload', 'notes.txt', '-'] + TOKENS, input='[]')
    assert result.exit_code == 0
    assert "has no leading '/'" in result.output


def test_download_prints_document(runner, mock_storage):
    mock_storage.file_download.return_value = DownloadResult(content={'x': 1}, was_compressed=True)

    result = runner.invoke(syncmarx, ['download', '/notes.txt'] + TOKENS)

    assert result.exit_code == 0, result.output
    assert json.dumps({'x': 1}, indent=2) in result.output
    assert "Compressed: yes" in result.output


def test_download_to_file(runner, mock_storage, tmp_path):
    mock_storage.file_download.return_value = DownloadResult(content=[1, 2], was_compressed=False)
    output = tmp_path / "out.json"

    result = runner.invoke(syncmarx, ['download', '/notes.txt', '--output', str(output)] + TOKENS)

    assert result.exit_code == 0, result.output
    assert json.loads(output.read_text(encoding='utf-8')) == [1, 2]


def test_download_missing_file(runner, mock_storage):
    mock_storage.file_download.side_effect = RemoteFileNotFoundError('/notes.txt')

    result = runner.invoke(syncmarx, ['download', '/notes.txt'] + TOKENS)

    assert result.exit_code == 1
    assert "No remote file found for path '/notes.txt'" in result.output


def test_revoke(runner, mock_storage):
    result = runner.invoke(syncmarx, ['revoke'] + TOKENS)

    assert result.exit_code == 0, result.output
    mock_storage.deauthorize.assert_called_once_with()
    assert "Credentials revoked." in result.output
