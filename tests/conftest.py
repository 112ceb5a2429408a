import os
import pytest
import tempfile


@pytest.fixture(autouse=True)
def isolated_workspace(monkeypatch):
    """Isolate the workspace and provider environment for each test."""
    for name in ('SYNCMARX_ENVIRONMENT', 'SYNCMARX_ENCRYPTION_SECRET', 'SYNCMARX_ACCESS_TOKEN', 'SYNCMARX_REFRESH_TOKEN'):
        monkeypatch.delenv(name, raising=False)
    with tempfile.TemporaryDirectory() as temp_dir:
        monkeypatch.setenv("SYNCMARX_WORKSPACE_ROOT", temp_dir)
        yield temp_dir
