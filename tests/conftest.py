"""
Shared fixtures: test data tree, embedded HTTP server, managers.

Set CHUK_URI_FS_TEST_HTTP_URI to run the HTTP tests against an existing
server instead of the embedded one. That server must expose the same
``read-tests`` tree.
"""

import os

import pytest

from chuk_uri_fs.fs_manager import FileSystemManager
from chuk_uri_fs.providers.http import HttpFileProvider
from chuk_uri_fs.providers.local import LocalFileProvider
from file_server import FileServer

TEST_URI_ENV = "CHUK_URI_FS_TEST_HTTP_URI"

# Redirects served by the embedded server in addition to its directory tree
REDIRECTS = {
    "/loop-a": "/loop-b",
    "/loop-b": "/loop-a",
    "/moved-file": "/read-tests/file1.txt",
    "/moved-folder": "/read-tests",
    **{f"/chain/{i}": f"/chain/{i + 1}" for i in range(6)},
    "/chain/6": "/read-tests/",
}


def get_test_uri_override() -> str | None:
    return os.environ.get(TEST_URI_ENV)


@pytest.fixture(scope="session")
def test_root(tmp_path_factory):
    """Directory tree served over HTTP and used by the local provider tests"""
    root = tmp_path_factory.mktemp("vfs-root")
    read_tests = root / "read-tests"
    (read_tests / "dir1" / "subdir").mkdir(parents=True)
    (read_tests / "empty").mkdir()

    (read_tests / "file1.txt").write_text("Hello World")
    (read_tests / "file with spaces.txt").write_text("spaced")
    (read_tests / "dir1" / "file1.txt").write_text("nested")
    (read_tests / "dir1" / "subdir" / "deep.json").write_text('{"a": 1}')
    return root


@pytest.fixture(scope="session")
def file_server(test_root):
    """Embedded HTTP server, or None when an external URI is configured"""
    if get_test_uri_override():
        yield None
        return
    with FileServer(str(test_root), redirects=REDIRECTS) as server:
        yield server


@pytest.fixture
def embedded_server(file_server):
    """The embedded server; skips when running against an external URI"""
    if file_server is None:
        pytest.skip(f"{TEST_URI_ENV} is set; embedded server not running")
    file_server.app.requests.clear()
    return file_server


@pytest.fixture
def connection_uri(file_server):
    """Base URI for HTTP tests, using the http4 scheme for the embedded server"""
    override = get_test_uri_override()
    if override:
        return override.rstrip("/")
    return file_server.url.replace("http://", "http4://", 1)


@pytest.fixture
def manager():
    """Manager prepared the way test setups do it: guarded, idempotent"""
    fs_manager = FileSystemManager()
    prepare(fs_manager)
    prepare(fs_manager)
    yield fs_manager
    fs_manager.close()


def prepare(fs_manager: FileSystemManager) -> None:
    for scheme in ("http", "http4"):
        if not fs_manager.has_provider(scheme):
            fs_manager.add_provider(scheme, HttpFileProvider())
    if not fs_manager.has_provider("file"):
        fs_manager.add_provider("file", LocalFileProvider())
