"""
chuk_uri_fs - A uniform, synchronous virtual filesystem over URI-addressed backends
"""

from chuk_uri_fs import exceptions
from chuk_uri_fs.content import ContentInfo, FileContent
from chuk_uri_fs.exceptions import (
    ConnectionTimeoutError,
    DuplicateProviderError,
    FileMissingError,
    FileNotFileError,
    FileNotFolderError,
    FileSystemError,
    InvalidURIError,
    ReadTimeoutError,
    RedirectLoopError,
    TransportError,
    UnknownSchemeError,
)
from chuk_uri_fs.file_name import FileName
from chuk_uri_fs.file_object import FileObject, FileType
from chuk_uri_fs.files_cache import FilesCache
from chuk_uri_fs.fs_manager import FileSystemManager
from chuk_uri_fs.options import FileSystemConfigBuilder, FileSystemOptions
from chuk_uri_fs.provider_base import FileProvider, FileSystem
from chuk_uri_fs.providers import get_provider, list_providers, register_provider
from chuk_uri_fs.providers.http import HttpFileProvider, HttpsFileProvider
from chuk_uri_fs.providers.http_models import (
    HttpFileSystemConfig,
    HttpFileSystemConfigBuilder,
)
from chuk_uri_fs.providers.local import LocalFileProvider
from chuk_uri_fs.vfs import get_manager, reset_manager

__version__ = "0.1.0"

__all__ = [
    # Core
    "FileSystemManager",
    "FilesCache",
    "FileName",
    "FileObject",
    "FileType",
    "FileContent",
    "ContentInfo",
    "FileProvider",
    "FileSystem",
    "FileSystemOptions",
    "FileSystemConfigBuilder",
    "get_manager",
    "reset_manager",
    # Providers
    "HttpFileProvider",
    "HttpsFileProvider",
    "HttpFileSystemConfig",
    "HttpFileSystemConfigBuilder",
    "LocalFileProvider",
    "get_provider",
    "list_providers",
    "register_provider",
    # Errors
    "exceptions",
    "FileSystemError",
    "InvalidURIError",
    "UnknownSchemeError",
    "DuplicateProviderError",
    "FileNotFolderError",
    "FileNotFileError",
    "FileMissingError",
    "TransportError",
    "ConnectionTimeoutError",
    "ReadTimeoutError",
    "RedirectLoopError",
]
