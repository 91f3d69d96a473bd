"""
chuk_uri_fs/providers/local.py - Local disk provider for file:// URIs
"""

import logging
import os
from datetime import UTC, datetime
from urllib.parse import quote, unquote

from chuk_uri_fs.content import ContentInfo
from chuk_uri_fs.exceptions import FileMissingError
from chuk_uri_fs.file_name import FileName
from chuk_uri_fs.file_object import FileObject, FileType
from chuk_uri_fs.options import FileSystemOptions
from chuk_uri_fs.provider_base import FileProvider, FileSystem

logger = logging.getLogger(__name__)


class LocalFileObject(FileObject):
    """A file or directory on local disk"""

    @property
    def local_path(self) -> str:
        return self._file_system.to_local_path(self._name)

    def _list_children(self) -> list[FileObject]:
        entries = sorted(os.listdir(self.local_path))
        folder = self._name.as_folder()
        return [
            self._file_system.resolve_file(folder.child(quote(entry)))
            for entry in entries
        ]

    def _load_content(self) -> bytes:
        try:
            with open(self.local_path, "rb") as f:
                return f.read()
        except FileNotFoundError as e:
            raise FileMissingError(f"{self.local_path} no longer exists") from e


class LocalFileSystem(FileSystem):
    """The local filesystem, rooted at ``file:///``"""

    def to_local_path(self, name: FileName) -> str:
        return unquote(name.path)

    def resolve_file(self, name: FileName) -> LocalFileObject:
        path = self.to_local_path(name)
        if os.path.isdir(path):
            return LocalFileObject(name, self, FileType.FOLDER)
        if not os.path.exists(path):
            return LocalFileObject(name, self, FileType.IMAGINARY)

        stat = os.stat(path)
        info = ContentInfo(
            size=stat.st_size,
            last_modified=datetime.fromtimestamp(stat.st_mtime, tz=UTC),
        )
        return LocalFileObject(name, self, FileType.FILE, info)


class LocalFileProvider(FileProvider):
    """Provider for ``file`` URIs; takes no options"""

    def create_file_system(
        self, root_name: FileName, options: FileSystemOptions
    ) -> LocalFileSystem:
        logger.debug(f"Creating local file system for {root_name.uri}")
        return LocalFileSystem(root_name, options)
