"""
chuk_uri_fs/provider_base.py - Abstract provider and file system
"""

import logging
from abc import ABC, abstractmethod
from typing import ClassVar

from chuk_uri_fs.file_name import FileName
from chuk_uri_fs.file_object import FileObject
from chuk_uri_fs.options import FileSystemConfigBuilder, FileSystemOptions

logger = logging.getLogger(__name__)


class FileSystem(ABC):
    """
    Session context for one scheme + authority pair.

    Shared by every FileObject it produces. Options are read once here, at
    construction; later changes to the bag have no effect on this instance.
    """

    def __init__(self, root_name: FileName, options: FileSystemOptions):
        self.root_name = root_name
        self.options = options.copy()
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    @abstractmethod
    def resolve_file(self, name: FileName) -> FileObject:
        """Resolve a name of this file system into a typed FileObject"""

    def close(self) -> None:
        """Release the backend session"""
        if self._closed:
            return
        self._closed = True
        self._do_close()
        logger.info(f"Closed file system {self.root_name.friendly_uri}")

    def _do_close(self) -> None:
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.root_name.friendly_uri!r})"


class FileProvider(ABC):
    """
    Backend registered once per scheme; builds FileSystems for root names.

    Providers keep no per-file-system state: the files cache owns the
    FileSystems they create.
    """

    config_builder: ClassVar[type[FileSystemConfigBuilder] | None] = None

    @abstractmethod
    def create_file_system(
        self, root_name: FileName, options: FileSystemOptions
    ) -> FileSystem:
        """Create a new file system rooted at ``root_name``"""

    def get_config_builder(self) -> FileSystemConfigBuilder | None:
        if self.config_builder is None:
            return None
        return self.config_builder.get_instance()

    def get_root_name(self, name: FileName) -> FileName:
        """Root of the file system that owns ``name``"""
        return name.root()
