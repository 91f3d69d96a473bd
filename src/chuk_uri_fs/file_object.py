"""
chuk_uri_fs/file_object.py - Resolved nodes of the virtual file system
"""

import logging
from enum import Enum
from typing import TYPE_CHECKING
from urllib.parse import unquote

from chuk_uri_fs.content import ContentInfo, FileContent
from chuk_uri_fs.exceptions import (
    FileMissingError,
    FileNotFileError,
    FileNotFolderError,
)
from chuk_uri_fs.file_name import FileName

if TYPE_CHECKING:
    from chuk_uri_fs.provider_base import FileSystem

logger = logging.getLogger(__name__)


class FileType(Enum):
    """Type of a resolved node"""

    FILE = "file"
    FOLDER = "folder"
    IMAGINARY = "imaginary"

    @property
    def has_children(self) -> bool:
        return self is FileType.FOLDER

    @property
    def has_content(self) -> bool:
        return self is FileType.FILE


class FileObject:
    """
    A node bound to one FileName and one FileSystem.

    The type is decided when the object is created and never changes; to see
    a changed remote state, resolve the name again after evicting it from the
    files cache.

    Subclasses implement ``_list_children`` and ``_load_content``.
    """

    def __init__(
        self,
        name: FileName,
        file_system: "FileSystem",
        file_type: FileType,
        content_info: ContentInfo | None = None,
    ):
        self._name = name
        self._file_system = file_system
        self._type = file_type
        self._content_info = content_info
        self._content: FileContent | None = None

    @property
    def name(self) -> FileName:
        return self._name

    @property
    def file_type(self) -> FileType:
        return self._type

    def get_name(self) -> FileName:
        return self._name

    def get_type(self) -> FileType:
        return self._type

    def get_file_system(self) -> "FileSystem":
        return self._file_system

    def get_url(self) -> str:
        """Location used to reach this node"""
        return self._name.uri

    def exists(self) -> bool:
        return self._type is not FileType.IMAGINARY

    def is_file(self) -> bool:
        return self._type is FileType.FILE

    def is_folder(self) -> bool:
        return self._type is FileType.FOLDER

    # Children

    def get_children(self) -> list["FileObject"]:
        """List the direct children of this folder.

        Raises:
            FileNotFolderError: if this object is not typed FOLDER
        """
        if not self._type.has_children:
            raise FileNotFolderError(
                f"Cannot list children of {self._name.friendly_uri}: "
                f"type is {self._type.value}"
            )
        children = self._list_children()
        logger.debug(f"{self._name.friendly_uri} has {len(children)} children")
        return children

    def get_child(self, base_name: str) -> "FileObject | None":
        """The child with the given base name, plain or percent-encoded, or None"""
        wanted = unquote(base_name.strip("/"))
        for child in self.get_children():
            if child.get_name().decoded_base_name == wanted:
                return child
        return None

    def get_parent(self) -> "FileObject | None":
        parent = self._name.parent()
        if parent is None:
            return None
        return self._file_system.resolve_file(parent)

    # Content

    def get_content(self) -> FileContent:
        """Content accessor; the body itself is loaded on first read"""
        if self._content is None:
            self._content = FileContent(
                self._name.decoded_base_name,
                self._checked_load_content,
                self._content_info,
            )
        return self._content

    def _checked_load_content(self) -> bytes:
        if self._type is FileType.FOLDER:
            raise FileNotFileError(
                f"{self._name.friendly_uri} is a folder and has no content"
            )
        if self._type is FileType.IMAGINARY:
            raise FileMissingError(f"{self._name.friendly_uri} does not exist")
        return self._load_content()

    # Backend hooks

    def _list_children(self) -> list["FileObject"]:
        raise NotImplementedError

    def _load_content(self) -> bytes:
        raise NotImplementedError

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}({self._name.friendly_uri!r}, "
            f"{self._type.value})"
        )
