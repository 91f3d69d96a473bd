"""
chuk_uri_fs/files_cache.py - Cache of resolved file objects and their file systems
"""

import logging
import threading
from collections.abc import Callable, Hashable

from chuk_uri_fs.file_name import FileName
from chuk_uri_fs.file_object import FileObject
from chuk_uri_fs.options import FileSystemOptions
from chuk_uri_fs.provider_base import FileSystem

logger = logging.getLogger(__name__)


class FilesCache:
    """
    Thread-safe cache of resolved FileObjects.

    By default entries are keyed by FileName alone, so resolving a URI again
    with different options returns the object built under the first options.
    Callers that switch options between resolutions must call ``close()``
    first. Pass ``key_by_options=True`` to key entries by (FileName, options
    fingerprint) instead.

    File systems are always keyed by (root name, options fingerprint), since
    transport options are bound when a file system is created.

    All structural changes happen under one lock; entries never expire on
    their own.
    """

    def __init__(self, key_by_options: bool = False):
        self.key_by_options = key_by_options
        self._lock = threading.RLock()
        self._files: dict[Hashable, FileObject] = {}
        self._file_systems: dict[Hashable, FileSystem] = {}

        self.stats = {"hits": 0, "misses": 0, "evictions": 0}

    # Keys

    def make_key(self, name: FileName, options: FileSystemOptions | None) -> Hashable:
        if self.key_by_options:
            fingerprint = options.fingerprint() if options is not None else ()
            return (name, fingerprint)
        return name

    @staticmethod
    def make_file_system_key(
        root_name: FileName, options: FileSystemOptions | None
    ) -> Hashable:
        fingerprint = options.fingerprint() if options is not None else ()
        return (root_name, fingerprint)

    # File objects

    def get_file(self, key: Hashable) -> FileObject | None:
        with self._lock:
            file_object = self._files.get(key)
            if file_object is None:
                self.stats["misses"] += 1
            else:
                self.stats["hits"] += 1
            return file_object

    def put_file(self, key: Hashable, file_object: FileObject) -> FileObject | None:
        """
        Insert unless an entry already exists. Returns whichever instance is
        cached afterwards, so concurrent resolvers all see the same winner.

        Returns None without inserting when the object's file system is no
        longer owned by this cache (it was closed while the object was being
        resolved).
        """
        with self._lock:
            existing = self._files.get(key)
            if existing is not None:
                return existing
            if not self._owns(file_object.get_file_system()):
                logger.debug(
                    f"Not caching {file_object!r}: its file system was closed"
                )
                return None
            self._files[key] = file_object
            return file_object

    def remove_file(self, key: Hashable) -> bool:
        with self._lock:
            if self._files.pop(key, None) is None:
                return False
            self.stats["evictions"] += 1
            return True

    # File systems

    def _owns(self, file_system: FileSystem) -> bool:
        return any(cached is file_system for cached in self._file_systems.values())

    def get_file_system(self, key: Hashable) -> FileSystem | None:
        with self._lock:
            return self._file_systems.get(key)

    def get_or_create_file_system(
        self, key: Hashable, factory: Callable[[], FileSystem]
    ) -> FileSystem:
        """Return the cached file system for ``key``, creating it once"""
        with self._lock:
            file_system = self._file_systems.get(key)
            if file_system is None:
                file_system = factory()
                self._file_systems[key] = file_system
                logger.info(f"Created file system {file_system!r}")
            return file_system

    def close_file_system(self, file_system: FileSystem) -> int:
        """Evict every entry produced by ``file_system`` and close it"""
        with self._lock:
            stale = [
                key
                for key, file_object in self._files.items()
                if file_object.get_file_system() is file_system
            ]
            for key in stale:
                del self._files[key]
            self.stats["evictions"] += len(stale)
            for key, cached in list(self._file_systems.items()):
                if cached is file_system:
                    del self._file_systems[key]
        file_system.close()
        return len(stale)

    # Lifecycle

    def clear(self) -> None:
        """Drop every cached file object, keeping file systems open"""
        with self._lock:
            self.stats["evictions"] += len(self._files)
            self._files.clear()

    def close(self) -> None:
        """Evict every entry and close every file system"""
        with self._lock:
            evicted = len(self._files)
            self.stats["evictions"] += evicted
            self._files.clear()
            file_systems = list(self._file_systems.values())
            self._file_systems.clear()

        for file_system in file_systems:
            file_system.close()
        logger.info(
            f"Closed files cache: {evicted} entries, "
            f"{len(file_systems)} file systems"
        )

    def __len__(self) -> int:
        with self._lock:
            return len(self._files)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._files

    def file_system_count(self) -> int:
        with self._lock:
            return len(self._file_systems)
