"""
chuk_uri_fs/fs_manager.py - File system manager: provider registry and resolution
"""

import logging
import threading

from chuk_uri_fs.exceptions import DuplicateProviderError, UnknownSchemeError
from chuk_uri_fs.file_name import FileName
from chuk_uri_fs.file_object import FileObject
from chuk_uri_fs.files_cache import FilesCache
from chuk_uri_fs.options import FileSystemOptions
from chuk_uri_fs.provider_base import FileProvider

logger = logging.getLogger(__name__)


class FileSystemManager:
    """
    Entry point of the virtual file system.

    Holds the scheme -> provider registry and the files cache, and resolves
    URIs into FileObjects. Providers are registered at setup time; resolution
    may run from many threads at once.
    """

    def __init__(self, files_cache: FilesCache | None = None):
        """
        Initialize the manager

        Args:
            files_cache: Cache to use (default: a new FilesCache keyed by name)
        """
        self._providers: dict[str, FileProvider] = {}
        self._registry_lock = threading.Lock()
        self._files_cache = files_cache if files_cache is not None else FilesCache()
        self._closed = False

        # Statistics
        self.stats = {"resolutions": 0, "cache_hits": 0}
        self._stats_lock = threading.Lock()

    @classmethod
    def with_default_providers(
        cls, files_cache: FilesCache | None = None
    ) -> "FileSystemManager":
        """Create a manager with every provider from the registry"""
        manager = cls(files_cache=files_cache)
        manager.register_default_providers()
        return manager

    def register_default_providers(self) -> None:
        from chuk_uri_fs.providers import get_provider, list_providers

        for scheme in list_providers():
            if not self.has_provider(scheme):
                self.add_provider(scheme, get_provider(scheme))

    # Provider registry

    def add_provider(self, scheme: str, provider: FileProvider) -> None:
        """
        Bind a provider to a scheme.

        Raises:
            DuplicateProviderError: if the scheme is already bound; guard with
                ``has_provider`` to make setup idempotent
        """
        scheme = scheme.lower()
        with self._registry_lock:
            if scheme in self._providers:
                raise DuplicateProviderError(scheme)
            self._providers[scheme] = provider
        logger.info(
            f"Registered provider {provider.__class__.__name__} for '{scheme}'"
        )

    def has_provider(self, scheme: str) -> bool:
        return scheme.lower() in self._providers

    def get_provider(self, scheme: str) -> FileProvider:
        provider = self._providers.get(scheme.lower())
        if provider is None:
            raise UnknownSchemeError(scheme)
        return provider

    def get_schemes(self) -> list[str]:
        return sorted(self._providers)

    def get_files_cache(self) -> FilesCache:
        return self._files_cache

    # Resolution

    def resolve_name(self, uri: str) -> FileName:
        """Parse a URI, checking that its scheme is registered"""
        name = FileName.parse(uri)
        self.get_provider(name.scheme)
        return name

    def resolve_file(
        self, uri: str | FileName, options: FileSystemOptions | None = None
    ) -> FileObject:
        """
        Resolve a URI into a FileObject.

        The cache is consulted first; on a miss the scheme's provider supplies
        the file system, which resolves the name (possibly with blocking
        network round trips). The options are read, never modified.

        Raises:
            UnknownSchemeError: if no provider is registered for the scheme
            InvalidURIError: if the URI cannot be parsed
        """
        name = uri if isinstance(uri, FileName) else FileName.parse(uri)
        provider = self.get_provider(name.scheme)
        options = options if options is not None else FileSystemOptions()

        cache = self._files_cache
        key = cache.make_key(name, options)
        cached = cache.get_file(key)
        if cached is not None:
            self._count("cache_hits")
            logger.debug(f"Cache hit for {name.friendly_uri}")
            return cached

        root_name = provider.get_root_name(name)
        fs_key = cache.make_file_system_key(root_name, options)
        while True:
            file_system = cache.get_or_create_file_system(
                fs_key, lambda: provider.create_file_system(root_name, options)
            )
            file_object = file_system.resolve_file(name)
            self._count("resolutions")
            logger.debug(
                f"Resolved {name.friendly_uri} as {file_object.get_type().value}"
            )

            cached = cache.put_file(key, file_object)
            if cached is not None:
                return cached
            # The cache was closed mid-resolution; resolve again on a live system
            logger.debug(f"Re-resolving {name.friendly_uri} after cache close")

    def _count(self, stat: str) -> None:
        with self._stats_lock:
            self.stats[stat] += 1

    # Lifecycle

    def close(self) -> None:
        """Close the files cache and forget every provider"""
        if self._closed:
            return
        self._files_cache.close()
        with self._registry_lock:
            self._providers.clear()
        self._closed = True
        logger.info("Closed FileSystemManager")

    def __enter__(self) -> "FileSystemManager":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
