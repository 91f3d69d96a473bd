"""
chuk_uri_fs/providers/__init__.py - Provider registry
"""

import logging
from typing import Any

from chuk_uri_fs.provider_base import FileProvider
from chuk_uri_fs.providers.http import HttpFileProvider, HttpsFileProvider
from chuk_uri_fs.providers.http_models import (
    HttpFileSystemConfig,
    HttpFileSystemConfigBuilder,
)
from chuk_uri_fs.providers.local import LocalFileProvider

logger = logging.getLogger(__name__)

# Scheme -> provider class
_PROVIDERS: dict[str, type[FileProvider]] = {}


def register_provider(name: str, provider_class: type[FileProvider]) -> None:
    """Register a provider class for a scheme"""
    _PROVIDERS[name.lower()] = provider_class


def get_provider(name: str, **kwargs: Any) -> FileProvider | None:
    """Instantiate the provider registered for a scheme, or return None"""
    provider_class = _PROVIDERS.get(name.lower())
    if provider_class is None:
        logger.debug(f"No provider class registered for '{name}'")
        return None
    return provider_class(**kwargs)


def list_providers() -> dict[str, type[FileProvider]]:
    """Copy of the scheme -> provider class registry"""
    return dict(_PROVIDERS)


register_provider("http", HttpFileProvider)
register_provider("http4", HttpFileProvider)
register_provider("https", HttpsFileProvider)
register_provider("http4s", HttpsFileProvider)
register_provider("file", LocalFileProvider)

__all__ = [
    "register_provider",
    "get_provider",
    "list_providers",
    "HttpFileProvider",
    "HttpsFileProvider",
    "HttpFileSystemConfig",
    "HttpFileSystemConfigBuilder",
    "LocalFileProvider",
]
