"""
chuk_uri_fs/vfs.py - Process-wide default manager

``get_manager()`` builds one shared FileSystemManager with the default
providers on first use; ``reset_manager()`` closes it so the next call
starts fresh.
"""

import logging
import threading

from chuk_uri_fs.fs_manager import FileSystemManager

logger = logging.getLogger(__name__)

_manager: FileSystemManager | None = None
_manager_lock = threading.Lock()


def get_manager() -> FileSystemManager:
    """Return the shared manager, creating it on first call"""
    global _manager
    with _manager_lock:
        if _manager is None:
            _manager = FileSystemManager.with_default_providers()
            logger.info("Initialized default FileSystemManager")
        return _manager


def reset_manager() -> None:
    """Close the shared manager and its files cache"""
    global _manager
    with _manager_lock:
        if _manager is not None:
            _manager.close()
            _manager = None
