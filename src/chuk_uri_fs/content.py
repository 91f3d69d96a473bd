"""
chuk_uri_fs/content.py - File content metadata and lazy content access
"""

import io
import logging
import mimetypes
import threading
from collections.abc import Callable
from dataclasses import asdict, dataclass
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class ContentInfo:
    """Content metadata captured when a file is resolved"""

    size: int | None = None
    mime_type: str | None = None
    last_modified: datetime | None = None
    etag: str | None = None

    @classmethod
    def from_headers(cls, headers: Any) -> "ContentInfo":
        """Build from HTTP response headers (any case-insensitive mapping)"""
        size = headers.get("Content-Length")
        mime_type = headers.get("Content-Type")
        if mime_type:
            mime_type = mime_type.split(";", 1)[0].strip() or None

        last_modified = None
        if headers.get("Last-Modified"):
            try:
                last_modified = parsedate_to_datetime(headers["Last-Modified"])
            except (TypeError, ValueError):
                logger.debug(f"Ignoring bad Last-Modified: {headers['Last-Modified']}")

        return cls(
            size=int(size) if size is not None and size.isdigit() else None,
            mime_type=mime_type,
            last_modified=last_modified,
            etag=headers.get("ETag"),
        )

    def guess_mime_type(self, filename: str) -> str:
        """Declared MIME type, else guessed from the file name"""
        if self.mime_type:
            return self.mime_type
        guessed, _ = mimetypes.guess_type(filename)
        return guessed or DEFAULT_MIME_TYPE

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class FileContent:
    """
    Lazily loaded content of a file.

    The body is fetched by ``loader`` on first access and kept for the
    lifetime of this object.
    """

    def __init__(
        self,
        filename: str,
        loader: Callable[[], bytes],
        info: ContentInfo | None = None,
    ):
        self.filename = filename
        self.info = info or ContentInfo()
        self._loader = loader
        self._data: bytes | None = None
        self._lock = threading.Lock()

    def _load(self) -> bytes:
        with self._lock:
            if self._data is None:
                self._data = self._loader()
                logger.debug(f"Loaded {len(self._data)} bytes from {self.filename}")
            return self._data

    def get_bytes(self) -> bytes:
        return self._load()

    def get_text(self, encoding: str = "utf-8", errors: str = "strict") -> str:
        return self._load().decode(encoding, errors=errors)

    def open(self) -> io.BytesIO:
        """Open the content as a binary stream"""
        return io.BytesIO(self._load())

    def get_size(self) -> int:
        if self.info.size is not None and self._data is None:
            return self.info.size
        return len(self._load())

    def is_empty(self) -> bool:
        return self.get_size() == 0

    def get_content_type(self) -> str:
        return self.info.guess_mime_type(self.filename)

    def get_last_modified(self) -> datetime | None:
        return self.info.last_modified

    def __repr__(self) -> str:
        return f"FileContent({self.filename!r}, size={self.info.size})"
