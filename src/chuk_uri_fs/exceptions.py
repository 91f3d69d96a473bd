"""Exceptions for chuk_uri_fs."""


class FileSystemError(Exception):
    """Base exception for all virtual filesystem errors."""


class InvalidURIError(FileSystemError, ValueError):
    """Raised when a URI cannot be parsed into a file name."""


class UnknownSchemeError(FileSystemError, ValueError):
    """Raised when no provider is registered for a URI scheme."""

    def __init__(self, scheme: str):
        super().__init__(f"No provider registered for scheme '{scheme}'")
        self.scheme = scheme


class DuplicateProviderError(FileSystemError, ValueError):
    """Raised when a provider is added for a scheme that is already bound."""

    def __init__(self, scheme: str):
        super().__init__(f"A provider is already registered for scheme '{scheme}'")
        self.scheme = scheme


class FileNotFolderError(FileSystemError, NotADirectoryError):
    """Raised when children are requested from a file that is not a folder."""


class FileNotFileError(FileSystemError, IsADirectoryError):
    """Raised when content is requested from a folder."""


class FileMissingError(FileSystemError, FileNotFoundError):
    """Raised when content is requested from a file that does not exist."""


class TransportError(FileSystemError):
    """Network or protocol failure talking to a backend.

    The underlying exception, if any, is kept as ``cause`` (and as
    ``__cause__`` when raised with ``from``).
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        status_code: int | None = None,
        cause: BaseException | None = None,
    ):
        super().__init__(message)
        self.url = url
        self.status_code = status_code
        self.cause = cause


class ConnectionTimeoutError(TransportError, TimeoutError):
    """Raised when establishing a connection exceeds the connection timeout."""


class ReadTimeoutError(TransportError, TimeoutError):
    """Raised when a blocking read exceeds the socket timeout."""


class RedirectLoopError(TransportError):
    """Raised when redirect following exceeds the hop limit."""

    def __init__(self, url: str, hops: int, cause: BaseException | None = None):
        super().__init__(
            f"Too many redirects ({hops}) resolving {url}", url=url, cause=cause
        )
        self.hops = hops
