"""HTTP(S) provider for chuk-uri-fs.

HTTP has no notion of folders, so the type of a resource is decided with a
few heuristics:

1. A name whose path ends with '/' is a FOLDER. No request is made.
2. Otherwise a HEAD request is sent:
   - a redirect is followed (when ``follow_redirect`` is on, at most
     ``max_redirects`` hops) and a target ending with '/' makes a FOLDER;
   - with ``follow_redirect`` off the redirect is not followed and the
     resource is typed FILE, so listing its children fails even when the
     server would have redirected to a folder;
   - 2xx (or 405, HEAD not allowed) is a FILE, 404/410 is IMAGINARY.

Folder children come from the HTML listing served at the folder URL.

Examples:
    manager = FileSystemManager()
    manager.add_provider("http", HttpFileProvider())
    folder = manager.resolve_file("http://localhost:8080/read-tests/")
    names = [child.get_name().base_name for child in folder.get_children()]
"""

import logging
import threading
import time
from dataclasses import replace
from urllib.parse import urljoin

import requests
import urllib3

from chuk_uri_fs.content import ContentInfo
from chuk_uri_fs.exceptions import (
    ConnectionTimeoutError,
    FileMissingError,
    ReadTimeoutError,
    RedirectLoopError,
    TransportError,
)
from chuk_uri_fs.file_name import FileName
from chuk_uri_fs.file_object import FileObject, FileType
from chuk_uri_fs.options import FileSystemOptions
from chuk_uri_fs.provider_base import FileProvider, FileSystem
from chuk_uri_fs.providers.http_listing import parse_listing
from chuk_uri_fs.providers.http_models import (
    HttpFileSystemConfig,
    HttpFileSystemConfigBuilder,
)

logger = logging.getLogger(__name__)

DEFAULT_MAX_REDIRECTS = 5

MISSING_STATUS_CODES = (404, 410)
HEAD_NOT_ALLOWED = 405


def _is_success(status: int) -> bool:
    return 200 <= status < 300


def _is_redirect(status: int) -> bool:
    return 300 <= status < 400


def _is_read_timeout(error: requests.exceptions.ConnectionError) -> bool:
    reason = error.args[0] if error.args else None
    return isinstance(
        reason, (urllib3.exceptions.ReadTimeoutError, requests.exceptions.ReadTimeout)
    )


class HttpFileObject(FileObject):
    """
    A resource on an HTTP server.

    ``resolved_name`` is where the resource actually lives once redirects
    have been followed; listing and content requests go there.
    """

    def __init__(
        self,
        name: FileName,
        file_system: "HttpFileSystem",
        file_type: FileType,
        content_info: ContentInfo | None = None,
        resolved_name: FileName | None = None,
    ):
        super().__init__(name, file_system, file_type, content_info)
        self._resolved_name = resolved_name or name

    @property
    def resolved_name(self) -> FileName:
        return self._resolved_name

    def get_url(self) -> str:
        return self._file_system.to_url(self._resolved_name)

    def _list_children(self) -> list[FileObject]:
        return self._file_system.list_children(self)

    def _load_content(self) -> bytes:
        return self._file_system.fetch_content(self)


class HttpFileSystem(FileSystem):
    """
    One requests session per scheme + authority + options.

    The config is captured at construction: user agent, timeouts, redirect
    policy and hop limit all stay fixed for the life of the session.
    """

    def __init__(
        self,
        root_name: FileName,
        options: FileSystemOptions,
        config: HttpFileSystemConfig,
        transport_scheme: str = "http",
        max_redirects: int = DEFAULT_MAX_REDIRECTS,
    ):
        super().__init__(root_name, options)
        self.config = config
        self.transport_scheme = transport_scheme
        self.max_redirects = max_redirects

        self.session = requests.Session()
        self.session.headers["User-Agent"] = config.user_agent
        self.session.max_redirects = max_redirects

        # Statistics
        self.stats = {"head": 0, "get": 0, "redirects": 0}
        self._stats_lock = threading.Lock()

    # Name <-> URL mapping

    def to_url(self, name: FileName) -> str:
        """Transport URL for a file name (``http4://h/x`` -> ``http://h/x``)"""
        if name.scheme == self.root_name.scheme:
            return self.transport_scheme + name.uri[len(name.scheme) :]
        return name.uri

    def to_name(self, url: str) -> FileName:
        """File name for a transport URL, keeping this file system's scheme"""
        name = FileName.parse(url)
        if name.scheme == self.transport_scheme:
            return replace(name, scheme=self.root_name.scheme)
        return name

    # Transport

    def _request(self, method: str, url: str, **kwargs) -> requests.Response:
        """Send one request, translating requests errors. No retries."""
        try:
            response = self.session.request(
                method, url, timeout=self.config.timeout(), **kwargs
            )
        except requests.exceptions.ConnectTimeout as e:
            raise ConnectionTimeoutError(
                f"Timed out connecting to {url}", url=url, cause=e
            ) from e
        except requests.exceptions.ReadTimeout as e:
            raise ReadTimeoutError(
                f"Timed out reading from {url}", url=url, cause=e
            ) from e
        except requests.exceptions.TooManyRedirects as e:
            raise RedirectLoopError(url, self.max_redirects, cause=e) from e
        except requests.exceptions.ConnectionError as e:
            # A stall while the body is read arrives wrapped in ConnectionError
            if _is_read_timeout(e):
                raise ReadTimeoutError(
                    f"Timed out reading from {url}", url=url, cause=e
                ) from e
            raise TransportError(
                f"{method} {url} failed: {e}", url=url, cause=e
            ) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(
                f"{method} {url} failed: {e}", url=url, cause=e
            ) from e

        self._count(method.lower())
        logger.debug(f"{method} {url} -> {response.status_code}")
        return response

    def _count(self, stat: str) -> None:
        with self._stats_lock:
            self.stats[stat] = self.stats.get(stat, 0) + 1

    def _redirect_deadline(self) -> float | None:
        if not self.config.so_timeout:
            return None
        budget = self.config.so_timeout / 1000 * (self.max_redirects + 1)
        return time.monotonic() + budget

    # Resolution

    def resolve_file(self, name: FileName) -> HttpFileObject:
        if name.trailing_slash:
            return HttpFileObject(name, self, FileType.FOLDER)

        file_type, resolved_name, content_info = self._resolve_type(name)
        return HttpFileObject(
            name, self, file_type, content_info, resolved_name=resolved_name
        )

    def _resolve_type(
        self, name: FileName
    ) -> tuple[FileType, FileName, ContentInfo | None]:
        """Decide the type of a name with no trailing slash.

        Follows redirects one hop at a time, bounded by ``max_redirects`` and by
        a deadline derived from the socket timeout.
        """
        current = name
        hops = 0
        deadline = self._redirect_deadline()

        while True:
            url = self.to_url(current)
            response = self._request("HEAD", url, allow_redirects=False)
            status = response.status_code
            location = response.headers.get("Location")

            if _is_redirect(status) and location:
                if not self.config.follow_redirect:
                    logger.debug(f"Not following redirect {url} -> {location}")
                    return FileType.FILE, current, None

                hops += 1
                if hops > self.max_redirects:
                    raise RedirectLoopError(self.to_url(name), hops)
                if deadline is not None and time.monotonic() > deadline:
                    raise ReadTimeoutError(
                        f"Redirect chain from {self.to_url(name)} exceeded its deadline",
                        url=url,
                    )

                self._count("redirects")
                current = self.to_name(urljoin(url, location))
                logger.debug(f"Redirect {hops}: {url} -> {current.friendly_uri}")
                if current.trailing_slash:
                    return FileType.FOLDER, current, None
                continue

            if _is_success(status):
                return FileType.FILE, current, ContentInfo.from_headers(response.headers)
            if status == HEAD_NOT_ALLOWED:
                return FileType.FILE, current, None
            if status in MISSING_STATUS_CODES:
                return FileType.IMAGINARY, current, None

            raise TransportError(
                f"HEAD {url} returned HTTP {status}", url=url, status_code=status
            )

    # Listing and content

    def list_children(self, folder: HttpFileObject) -> list[FileObject]:
        """GET the folder listing and build a child object per entry"""
        url = self.to_url(folder.resolved_name.as_folder())
        with self._request(
            "GET", url, allow_redirects=self.config.follow_redirect
        ) as response:
            if not _is_success(response.status_code):
                raise TransportError(
                    f"Listing {url} returned HTTP {response.status_code}",
                    url=url,
                    status_code=response.status_code,
                )
            listed_url = response.url or url
            entries = parse_listing(response.text, listed_url)

        listed = self.to_name(listed_url).as_folder()
        children: list[FileObject] = []
        for entry in entries:
            child_name = listed.child(entry)
            child_type = FileType.FOLDER if child_name.trailing_slash else FileType.FILE
            children.append(HttpFileObject(child_name, self, child_type))

        logger.debug(f"Listed {len(children)} entries at {url}")
        return children

    def fetch_content(self, file_object: HttpFileObject) -> bytes:
        url = file_object.get_url()
        with self._request(
            "GET", url, allow_redirects=self.config.follow_redirect
        ) as response:
            status = response.status_code
            if status in MISSING_STATUS_CODES:
                raise FileMissingError(f"{url} no longer exists")
            if not _is_success(status):
                raise TransportError(
                    f"GET {url} returned HTTP {status}", url=url, status_code=status
                )
            return response.content

    def _do_close(self) -> None:
        self.session.close()


class HttpFileProvider(FileProvider):
    """Provider for ``http`` (and ``http4``) URIs.

    Args:
        max_redirects: Hop limit when following redirects (default: 5)
    """

    transport_scheme = "http"
    config_builder = HttpFileSystemConfigBuilder

    def __init__(self, max_redirects: int = DEFAULT_MAX_REDIRECTS):
        if max_redirects < 0:
            raise ValueError("max_redirects must be >= 0")
        self.max_redirects = max_redirects

    def create_file_system(
        self, root_name: FileName, options: FileSystemOptions
    ) -> HttpFileSystem:
        config = self.get_config_builder().get_config(options)
        logger.debug(
            f"Creating HTTP file system for {root_name.friendly_uri} with {config!r}"
        )
        return HttpFileSystem(
            root_name,
            options,
            config=config,
            transport_scheme=self.transport_scheme,
            max_redirects=self.max_redirects,
        )


class HttpsFileProvider(HttpFileProvider):
    """Provider for ``https`` (and ``http4s``) URIs"""

    transport_scheme = "https"
