"""
Embedded HTTP file server for the HTTP provider tests.

Serves a local directory the way common static servers do:
- a directory requested without a trailing slash answers 301 to the slash URL
- a directory requested with a trailing slash answers an HTML listing
- a file answers its bytes, a missing path answers 404
Extra fixed redirects can be configured (e.g. to build redirect loops).
"""

import html
import logging
import mimetypes
import os
import posixpath
import threading
from email.utils import formatdate
from urllib.parse import quote, unquote

from cheroot import wsgi

logger = logging.getLogger(__name__)


class FileServerApp:
    """WSGI app serving ``root_dir``"""

    def __init__(self, root_dir: str, redirects: dict[str, str] | None = None):
        self.root_dir = os.path.abspath(root_dir)
        self.redirects = dict(redirects or {})
        self.requests: list[dict[str, str]] = []
        self._lock = threading.Lock()

    def __call__(self, environ, start_response):
        method = environ["REQUEST_METHOD"]
        path = environ.get("PATH_INFO") or "/"
        with self._lock:
            self.requests.append(
                {
                    "method": method,
                    "path": path,
                    "user_agent": environ.get("HTTP_USER_AGENT", ""),
                }
            )

        if path in self.redirects:
            return self._respond(
                start_response,
                "302 Found",
                b"",
                method,
                [("Location", self.redirects[path])],
            )

        local = os.path.join(self.root_dir, unquote(path).lstrip("/"))
        local = os.path.abspath(local)
        if not local.startswith(self.root_dir):
            return self._respond(start_response, "403 Forbidden", b"", method)

        if os.path.isdir(local):
            if not path.endswith("/"):
                return self._respond(
                    start_response,
                    "301 Moved Permanently",
                    b"",
                    method,
                    [("Location", path + "/")],
                )
            body = self._listing(path, local)
            return self._respond(
                start_response,
                "200 OK",
                body,
                method,
                [("Content-Type", "text/html; charset=utf-8")],
            )

        if os.path.isfile(local):
            with open(local, "rb") as f:
                body = f.read()
            mime_type, _ = mimetypes.guess_type(local)
            return self._respond(
                start_response,
                "200 OK",
                body,
                method,
                [
                    ("Content-Type", mime_type or "application/octet-stream"),
                    (
                        "Last-Modified",
                        formatdate(os.path.getmtime(local), usegmt=True),
                    ),
                ],
            )

        return self._respond(start_response, "404 Not Found", b"", method)

    def _listing(self, path: str, local: str) -> bytes:
        rows = ['<a href="../">../</a>', '<a href="?C=N;O=D">Name</a>']
        for entry in sorted(os.listdir(local)):
            suffix = "/" if os.path.isdir(os.path.join(local, entry)) else ""
            href = quote(entry) + suffix
            rows.append(f'<a href="{href}">{html.escape(entry)}{suffix}</a>')
        title = html.escape(posixpath.normpath(path))
        page = (
            f"<html><head><title>Index of {title}</title></head><body>"
            f"<h1>Index of {title}</h1><pre>{'<br>'.join(rows)}</pre></body></html>"
        )
        return page.encode("utf-8")

    @staticmethod
    def _respond(start_response, status, body, method, headers=None):
        headers = list(headers or [])
        headers.append(("Content-Length", str(len(body))))
        start_response(status, headers)
        return [] if method == "HEAD" else [body]


class FileServer:
    """
    Run a FileServerApp with cheroot in a background thread.

    Example:
        >>> with FileServer("/srv/files") as server:
        ...     print(server.url)
    """

    def __init__(
        self,
        root_dir: str,
        host: str = "127.0.0.1",
        port: int = 0,
        redirects: dict[str, str] | None = None,
    ):
        self.app = FileServerApp(root_dir, redirects=redirects)
        self.host = host
        self.port = port
        self._server: wsgi.Server | None = None
        self._thread: threading.Thread | None = None

    def start_background(self) -> None:
        """Bind the socket and serve from a daemon thread"""
        self._server = wsgi.Server((self.host, self.port), self.app)
        self._server.prepare()
        self.port = self._server.bind_addr[1]

        self._thread = threading.Thread(target=self._server.serve, daemon=True)
        self._thread.start()
        logger.info(f"File server ready at {self.url}")

    def stop(self) -> None:
        if self._server:
            logger.info("Stopping file server")
            self._server.stop()
            self._server = None
            self._thread = None

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}"

    def __enter__(self) -> "FileServer":
        self.start_background()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.stop()
