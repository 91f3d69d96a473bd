"""Pydantic config model and config builder for the HTTP provider.

The HTTP provider recognises exactly four options; anything else is rejected.
"""

from pydantic import BaseModel, ConfigDict, Field

from chuk_uri_fs.options import FileSystemConfigBuilder, FileSystemOptions

DEFAULT_USER_AGENT = "chuk-uri-fs"


class HttpFileSystemConfig(BaseModel):
    """Transport options for an HTTP file system.

    A timeout of 0 means wait indefinitely. That is the default, and a
    stalled server will then block the calling thread forever.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    connection_timeout: int = Field(
        default=0, ge=0, description="Connect timeout in milliseconds (0 = none)"
    )
    so_timeout: int = Field(
        default=0, ge=0, description="Socket read timeout in milliseconds (0 = none)"
    )
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT, description="User-Agent sent on every request"
    )
    follow_redirect: bool = Field(
        default=True, description="Follow 3xx responses during resolution"
    )

    def timeout(self) -> tuple[float | None, float | None]:
        """``(connect, read)`` timeout in seconds as requests expects it"""
        return (
            self.connection_timeout / 1000 if self.connection_timeout else None,
            self.so_timeout / 1000 if self.so_timeout else None,
        )


class HttpFileSystemConfigBuilder(FileSystemConfigBuilder[HttpFileSystemConfig]):
    """Typed access to the HTTP options held in a FileSystemOptions bag.

    Examples:
        builder = HttpFileSystemConfigBuilder.get_instance()
        opts = FileSystemOptions()
        builder.set_so_timeout(opts, 60000)
        builder.get_so_timeout(opts)  # 60000
    """

    scheme = "http"
    config_class = HttpFileSystemConfig

    def get_connection_timeout(self, opts: FileSystemOptions | None) -> int:
        return self._get(opts, "connection_timeout")

    def set_connection_timeout(self, opts: FileSystemOptions, timeout: int) -> None:
        self._set(opts, "connection_timeout", timeout)

    def get_so_timeout(self, opts: FileSystemOptions | None) -> int:
        return self._get(opts, "so_timeout")

    def set_so_timeout(self, opts: FileSystemOptions, timeout: int) -> None:
        self._set(opts, "so_timeout", timeout)

    def get_user_agent(self, opts: FileSystemOptions | None) -> str:
        return self._get(opts, "user_agent")

    def set_user_agent(self, opts: FileSystemOptions, user_agent: str) -> None:
        self._set(opts, "user_agent", user_agent)

    def get_follow_redirect(self, opts: FileSystemOptions | None) -> bool:
        return self._get(opts, "follow_redirect")

    def set_follow_redirect(self, opts: FileSystemOptions, follow: bool) -> None:
        self._set(opts, "follow_redirect", follow)
