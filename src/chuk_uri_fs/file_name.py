"""
chuk_uri_fs/file_name.py - Parsed, normalized file names
"""

import posixpath
from dataclasses import dataclass, replace
from urllib.parse import unquote, urlsplit

from chuk_uri_fs.exceptions import InvalidURIError

SEPARATOR = "/"


def normalize_path(path: str) -> str:
    """Collapse duplicate separators and resolve '.' and '..' segments.

    The result is absolute, never climbs above root and carries no trailing
    separator (except for root itself).
    """
    segments: list[str] = []
    for segment in path.split(SEPARATOR):
        if segment in ("", "."):
            continue
        if segment == "..":
            if segments:
                segments.pop()
            continue
        segments.append(segment)
    return SEPARATOR + SEPARATOR.join(segments)


@dataclass(frozen=True)
class FileName:
    """Immutable identifier of a node: scheme, authority, path and slash flag.

    ``path`` is always normalized and absolute without a trailing separator;
    whether the original URI ended with one is kept in ``trailing_slash``.
    Root is always considered to end with a separator.
    """

    scheme: str
    authority: str
    path: str = SEPARATOR
    trailing_slash: bool = False
    query: str = ""

    @classmethod
    def parse(cls, uri: str) -> "FileName":
        """Parse a ``scheme://authority/path[/]`` URI."""
        if not isinstance(uri, str) or not uri.strip():
            raise InvalidURIError(f"Invalid URI: {uri!r}")

        parts = urlsplit(uri.strip())
        if not parts.scheme:
            raise InvalidURIError(f"URI has no scheme: {uri!r}")

        authority = parts.netloc
        if "@" in authority:
            userinfo, _, hostport = authority.rpartition("@")
            authority = f"{userinfo}@{hostport.lower()}"
        else:
            authority = authority.lower()

        raw_path = parts.path or SEPARATOR
        path = normalize_path(raw_path)
        trailing = raw_path.endswith(SEPARATOR) or path == SEPARATOR

        return cls(
            scheme=parts.scheme.lower(),
            authority=authority,
            path=path,
            trailing_slash=trailing,
            query=parts.query,
        )

    # URI forms

    @property
    def root_uri(self) -> str:
        return f"{self.scheme}://{self.authority}/"

    @property
    def uri(self) -> str:
        """The full URI, keeping the trailing separator when present"""
        uri = f"{self.scheme}://{self.authority}{self.path}"
        if self.trailing_slash and not self.is_root:
            uri += SEPARATOR
        if self.query:
            uri += f"?{self.query}"
        return uri

    @property
    def friendly_uri(self) -> str:
        """URI with any password in the authority masked"""
        userinfo, sep, hostport = self.authority.rpartition("@")
        if sep and ":" in userinfo:
            user = userinfo.split(":", 1)[0]
            masked = FileName(
                self.scheme,
                f"{user}:***@{hostport}",
                self.path,
                self.trailing_slash,
                self.query,
            )
            return masked.uri
        return self.uri

    def __str__(self) -> str:
        return self.uri

    # Path accessors

    @property
    def is_root(self) -> bool:
        return self.path == SEPARATOR

    @property
    def base_name(self) -> str:
        return posixpath.basename(self.path)

    @property
    def decoded_base_name(self) -> str:
        return unquote(self.base_name)

    @property
    def extension(self) -> str:
        name = self.base_name
        if "." not in name or name.startswith(".") and name.count(".") == 1:
            return ""
        return name.rsplit(".", 1)[1]

    @property
    def depth(self) -> int:
        if self.is_root:
            return 0
        return self.path.count(SEPARATOR)

    # Derived names

    def root(self) -> "FileName":
        """The root folder of this name's file system"""
        return FileName(self.scheme, self.authority, SEPARATOR, True)

    def parent(self) -> "FileName | None":
        """The parent folder, or None for root"""
        if self.is_root:
            return None
        return FileName(
            self.scheme, self.authority, posixpath.dirname(self.path), True
        )

    def as_folder(self) -> "FileName":
        """The same name with a trailing separator"""
        return replace(self, trailing_slash=True, query="")

    def child(self, name: str) -> "FileName":
        """
        Name of a direct child. A child name ending with a separator produces a
        folder name.
        """
        if not name or name.strip(SEPARATOR) in ("", ".", ".."):
            raise InvalidURIError(f"Invalid child name: {name!r}")
        is_folder = name.endswith(SEPARATOR)
        path = normalize_path(posixpath.join(self.path, name.strip(SEPARATOR)))
        return FileName(self.scheme, self.authority, path, is_folder)

    def resolve(self, relative: str) -> "FileName":
        """Resolve an absolute or relative path against this name.

        Relative paths are resolved against this name when it is a folder and
        against its parent otherwise, as URL references are.
        """
        if "://" in relative:
            return FileName.parse(relative)

        path_part, _, query = relative.partition("?")
        if path_part.startswith(SEPARATOR):
            joined = path_part
        else:
            base = self.path if self.trailing_slash else posixpath.dirname(self.path)
            joined = posixpath.join(base, path_part) if path_part else self.path

        trailing = path_part.endswith(SEPARATOR) or (
            not path_part and self.trailing_slash
        )
        path = normalize_path(joined)
        return FileName(
            self.scheme, self.authority, path, trailing or path == SEPARATOR, query
        )

    def is_descendant_of(self, other: "FileName") -> bool:
        if (self.scheme, self.authority) != (other.scheme, other.authority):
            return False
        if other.is_root:
            return not self.is_root
        return self.path.startswith(other.path + SEPARATOR)
