"""
chuk_uri_fs/options.py - Per-scheme file system options

A FileSystemOptions bag holds one immutable pydantic config model per scheme.
Each provider ships a config builder that gives typed get/set access to its
scheme's model; a ``set_*`` call replaces the model with a validated copy that
differs only in that one field.
"""

import threading
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

ConfigT = TypeVar("ConfigT", bound=BaseModel)


class FileSystemOptions:
    """Configuration bag passed into a resolution call.

    Resolution only ever reads from the bag.
    """

    def __init__(self) -> None:
        self._configs: dict[str, BaseModel] = {}

    def get_config(self, scheme: str) -> BaseModel | None:
        return self._configs.get(scheme)

    def set_config(self, scheme: str, config: BaseModel) -> None:
        self._configs[scheme] = config

    def schemes(self) -> list[str]:
        return sorted(self._configs)

    def copy(self) -> "FileSystemOptions":
        clone = FileSystemOptions()
        # Models are frozen, sharing them is safe
        clone._configs = dict(self._configs)
        return clone

    def fingerprint(self) -> tuple:
        """Hashable digest of every value in the bag"""
        return tuple(
            (scheme, tuple(sorted(self._configs[scheme].model_dump().items())))
            for scheme in sorted(self._configs)
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FileSystemOptions):
            return NotImplemented
        return self.fingerprint() == other.fingerprint()

    def __hash__(self) -> int:
        return hash(self.fingerprint())

    def __repr__(self) -> str:
        return f"FileSystemOptions({self._configs!r})"


class FileSystemConfigBuilder(Generic[ConfigT]):
    """
    Base for per-scheme config builders.

    Subclasses set ``scheme`` and ``config_class`` and add typed accessors on
    top of ``_get`` and ``_set``. Builders hold no state of their own and are
    shared through ``get_instance()``.
    """

    scheme: ClassVar[str]
    config_class: ClassVar[type[BaseModel]]

    _instances: ClassVar[dict[type, "FileSystemConfigBuilder"]] = {}
    _instances_lock: ClassVar[threading.Lock] = threading.Lock()

    @classmethod
    def get_instance(cls):
        with cls._instances_lock:
            instance = cls._instances.get(cls)
            if instance is None:
                instance = cls()
                cls._instances[cls] = instance
            return instance

    def get_config(self, opts: FileSystemOptions | None) -> ConfigT:
        """The scheme's config from ``opts``, or the defaults"""
        config = opts.get_config(self.scheme) if opts is not None else None
        if config is None:
            return self.config_class()  # type: ignore[return-value]
        return config  # type: ignore[return-value]

    def _get(self, opts: FileSystemOptions | None, field: str) -> Any:
        return getattr(self.get_config(opts), field)

    def _set(self, opts: FileSystemOptions, field: str, value: Any) -> None:
        current = self.get_config(opts).model_dump()
        current[field] = value
        opts.set_config(self.scheme, self.config_class.model_validate(current))
