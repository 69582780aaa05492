"""Process-wide cache sharing heavyweight analysis resources.

Many pipelines are built from identical configuration (index and query
analyzers, several fields, several collections). Hyphenation pattern sets and
large word lists are expensive to build, so they are loaded once per distinct
configuration and shared by every pipeline that asks for them.

Usage::

    DICTIONARY = ResourceType("my.dictionary", DictionaryConfig, Dictionary)

    cache = ResourceCache.instance()
    cache.register_loader(DICTIONARY, lambda ref: Dictionary.load(ref.key))
    dictionary = cache.get_resource(DICTIONARY.create_reference(config))

The key of a reference (``config`` above) defines equivalence. It must be an
immutable value that includes a content digest of every file it depends on,
so that a changed file yields an unequal key and a fresh load.

Entries are held through weak references: a resource stays cached while some
pipeline still holds it and is reclaimed by the garbage collector afterwards.
There is no explicit eviction.
"""

from __future__ import annotations

import logging
import threading
import weakref
from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from ._errors import ConfigurationError, DecompoundError, ResourceLoadError

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)

K = TypeVar("K")
R = TypeVar("R")


@dataclass(frozen=True)
class ResourceType(Generic[K, R]):
    """A named kind of resource; equality is by name only."""

    name: str
    key_type: type = field(default=object, compare=False)
    value_type: type = field(default=object, compare=False)

    def create_reference(self, key: K) -> ResourceRef[K, R]:
        return ResourceRef(self, key)


@dataclass(frozen=True)
class ResourceRef(Generic[K, R]):
    """Cache key: a resource type plus the configuration to load it from."""

    type: ResourceType[K, R]
    key: K


class ResourceCache:
    """Thread-safe, weakly-valued cache of loaded resources.

    At most one load runs per distinct reference; concurrent callers for the
    same reference wait for it and get its result or its exception. A failed
    load is not remembered, the next request loads again.
    """

    _instance: ResourceCache | None = None
    _instance_lock = threading.Lock()

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._loaders: dict[str, Callable[[ResourceRef[Any, Any]], Any]] = {}
        self._resources: weakref.WeakValueDictionary[ResourceRef[Any, Any], Any] = (
            weakref.WeakValueDictionary()
        )
        # loaders may legitimately return None; None cannot be weakly referenced
        self._absent: set[ResourceRef[Any, Any]] = set()
        self._pending: dict[ResourceRef[Any, Any], Future] = {}

    @classmethod
    def instance(cls) -> ResourceCache:
        """The process-wide default cache, created on first use."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def register_loader(
        self,
        resource_type: ResourceType[K, R] | None,
        load: Callable[[ResourceRef[K, R]], R | None],
    ) -> None:
        """Set how resources of ``resource_type`` are loaded.

        Registering again for the same type replaces the previous loader.
        """
        if resource_type is None:
            raise ConfigurationError("The resource type of a loader must not be None")
        logger.debug(
            "[cache %x] register loader for %s", id(self), resource_type.name
        )
        with self._lock:
            self._loaders[resource_type.name] = load

    def get_resource(self, ref: ResourceRef[K, R]) -> R | None:
        """Return the resource for ``ref``, loading it if not cached.

        Raises:
            ConfigurationError: No loader is registered for the type.
            ResourceLoadError: The loader failed.
        """
        logger.debug("[cache %x] lookup %s", id(self), ref)
        with self._lock:
            resource = self._resources.get(ref)
            if resource is not None:
                return resource
            if ref in self._absent:
                return None
            future = self._pending.get(ref)
            owner = future is None
            if owner:
                future = Future()
                self._pending[ref] = future
                load = self._loaders.get(ref.type.name)

        if not owner:
            logger.debug("[cache %x] waiting for in-flight load of %s", id(self), ref)
            return future.result()

        try:
            resource = self._load(ref, load)
        except BaseException as exc:
            with self._lock:
                del self._pending[ref]
            future.set_exception(exc)
            raise

        with self._lock:
            if resource is None:
                self._absent.add(ref)
            else:
                self._resources[ref] = resource
            del self._pending[ref]
        future.set_result(resource)
        return resource

    def _load(self, ref: ResourceRef[K, R], load: Callable | None) -> R | None:
        if load is None:
            raise ConfigurationError(f"No loader registered for {ref.type.name}")
        logger.debug("[cache %x] load %s", id(self), ref)
        try:
            resource = load(ref)
        except DecompoundError:
            logger.warning("Loading %s failed", ref, exc_info=True)
            raise
        except (OSError, ValueError) as exc:
            logger.warning("Loading %s failed: %s", ref, exc)
            raise ResourceLoadError(f"Unable to load {ref}: {exc}") from exc
        if resource is not None:
            try:
                weakref.ref(resource)
            except TypeError:
                raise TypeError(
                    f"{type(resource).__name__} returned for {ref.type.name} "
                    "does not support weak references"
                ) from None
        return resource

    def __len__(self) -> int:
        with self._lock:
            return len(self._resources) + len(self._absent)

    def __contains__(self, ref: object) -> bool:
        with self._lock:
            return ref in self._resources or ref in self._absent
