"""
Instance lifecycle registries (Singleton and Multiton).

An :class:`InstanceRegistry` owns every managed instance. Types opt in by
being registered, not by inheriting from a base class:

    registry = InstanceRegistry()
    assets = registry.singleton(AssetStore)
    store = assets.instance("cdn")          # constructs AssetStore(), calls init("cdn")
    assert assets.instance() is store       # held until kill()/renew()

Registration seals the type: managed instances cannot be copied, pickled or
unpickled. The seal is permanent for the process; closing the registry does
not lift it. Built-in and other immutable types cannot be sealed and are
rejected with UnmanageableTypeError.
"""

from __future__ import annotations

import logging
from threading import RLock
from typing import Any, Callable, Dict, Generic, Hashable, Iterator, List, Optional, Protocol, Type, TypeVar, runtime_checkable

logger = logging.getLogger(__name__)

INIT_METHOD_NAME = "init"

T = TypeVar("T")


class RegistryError(RuntimeError):
    """Base class for registry usage errors."""


class ManagedInstanceError(RegistryError):
    """Raised when a registry-managed instance is copied or (de)serialized."""


class RegistryClosedError(RegistryError):
    """Raised when a closed registry is asked to register a type."""


class UnmanageableTypeError(RegistryError):
    """Raised when a type cannot be sealed (built-in or otherwise immutable)."""


@runtime_checkable
class Initializable(Protocol):
    """Optional hook, called with the caller's arguments after construction."""

    def init(self, *args: Any, **kwargs: Any) -> Any:
        ...


def _refuse_copy(self, *args: Any) -> Any:
    raise ManagedInstanceError(f"No cloning allowed! ({type(self).__name__} is registry-managed)")


def _refuse_serialize(self, *args: Any) -> Any:
    raise ManagedInstanceError(f"No serialization allowed! ({type(self).__name__} is registry-managed)")


def _refuse_deserialize(self, *args: Any) -> Any:
    raise ManagedInstanceError(f"No unserialization allowed! ({type(self).__name__} is registry-managed)")


_SEAL_MARKER = "__asseter_sealed__"

_GUARDS: Dict[str, Callable[..., Any]] = {
    "__copy__": _refuse_copy,
    "__deepcopy__": _refuse_copy,
    "__reduce__": _refuse_serialize,
    "__reduce_ex__": _refuse_serialize,
    "__getstate__": _refuse_serialize,
    "__setstate__": _refuse_deserialize,
}


def seal(cls: Type[T]) -> Type[T]:
    """
    Disable copying and pickling on ``cls``.

    Safe to call more than once; a sealed type is left untouched. There is
    no unseal.
    """
    if cls.__dict__.get(_SEAL_MARKER):
        return cls
    try:
        setattr(cls, _SEAL_MARKER, True)
    except TypeError as exc:
        raise UnmanageableTypeError(f"Cannot manage {cls.__name__}: its attributes are immutable ({exc})") from exc
    for name, guard in _GUARDS.items():
        setattr(cls, name, guard)
    return cls


def _find_init_hook(cls: type) -> Optional[Callable[..., Any]]:
    if not issubclass(cls, Initializable):
        return None
    hook = getattr(cls, INIT_METHOD_NAME)
    return hook if callable(hook) else None


class _Handle(Generic[T]):
    def __init__(self, cls: Type[T], lock: RLock) -> None:
        self.cls = cls
        self._lock = lock
        self._init_hook = _find_init_hook(cls)

    @property
    def initializable(self) -> bool:
        """Whether the managed type defines an init hook."""
        return self._init_hook is not None

    def _forge(self, *args: Any, **kwargs: Any) -> T:
        obj = self.cls()
        if self._init_hook is not None:
            self._init_hook(obj, *args, **kwargs)
        return obj

    def _is_live(self, obj: Any) -> bool:
        return obj is not None and isinstance(obj, self.cls)


class Singleton(_Handle[T]):
    """At most one live instance of the managed type."""

    def __init__(self, cls: Type[T], lock: RLock) -> None:
        super().__init__(cls, lock)
        self._instance: Optional[T] = None

    @property
    def held(self) -> bool:
        return self._is_live(self._instance)

    def instance(self, *args: Any, **kwargs: Any) -> T:
        """
        Return the held instance, constructing it first if needed.

        Arguments are forwarded to the init hook, and only used when a new
        instance is constructed.
        """
        with self._lock:
            if not self._is_live(self._instance):
                logger.debug("Constructing singleton %s", self.cls.__name__)
                self._instance = self._forge(*args, **kwargs)
            return self._instance

    def kill(self) -> None:
        """Release the held instance, if any."""
        with self._lock:
            if self._instance is not None:
                logger.debug("Killing singleton %s", self.cls.__name__)
            self._instance = None

    def renew(self, *args: Any, **kwargs: Any) -> T:
        """Replace the held instance with a freshly constructed one."""
        with self._lock:
            self.kill()
            return self.instance(*args, **kwargs)

    def clear(self) -> None:
        self.kill()


class Multiton(_Handle[T]):
    """
    At most one live instance of the managed type per key.

    The init hook receives the key as its first argument, followed by the
    remaining arguments given to :meth:`instance` or :meth:`renew`.
    """

    def __init__(self, cls: Type[T], lock: RLock) -> None:
        super().__init__(cls, lock)
        self._instances: Dict[Hashable, T] = {}

    def instance(self, key: Hashable, *args: Any, **kwargs: Any) -> T:
        with self._lock:
            current = self._instances.get(key)
            if not self._is_live(current):
                logger.debug("Constructing %s instance %r", self.cls.__name__, key)
                current = self._forge(key, *args, **kwargs)
                self._instances[key] = current
            return current

    def kill(self, key: Hashable) -> None:
        with self._lock:
            if self._instances.pop(key, None) is not None:
                logger.debug("Killing %s instance %r", self.cls.__name__, key)

    def renew(self, key: Hashable, *args: Any, **kwargs: Any) -> T:
        with self._lock:
            self.kill(key)
            return self.instance(key, *args, **kwargs)

    def clear(self) -> None:
        """Drop every held instance at once."""
        with self._lock:
            if self._instances:
                logger.debug("Clearing %d %s instance(s)", len(self._instances), self.cls.__name__)
            self._instances = {}

    def keys(self) -> List[Hashable]:
        with self._lock:
            return list(self._instances)

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return self._is_live(self._instances.get(key))

    def __len__(self) -> int:
        with self._lock:
            return len(self._instances)

    def __iter__(self) -> Iterator[Hashable]:
        return iter(self.keys())


class InstanceRegistry:
    """
    Owner of all Singleton and Multiton state for a process (or a test).

    Create one at start-up, pass it to whatever needs managed instances, and
    close it at shutdown. ``with InstanceRegistry() as registry:`` does both.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._singletons: Dict[type, Singleton[Any]] = {}
        self._multitons: Dict[type, Multiton[Any]] = {}
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def singleton(self, cls: Type[T]) -> Singleton[T]:
        """Register ``cls`` for single-instance management and return its handle."""
        with self._lock:
            self._ensure_open()
            handle = self._singletons.get(cls)
            if handle is None:
                handle = Singleton(seal(cls), self._lock)
                self._singletons[cls] = handle
                logger.debug("Registered singleton %s (init hook: %s)", cls.__name__, handle.initializable)
            return handle

    def multiton(self, cls: Type[T]) -> Multiton[T]:
        """Register ``cls`` for per-key management and return its handle."""
        with self._lock:
            self._ensure_open()
            handle = self._multitons.get(cls)
            if handle is None:
                handle = Multiton(seal(cls), self._lock)
                self._multitons[cls] = handle
                logger.debug("Registered multiton %s (init hook: %s)", cls.__name__, handle.initializable)
            return handle

    def clear(self) -> None:
        """Release every managed instance; registrations are kept."""
        with self._lock:
            for handle in self._handles():
                handle.clear()

    def close(self) -> None:
        with self._lock:
            self.clear()
            self._closed = True

    def _handles(self) -> List[_Handle[Any]]:
        return [*self._singletons.values(), *self._multitons.values()]

    def _ensure_open(self) -> None:
        if self._closed:
            raise RegistryClosedError("Registry has been closed.")

    def __enter__(self) -> InstanceRegistry:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
