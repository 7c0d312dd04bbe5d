from __future__ import annotations

from abc import ABC
from collections.abc import Iterator
from contextlib import contextmanager, suppress
from contextvars import ContextVar
from dataclasses import FrozenInstanceError, dataclass, field
from importlib import import_module
from logging import Logger, getLogger
from threading import RLock
from typing import Any, ClassVar, NoReturn, Self, final, override
from uuid import uuid4
from weakref import WeakValueDictionary

from unique_sentinel._core.common.event import Event, EventChannel, EventListener
from unique_sentinel._core.common.threading import synchronized
from unique_sentinel._core.name import QualifiedName
from unique_sentinel.exceptions import DuplicateNameError, ResolutionError

"""
Events
"""


@dataclass(frozen=True, slots=True)
class RegistryEvent(Event, ABC):
    registry: Registry


@dataclass(frozen=True, slots=True)
class SentinelRegistered(RegistryEvent):
    sentinel: Sentinel

    @override
    def __str__(self) -> str:
        return (
            f"`{self.sentinel!r}` has been registered as "
            f"`{self.sentinel.name}` in `{self.registry}`."
        )


"""
Sentinel
"""


@final
class Sentinel:
    __slots__ = (
        "__weakref__",
        "__qualified_name",
        "__display_repr",
        "__registry",
    )

    __qualified_name: QualifiedName
    __display_repr: str
    __registry: Registry

    def __new__(cls, *args: Any, **kwargs: Any) -> NoReturn:
        raise TypeError(
            "Sentinels can't be instantiated directly, use `create_sentinel` instead."
        )

    @override
    def __setattr__(self, name: str, value: Any, /) -> NoReturn:
        raise FrozenInstanceError(f"Can't assign to `{name}`, `{self!r}` is frozen.")

    @override
    def __delattr__(self, name: str, /) -> NoReturn:
        raise FrozenInstanceError(f"Can't delete `{name}`, `{self!r}` is frozen.")

    @override
    def __repr__(self) -> str:
        return self.display_repr

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> Self:
        return self

    def __deepcopy__(self, memo: dict[int, Any], /) -> Self:
        return self

    @override
    def __reduce__(self) -> tuple[Any, ...]:
        return restore, (self.registry.name, self.name)

    @property
    def qualified_name(self) -> QualifiedName:
        return self.__qualified_name

    @property
    def display_repr(self) -> str:
        return self.__display_repr

    @property
    def registry(self) -> Registry:
        return self.__registry

    @property
    def name(self) -> str:
        return self.qualified_name.value

    @property
    def short_name(self) -> str:
        return self.qualified_name.short_name

    @classmethod
    def _new(
        cls,
        qualified_name: QualifiedName,
        display_repr: str,
        registry: Registry,
    ) -> Self:
        instance = object.__new__(cls)
        setter = object.__setattr__
        setter(instance, "_Sentinel__qualified_name", qualified_name)
        setter(instance, "_Sentinel__display_repr", display_repr)
        setter(instance, "_Sentinel__registry", registry)
        return instance


def restore(registry_name: str, name: str) -> Sentinel:
    registry = Registry.find(registry_name)
    return registry.resolve(name)


"""
Registry
"""


@dataclass(eq=False, frozen=True, slots=True, weakref_slot=True)
class Registry:
    name: str = field(default_factory=lambda: f"anonymous@{uuid4().hex[:7]}")
    __records: dict[str, Sentinel] = field(
        default_factory=dict,
        init=False,
        repr=False,
    )
    __lock: RLock = field(
        default_factory=RLock,
        init=False,
        repr=False,
    )
    __channel: EventChannel = field(
        default_factory=EventChannel,
        init=False,
        repr=False,
    )
    __loggers: list[Logger] = field(
        default_factory=lambda: [getLogger("python-unique-sentinel")],
        init=False,
        repr=False,
    )

    __instances: ClassVar[WeakValueDictionary[str, Registry]] = WeakValueDictionary()
    __named_instances: ClassVar[dict[str, Registry]] = {}
    __current: ClassVar[ContextVar[Registry | None]] = ContextVar(
        "unique_sentinel_registry",
        default=None,
    )
    __default_name: ClassVar[str] = "__default__"

    def __post_init__(self) -> None:
        with synchronized():
            existing = self.__instances.get(self.name)

            if existing is not None:
                raise DuplicateNameError(
                    self.name,
                    existing,
                    f"A registry named `{self.name}` already exists.",
                )

            self.__instances[self.name] = self

    def __contains__(self, name: str, /) -> bool:
        return name in self.__records

    def __iter__(self) -> Iterator[str]:
        yield from tuple(self.__records)

    def __len__(self) -> int:
        return len(self.__records)

    def get(self, name: str) -> Sentinel | None:
        return self.__records.get(name)

    def lookup(self, name: str) -> Sentinel:
        try:
            return self.__records[name]
        except KeyError as exc:
            raise ResolutionError(
                name,
                f"No sentinel is bound to `{name}` in `{self}`.",
            ) from exc

    def register(self, name: str, display_repr: str | None = None) -> Sentinel:
        qualified_name = QualifiedName.parse(name)
        display_repr = self.__check_repr(display_repr)

        with synchronized(self.__lock):
            existing = self.__records.get(qualified_name.value)

            if existing is not None:
                raise DuplicateNameError(
                    qualified_name.value,
                    existing,
                    f"`{existing!r}` is already bound to "
                    f"`{qualified_name}` in `{self}`.",
                )

            return self.__bind(qualified_name, display_repr)

    def resolve_or_create(
        self,
        name: str,
        display_repr: str | None = None,
    ) -> Sentinel:
        qualified_name = QualifiedName.parse(name)
        display_repr = self.__check_repr(display_repr)

        with suppress(KeyError):
            existing = self.__records[qualified_name.value]
            return self.__check_conflict(existing, display_repr)

        with synchronized(self.__lock):
            existing = self.__records.get(qualified_name.value)

            if existing is None:
                return self.__bind(qualified_name, display_repr)

        return self.__check_conflict(existing, display_repr)

    def resolve(self, name: str) -> Sentinel:
        with suppress(KeyError):
            return self.__records[name]

        qualified_name = QualifiedName.parse(name)

        with self.use_temporarily():
            self.__import_declaring_module(qualified_name)

        return self.lookup(name)

    def add_listener(self, listener: EventListener) -> Self:
        self.__channel.add_listener(listener)
        return self

    def remove_listener(self, listener: EventListener) -> Self:
        self.__channel.remove_listener(listener)
        return self

    def add_logger(self, logger: Logger) -> Self:
        self.__loggers.append(logger)
        return self

    @contextmanager
    def dispatch(self, event: Event) -> Iterator[None]:
        with self.__channel.dispatch(event):
            yield
            message = str(event)
            self.__debug(message)

    @contextmanager
    def use_temporarily(self) -> Iterator[Self]:
        token = self.__current.set(self)

        try:
            yield self
        finally:
            self.__current.reset(token)

    def __bind(
        self,
        qualified_name: QualifiedName,
        display_repr: str | None,
    ) -> Sentinel:
        sentinel = Sentinel._new(
            qualified_name,
            display_repr or qualified_name.default_repr,
            self,
        )
        event = SentinelRegistered(self, sentinel)

        with self.dispatch(event):
            self.__records[qualified_name.value] = sentinel

        return sentinel

    def __import_declaring_module(self, qualified_name: QualifiedName) -> None:
        for module_name in qualified_name.import_candidates:
            try:
                import_module(module_name)
            except ModuleNotFoundError as exc:
                if not self.__is_missing_module(exc, module_name):
                    raise

                continue

            self.__debug(
                f"`{module_name}` has been imported to resolve `{qualified_name}`."
            )
            return

    def __check_conflict(
        self,
        existing: Sentinel,
        display_repr: str | None,
    ) -> Sentinel:
        if display_repr is None or display_repr == existing.display_repr:
            return existing

        raise DuplicateNameError(
            existing.name,
            existing,
            f"`{existing.name}` is already bound to `{existing!r}` in `{self}`, "
            f"it can't be represented as `{display_repr}`.",
        )

    def __debug(self, message: object) -> None:
        for logger in tuple(self.__loggers):
            logger.debug(message)

    @staticmethod
    def __check_repr(display_repr: str | None) -> str | None:
        if display_repr is None:
            return None

        if not isinstance(display_repr, str):
            raise TypeError(
                f"Sentinel representation must be a `str`, "
                f"got `{type(display_repr)}`."
            )

        if not display_repr:
            raise ValueError("Sentinel representation can't be empty.")

        return display_repr

    @staticmethod
    def __is_missing_module(exc: ModuleNotFoundError, module_name: str) -> bool:
        missing = exc.name

        if missing is None:
            return False

        return module_name == missing or module_name.startswith(f"{missing}.")

    @classmethod
    def find(cls, name: str) -> Registry:
        if name == cls.__default_name:
            return cls.default()

        try:
            return cls.__instances[name]
        except KeyError as exc:
            raise ResolutionError(name, f"No registry named `{name}`.") from exc

    @classmethod
    def from_name(cls, name: str) -> Registry:
        with suppress(KeyError):
            return cls.__named_instances[name]

        with synchronized():
            instance = cls.__instances.get(name)

            if instance is None:
                instance = cls(name)

            return cls.__named_instances.setdefault(name, instance)

    @classmethod
    def default(cls) -> Registry:
        return cls.from_name(cls.__default_name)

    @classmethod
    def current(cls) -> Registry:
        registry = cls.__current.get()

        if registry is None:
            return cls.default()

        return registry
