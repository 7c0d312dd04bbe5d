from typing import Any

__all__ = (
    "DuplicateNameError",
    "InvalidNameError",
    "ResolutionError",
    "SentinelError",
)


class SentinelError(Exception): ...


class InvalidNameError(ValueError, SentinelError):
    __slots__ = ("__name",)

    __name: Any

    def __init__(self, name: Any, reason: str) -> None:
        super().__init__(f"`{name!r}` isn't a valid sentinel name: {reason}.")
        self.__name = name

    @property
    def name(self) -> Any:
        return self.__name


class DuplicateNameError(SentinelError):
    __slots__ = ("__name", "__existing")

    __name: str
    __existing: Any

    def __init__(self, name: str, existing: Any, message: str | None = None) -> None:
        super().__init__(message or f"A sentinel is already bound to `{name}`.")
        self.__name = name
        self.__existing = existing

    @property
    def name(self) -> str:
        return self.__name

    @property
    def existing(self) -> Any:
        return self.__existing


class ResolutionError(LookupError, SentinelError):
    __slots__ = ("__name",)

    __name: str

    def __init__(self, name: str, message: str | None = None) -> None:
        super().__init__(message or f"No sentinel is bound to `{name}`.")
        self.__name = name

    @property
    def name(self) -> str:
        return self.__name
