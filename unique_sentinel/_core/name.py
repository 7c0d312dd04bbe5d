from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Self

from unique_sentinel.exceptions import InvalidNameError

__all__ = ("QualifiedName",)


@dataclass(frozen=True, slots=True)
class QualifiedName:
    """
    Parsed form of a sentinel name such as `pkg.module:Class.MISSING`.
    """

    value: str
    module: str | None
    components: tuple[str, ...]

    def __str__(self) -> str:
        return self.value

    @property
    def short_name(self) -> str:
        return self.components[-1]

    @property
    def default_repr(self) -> str:
        return f"<{self.short_name}>"

    @property
    def import_candidates(self) -> Iterator[str]:
        """
        Modules that may declare the sentinel, most specific first.
        """

        if self.module is None:
            return

        if ":" in self.value:
            yield self.module
            return

        parts = self.module.split(".")

        for index in range(len(parts), 0, -1):
            yield ".".join(parts[:index])

    @classmethod
    def parse(cls, value: Any) -> Self:
        if not isinstance(value, str):
            raise InvalidNameError(value, f"expected `str`, got `{type(value)}`")

        if not value:
            raise InvalidNameError(value, "name is empty")

        module, separator, path = value.rpartition(":")

        if ":" in module:
            raise InvalidNameError(value, "more than one `:` separator")

        if separator and not module:
            raise InvalidNameError(value, "empty module path before `:`")

        components = tuple(path.split("."))
        cls.__check_components(value, components)

        if separator:
            cls.__check_components(value, tuple(module.split(".")))
            return cls(value, module, components)

        if len(components) > 1:
            module = ".".join(components[:-1])
            return cls(value, module, components)

        return cls(value, None, components)

    @staticmethod
    def __check_components(value: str, components: tuple[str, ...]) -> None:
        for component in components:
            if not component.isidentifier():
                raise InvalidNameError(
                    value,
                    f"`{component}` isn't a Python identifier",
                )
