from collections.abc import Iterator
from contextlib import contextmanager
from typing import Final
from uuid import uuid4

from unique_sentinel import Registry

__all__ = ("use_test_registry",)

_TEST_REGISTRY_PREFIX: Final[str] = "__testing__"


@contextmanager
def use_test_registry() -> Iterator[Registry]:
    """
    Context manager making a fresh registry the current one. Sentinels created
    inside the block don't leak into the default registry.
    """

    registry = Registry(f"{_TEST_REGISTRY_PREFIX}@{uuid4().hex[:7]}")

    with registry.use_temporarily():
        yield registry
