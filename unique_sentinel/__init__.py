from ._core.registry import Registry, Sentinel, SentinelRegistered

__all__ = (
    "Registry",
    "Sentinel",
    "SentinelRegistered",
    "create_sentinel",
    "find_sentinel",
    "get_sentinel",
    "reg",
)


def reg(name: str | None = None, /) -> Registry:
    if name is None:
        return Registry.current()

    return Registry.from_name(name)


def create_sentinel(
    qualified_name: str,
    display_repr: str | None = None,
    *,
    registry: Registry | None = None,
) -> Sentinel:
    if registry is None:
        registry = Registry.current()

    return registry.resolve_or_create(qualified_name, display_repr)


def find_sentinel(name: str) -> Sentinel:
    return Registry.current().lookup(name)


def get_sentinel(name: str) -> Sentinel | None:
    return Registry.current().get(name)
