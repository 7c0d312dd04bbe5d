from collections.abc import Callable
from importlib import import_module
from pkgutil import walk_packages
from types import ModuleType as PythonModule

from unique_sentinel import Registry, Sentinel

__all__ = ("preload_packages",)


def preload_packages(
    *packages: PythonModule | str,
    predicate: Callable[[str], bool] = lambda module_name: True,
    registry: Registry | None = None,
) -> dict[str, Sentinel]:
    """
    Function for importing all modules in Python packages, so that the sentinels
    they declare are registered before anything is unpickled.
    Pass the `predicate` parameter if you want to filter the modules to be imported.
    Return the sentinels registered during the import, by qualified name.
    """

    if registry is None:
        registry = Registry.current()

    known = frozenset(registry)

    with registry.use_temporarily():
        for package in packages:
            if isinstance(package, str):
                package = import_module(package)

            __import_modules_from(package, predicate)

    return {
        name: registry.lookup(name)
        for name in registry
        if name not in known
    }


def __import_modules_from(
    package: PythonModule,
    predicate: Callable[[str], bool],
) -> None:
    package_name = package.__name__

    try:
        package_path = package.__path__
    except AttributeError as exc:
        raise TypeError(f"`{package_name}` isn't Python package.") from exc

    for info in walk_packages(path=package_path, prefix=f"{package_name}."):
        name = info.name

        if info.ispkg or not predicate(name):
            continue

        import_module(name)
