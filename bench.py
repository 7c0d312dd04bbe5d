import itertools
import pickle
from collections.abc import Callable, Iterator
from copy import deepcopy
from dataclasses import dataclass
from decimal import Decimal
from statistics import mean
from timeit import timeit
from typing import Annotated, Any, ClassVar, Self

from tabulate import tabulate
from typer import Option, Typer

from unique_sentinel import Registry, create_sentinel


@dataclass(frozen=True, slots=True)
class Benchmark:
    x: Decimal
    y: Decimal

    @property
    def difference_rate(self) -> Decimal:
        return ((self.y - self.x) / self.x) * 100

    @classmethod
    def compare(
        cls,
        x: Callable[..., Any],
        y: Callable[..., Any],
        number: int = 1,
    ) -> Self:
        x = mean(cls._time_in_ns(x, number))
        y = mean(cls._time_in_ns(y, number))
        return cls(x, y)

    @staticmethod
    def _time_in_ns(callable_: Callable[..., Any], number: int) -> Iterator[Decimal]:
        for _ in range(number):
            delta = timeit(callable_, number=1)
            yield Decimal(delta) * (10**6)


@dataclass(frozen=True, slots=True)
class BenchmarkResult:
    title: str
    benchmark: Benchmark

    @property
    def row(self) -> tuple[str, str, str, str]:
        rate = self.benchmark.difference_rate
        return (
            self.title,
            f"{self.benchmark.x:.2f}μs",
            f"{self.benchmark.y:.2f}μs",
            f"{rate:.2f}% slower" if rate >= 0 else f"{abs(rate):.2f}% faster",
        )


@dataclass(frozen=True, slots=True)
class SentinelBenchmark:
    """
    Each case is compared to the same operation on a bare `object()` marker.
    """

    cases: ClassVar[dict[str, tuple[Callable[..., Any], Callable[..., Any]]]] = {}

    def start(self, number: int = 1) -> Iterator[BenchmarkResult]:
        for title, (reference, callable_) in self.cases.items():
            result = Benchmark.compare(reference, callable_, number)
            yield BenchmarkResult(title, result)

    @classmethod
    def register(cls, title: str, reference: Callable[..., Any]):
        def decorator(wp):
            cls.cases[title] = (reference, wp)
            return wp

        return decorator


registry = Registry("bench")
counter = itertools.count()
marker = object()
MISSING = create_sentinel("bench.MISSING", registry=registry)


@SentinelBenchmark.register("creation", reference=object)
def create_new_sentinel():
    create_sentinel(f"bench.NEW_{next(counter)}", registry=registry)


@SentinelBenchmark.register("lookup", reference=lambda: marker)
def lookup_sentinel():
    create_sentinel("bench.MISSING", registry=registry)


@SentinelBenchmark.register("deepcopy", reference=lambda: deepcopy(marker))
def deepcopy_sentinel():
    deepcopy(MISSING)


@SentinelBenchmark.register(
    "pickle round trip",
    reference=lambda: pickle.loads(pickle.dumps(None)),
)
def pickle_sentinel():
    pickle.loads(pickle.dumps(MISSING))


cli = Typer()


@cli.command()
def main(number: Annotated[int, Option("--number", "-n", min=0)] = 1000):
    results = SentinelBenchmark().start(number)
    headers = ("", "Reference Time (μs)", "Sentinel Time (μs)", "Difference Rate (%)")
    data = (result.row for result in results)
    table = tabulate(data, headers=headers)
    print(table)


if __name__ == "__main__":
    cli()
