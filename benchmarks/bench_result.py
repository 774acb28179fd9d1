"""Benchmarks for Result and futures.

Run with: pytest benchmarks/ --benchmark-only -v
"""

from beaut import Err, Ok, ready, safe, spawn


def double(x):
    return x * 2


@safe
def parse(text):
    return int(text)


class TestResultCreation:
    """Benchmark Result creation."""

    def test_ok_creation(self, benchmark):
        """Benchmark Ok creation."""
        benchmark(Ok, 42)

    def test_err_creation(self, benchmark):
        """Benchmark Err creation."""
        benchmark(Err, 'error')


class TestResultMethods:
    """Benchmark Result method calls."""

    def test_ok_map(self, benchmark):
        """Benchmark Ok.map."""
        benchmark(lambda: Ok(5).map(double))

    def test_err_map(self, benchmark):
        """Benchmark Err.map (short-circuit)."""
        benchmark(lambda: Err('e').map(double))

    def test_and_then_chain(self, benchmark):
        """Benchmark three chained and_then calls."""
        step = lambda x: Ok(x + 1)  # noqa: E731
        benchmark(lambda: Ok(0).and_then(step).and_then(step).and_then(step).unwrap())

    def test_safe_call(self, benchmark):
        """Benchmark a @safe call that raises."""
        benchmark(parse, 'not a number')


class TestFutures:
    """Benchmark spawning and combinators."""

    def test_spawn_ready(self, benchmark):
        """Benchmark spawning an already-resolved future."""
        benchmark(lambda: spawn(ready(1)).use().wait())

    def test_map_then(self, benchmark):
        """Benchmark a map and a then over ready futures."""
        fut = ready(1).map(double).then(lambda v: ready(v + 1))
        benchmark(lambda: spawn(fut).use().wait())
