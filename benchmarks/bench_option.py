"""Benchmarks for Option.

Run with: pytest benchmarks/ --benchmark-only -v

Options are single-use, so every benchmarked call builds its own.
"""

from beaut import Nothing, Some, init


def double(x):
    return x * 2


# =============================================================================
# Creation benchmarks
# =============================================================================


class TestOptionCreation:
    """Benchmark Option creation."""

    def test_some_creation(self, benchmark):
        """Benchmark Some creation."""
        benchmark(Some, 42)

    def test_nothing_creation(self, benchmark):
        """Benchmark Nothing creation."""
        benchmark(Nothing)


# =============================================================================
# Method call benchmarks
# =============================================================================


class TestOptionMethods:
    """Benchmark Option method calls."""

    def test_some_map(self, benchmark):
        """Benchmark Some.map."""
        benchmark(lambda: Some(5).map(double))

    def test_nothing_map(self, benchmark):
        """Benchmark Nothing.map."""
        benchmark(lambda: Nothing().map(double))

    def test_some_and_then(self, benchmark):
        """Benchmark Some.and_then."""
        benchmark(lambda: Some(5).and_then(lambda x: Some(x * 2)))

    def test_is_some_peek(self, benchmark):
        """Benchmark a non-consuming peek on one live option."""
        opt = Some(5)
        benchmark(opt.is_some)

    def test_take(self, benchmark):
        """Benchmark take on a Some."""
        benchmark(lambda: Some(5).take())


# =============================================================================
# Chains
# =============================================================================


class TestOptionChains:
    """Benchmark chained operations."""

    def test_map_chain(self, benchmark):
        """Benchmark five chained maps."""
        benchmark(lambda: Some(1).map(double).map(double).map(double).map(double).map(double).unwrap())

    def test_map_chain_with_tracking(self, benchmark):
        """Benchmark five chained maps with consumption tracking on."""
        init(track_consumption=True)
        try:
            benchmark(lambda: Some(1).map(double).map(double).map(double).map(double).map(double).unwrap())
        finally:
            init(track_consumption=False)
