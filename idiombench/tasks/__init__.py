"""Command line tasks built on the benchmark runner."""
