"""Skeleton generation and shorthand token benchmark."""

from .lib import (
    CHARS_PER_TOKEN,
    DEFAULT_CASES,
    BenchmarkCase,
    BenchmarkResult,
    estimate_tokens,
    generate_layout_skeleton,
    run_benchmark,
)

__all__ = [
    "CHARS_PER_TOKEN",
    "BenchmarkCase",
    "BenchmarkResult",
    "DEFAULT_CASES",
    "generate_layout_skeleton",
    "estimate_tokens",
    "run_benchmark",
]
