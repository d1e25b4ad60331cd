"""Shared fixtures for parse-bench tests."""

import os
import random

import pytest

os.environ.setdefault("MPLBACKEND", "Agg")

from parse_bench.candidates import Candidate
from parse_bench.workload import encode_document, generate_document


class FakeClock:
    """Deterministic nanosecond clock advanced explicitly by fake parsers."""

    def __init__(self):
        self.now = 0

    def __call__(self) -> int:
        return self.now

    def advance(self, nanoseconds: int) -> None:
        self.now += nanoseconds

    def parser(self, cost_ms: int, result=None):
        """A parse function that takes exactly cost_ms on this clock."""

        def parse(text):
            self.advance(cost_ms * 1_000_000)
            return result if result is not None else {"length": len(text)}

        return parse


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture(scope="session")
def small_document() -> dict:
    return generate_document("small", random.Random(42))


@pytest.fixture(scope="session")
def small_encoded(small_document) -> str:
    return encode_document(small_document)


@pytest.fixture
def failing_candidate() -> Candidate:
    def parse(text):
        raise ValueError("cannot parse")

    return Candidate("broken", parse)
