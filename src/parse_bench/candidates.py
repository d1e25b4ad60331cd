"""JSON parsers available for comparison."""

import json
from dataclasses import dataclass
from typing import Any, Callable

import msgspec
import orjson
import rapidjson
import ujson

from parse_bench.errors import ConfigurationError

BASELINE = "json"


@dataclass(frozen=True)
class Candidate:
    """A named parser taking JSON text and returning Python objects."""

    name: str
    parse: Callable[[str], Any]


def default_candidates() -> list[Candidate]:
    """Return the built-in candidates, standard library first."""
    decoder = msgspec.json.Decoder()
    return [
        Candidate("json", json.loads),
        Candidate("orjson", orjson.loads),
        Candidate("ujson", ujson.loads),
        Candidate("rapidjson", rapidjson.loads),
        Candidate("msgspec", msgspec.json.decode),
        Candidate("msgspec-decoder", decoder.decode),
    ]


def select_candidates(
    names: list[str] | tuple[str, ...] | None,
    candidates: list[Candidate] | None = None,
) -> list[Candidate]:
    """
    Filter candidates by name, keeping registry order.

    An empty or missing selection returns every candidate.
    """
    if candidates is None:
        candidates = default_candidates()
    if not names:
        return list(candidates)

    available = {c.name for c in candidates}
    unknown = [n for n in names if n not in available]
    if unknown:
        raise ConfigurationError(
            f"Unknown parser(s): {', '.join(unknown)}. "
            f"Available: {', '.join(c.name for c in candidates)}"
        )
    return [c for c in candidates if c.name in names]
