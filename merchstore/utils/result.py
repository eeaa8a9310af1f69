# merchstore/utils/result.py
from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: str


Result = Union[Ok[T], Err]


def parse_json(raw: str | bytes | None) -> Result[Any]:
    """Decode a JSON document without raising; blank input is an error too."""
    if raw is None or (isinstance(raw, (str, bytes)) and not raw.strip()):
        return Err("empty document")
    try:
        return Ok(json.loads(raw))
    except (TypeError, ValueError) as e:
        return Err(f"invalid JSON: {e}")
