from __future__ import annotations

import math
import re
from datetime import timedelta
from typing import Union

Duration = Union[int, float, timedelta, str]

_NUMBER_RE = re.compile(r"^\d+(?:\.\d+)?$")
_DURATION_RE = re.compile(r"^(?:\d+(?:\.\d+)?(?:ms|s|m|h))+$")
_PART_RE = re.compile(r"(?P<value>\d+(?:\.\d+)?)(?P<unit>ms|s|m|h)")

_UNIT_SECONDS = {"ms": 0.001, "s": 1.0, "m": 60.0, "h": 3600.0}


def parse_duration_to_seconds(raw: str) -> float:
    """Parse duration strings like '500ms', '10s', '1m30s', '1h' into seconds.

    A bare number ('0', '2.5') is taken as seconds.
    """
    text = raw.strip()
    if _NUMBER_RE.match(text):
        return float(text)

    if not _DURATION_RE.match(text):
        raise ValueError(
            "duration must be seconds or <number><unit>[<number><unit>...] where unit is ms|s|m|h"
        )

    return sum(
        float(part.group("value")) * _UNIT_SECONDS[part.group("unit")]
        for part in _PART_RE.finditer(text)
    )


def to_seconds(value: Duration) -> float:
    """Normalize a time span to float seconds.

    Accepts plain seconds (int/float), a ``timedelta`` or a duration string
    understood by :func:`parse_duration_to_seconds`.
    """
    if isinstance(value, bool):
        raise ValueError("duration must be a number, timedelta or string, not bool")

    if isinstance(value, timedelta):
        seconds = value.total_seconds()
    elif isinstance(value, (int, float)):
        seconds = float(value)
    elif isinstance(value, str):
        seconds = parse_duration_to_seconds(value)
    else:
        raise ValueError(f"unsupported duration type: {type(value).__name__}")

    if math.isnan(seconds) or math.isinf(seconds):
        raise ValueError("duration must be finite")
    if seconds < 0:
        raise ValueError("duration must be non-negative")

    return seconds
