"""Rate-limit information carried in response headers."""

from __future__ import annotations

import dataclasses
import re
from collections.abc import Mapping
from datetime import datetime, timedelta
from fractions import Fraction
from typing import Any

_UNITS = {
    "ns": 1,
    "us": 1_000,
    "\u00b5s": 1_000,
    "\u03bcs": 1_000,
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60_000_000_000,
    "h": 3_600_000_000_000,
}

_SEGMENT = re.compile(r"([0-9]*)(?:\.([0-9]*))?([^0-9.]*)")
_INTEGER = re.compile(r"[+-]?[0-9]+")
_MAX_NANOSECONDS = (1 << 63) - 1


def parse_duration(text: str) -> timedelta:
    """Parse a duration such as ``"1h30m"``, ``"300ms"`` or ``"-1.5s"``."""
    original = text
    negative = False
    if text and text[0] in "+-":
        negative = text[0] == "-"
        text = text[1:]
    if text == "0":
        return timedelta(0)
    if not text:
        raise ValueError(f"invalid duration {original!r}")
    total = Fraction(0)
    position = 0
    while position < len(text):
        match = _SEGMENT.match(text, position)
        whole, fraction, unit = match.groups()
        if not whole and not fraction:
            raise ValueError(f"invalid duration {original!r}")
        if not unit:
            raise ValueError(f"missing unit in duration {original!r}")
        scale = _UNITS.get(unit)
        if scale is None:
            raise ValueError(f"unknown unit {unit!r} in duration {original!r}")
        amount = Fraction(int(whole or "0"))
        if fraction:
            amount += Fraction(int(fraction), 10 ** len(fraction))
        total += amount * scale
        position = match.end()
    nanoseconds = int(total)
    limit = _MAX_NANOSECONDS + 1 if negative else _MAX_NANOSECONDS
    if nanoseconds > limit:
        raise ValueError(f"invalid duration {original!r}")
    if negative:
        nanoseconds = -nanoseconds
    seconds, remainder = divmod(nanoseconds, 1_000_000_000)
    return timedelta(seconds=seconds, microseconds=remainder // 1_000)


class ResetTime(str):
    """A reset interval as sent by the server, e.g. ``"6m0s"``."""

    def time(self, now: datetime | None = None) -> datetime:
        """Moment of the reset; an unparsable interval counts as zero."""
        try:
            delta = parse_duration(self)
        except ValueError:
            delta = timedelta(0)
        base = datetime.now() if now is None else now
        return base + delta


def _atoi(value: str) -> int:
    return int(value) if _INTEGER.fullmatch(value) else 0


@dataclasses.dataclass(frozen=True)
class RateLimitHeaders:
    limit_requests: int = 0
    limit_tokens: int = 0
    remaining_requests: int = 0
    remaining_tokens: int = 0
    reset_requests: ResetTime = ResetTime("")
    reset_tokens: ResetTime = ResetTime("")

    @classmethod
    def from_headers(cls, headers: Mapping[str, Any]) -> RateLimitHeaders:
        """Read the ``x-ratelimit-*`` headers; missing or bad numbers become 0."""
        lowered: dict[str, str] = {}
        for key, value in headers.items():
            if isinstance(value, (list, tuple)):
                value = value[0] if value else ""
            lowered.setdefault(key.lower(), str(value))

        def get(name: str) -> str:
            return lowered.get(name, "")

        return cls(
            limit_requests=_atoi(get("x-ratelimit-limit-requests")),
            limit_tokens=_atoi(get("x-ratelimit-limit-tokens")),
            remaining_requests=_atoi(get("x-ratelimit-remaining-requests")),
            remaining_tokens=_atoi(get("x-ratelimit-remaining-tokens")),
            reset_requests=ResetTime(get("x-ratelimit-reset-requests")),
            reset_tokens=ResetTime(get("x-ratelimit-reset-tokens")),
        )