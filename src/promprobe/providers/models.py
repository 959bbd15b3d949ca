"""
Query result models for metrics providers.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping

METRIC_NAME_LABEL = "__name__"

_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


def _quote(value: str) -> str:
    """Double-quote a label value with Go-style escapes, as Prometheus prints it."""
    out = []
    for ch in value:
        code = ord(ch)
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        elif code < 0x80:
            out.append(f"\\x{code:02x}")
        elif code < 0x10000:
            out.append(f"\\u{code:04x}")
        else:
            out.append(f"\\U{code:08x}")
    return '"' + "".join(out) + '"'


def labelset_string(labels: Mapping[str, str]) -> str:
    """
    Render a labelset the way Prometheus prints a metric.

    ``{"__name__": "up", "job": "api", "env": "prod"}`` becomes
    ``up{env="prod", job="api"}``. Labels are sorted by name so the
    result does not depend on mapping order.
    """
    name = labels.get(METRIC_NAME_LABEL, "")
    pairs = [
        f"{label}={_quote(str(value))}"
        for label, value in sorted(labels.items())
        if label != METRIC_NAME_LABEL
    ]
    if not pairs:
        return name or "{}"
    return f"{name}{{{', '.join(pairs)}}}"


@dataclass(frozen=True)
class Sample:
    """One row of an instant-vector query result."""

    labels: Mapping[str, str]
    value: Any
    timestamp: float | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "labels", MappingProxyType(dict(self.labels)))

    @property
    def metric(self) -> str:
        return labelset_string(self.labels)
