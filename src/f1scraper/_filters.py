"""Query parameter builder for OpenF1 equality filters."""

from __future__ import annotations

from typing import Any

LATEST = "latest"


def _format_value(value: Any) -> str:
    if isinstance(value, bool):
        return str(value).lower()
    return str(value)


def build_query_params(**kwargs: Any) -> list[tuple[str, str]]:
    """Build a list of query parameter tuples from keyword arguments.

    Every value becomes an equality filter (``key=value``). ``None`` values are
    skipped so callers can pass optional filters straight through.

    Args:
        **kwargs: Parameter names mapped to plain values. The sentinel
                  ``"latest"`` is passed through unchanged.

    Returns:
        List of (key, value) tuples suitable for httpx params.
    """
    params: list[tuple[str, str]] = []
    for key, value in kwargs.items():
        if value is None:
            continue
        params.append((key, _format_value(value)))
    return params
