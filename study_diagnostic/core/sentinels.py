from __future__ import annotations

from typing import Mapping, TypeVar

_T = TypeVar("_T")


class _AbsentType:
    """Marker for a key that is missing from a score mapping.

    Distinct from ``None`` and ``0`` so a real zero score is never read as
    "not answered".
    """

    __slots__ = ()
    _instance: "_AbsentType | None" = None

    def __new__(cls) -> "_AbsentType":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:  # pragma: no cover - repr logic trivial
        return "<ABSENT>"

    def __bool__(self) -> bool:
        raise TypeError("ABSENT has no truth value; compare with `is ABSENT`")


ABSENT = _AbsentType()


def lookup(scores: Mapping[str, _T], key: str) -> _T | _AbsentType:
    """Return ``scores[key]`` or the ``ABSENT`` marker."""

    return scores.get(key, ABSENT)


def score_or_default(scores: Mapping[str, int], key: str, default: int) -> int:
    """Return the score for ``key``, falling back to ``default`` only when absent."""

    value = lookup(scores, key)
    if value is ABSENT:
        return default
    return value  # type: ignore[return-value]


__all__ = ["ABSENT", "lookup", "score_or_default"]
