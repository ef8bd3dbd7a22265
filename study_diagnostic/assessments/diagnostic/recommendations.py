from __future__ import annotations

from types import MappingProxyType
from typing import Callable, Iterable, List, Mapping, Sequence, Tuple, TypeVar

from study_diagnostic.assessments.diagnostic import resolve_parameters
from study_diagnostic.assessments.diagnostic.types import (
    ArticleRec,
    DiagnosticParameters,
    OneThing,
    RecommendationLimits,
    Scores,
    VideoRec,
)
from study_diagnostic.assessments.enums import FocusCode
from study_diagnostic.data.focus_content import DOMAIN_ACTIONS, FOCUS_BUNDLES

__all__ = [
    "select_focus_code",
    "select_one_thing",
    "select_domain_actions",
    "recommend_videos",
    "recommend_articles",
]

_R = TypeVar("_R", VideoRec, ArticleRec)


def _flag_values(flags: Iterable[str]) -> frozenset[str]:
    return frozenset(str(flag) for flag in flags)


def select_focus_code(flags: Iterable[str], *, params: DiagnosticParameters | None = None) -> FocusCode:
    """Walk the focus priority list and return the first rule that fires."""

    cfg = resolve_parameters(params)
    present = _flag_values(flags)
    for rule in cfg.focus_priority:
        if any(str(flag) in present for flag in rule.flags):
            return rule.focus
    return cfg.default_focus


def select_one_thing(
    flags: Iterable[str],
    scores: Scores,
    *,
    params: DiagnosticParameters | None = None,
) -> OneThing:
    """Pick the single focal intervention.

    Priority (default config): low priming, then low retrieval, then weak
    reference or linear notes, then fixed mindset, else interleaving and
    spaced revision. ``scores`` is accepted for score-sensitive rules but no
    current rule reads it.
    """
    bundle = FOCUS_BUNDLES[select_focus_code(flags, params=params)]
    return OneThing(
        title=bundle["title"],
        description=bundle["description"],
        steps=tuple(bundle["steps"]),
    )


def select_domain_actions(
    scores: Scores,
    *,
    params: DiagnosticParameters | None = None,
) -> Mapping[str, Tuple[str, ...]]:
    """Action tips for each configured core domain, in ``core_domains`` order.

    Tips are static content and do not vary with ``scores``. A domain with no
    authored tips maps to an empty tuple.
    """
    cfg = resolve_parameters(params)
    return MappingProxyType({domain: DOMAIN_ACTIONS.get(domain, ()) for domain in cfg.core_domains})


def _rank(
    items: Sequence[_R],
    flags: Iterable[str],
    *,
    minutes: Callable[[_R], float],
    pivot: float,
    limit: int,
    limits: RecommendationLimits,
) -> Tuple[_R, ...]:
    present = _flag_values(flags)
    scored: List[Tuple[_R, float]] = []
    for item in items:
        base = limits.match_weight * len(present & item.maps_to)
        if base == 0:
            continue
        bonus = max(0.0, pivot - minutes(item)) * limits.brevity_coefficient
        scored.append((item, base + bonus))
    # sorted() is stable with reverse=True, so input order breaks exact ties
    scored = sorted(scored, key=lambda pair: pair[1], reverse=True)
    return tuple(item for item, _ in scored[:limit])


def recommend_videos(
    videos: Sequence[VideoRec],
    flags: Iterable[str],
    *,
    params: DiagnosticParameters | None = None,
) -> Tuple[VideoRec, ...]:
    """Rank videos by matched flags, shorter first on ties; at most ``max_videos``."""

    limits = resolve_parameters(params).recommendations
    return _rank(
        videos,
        flags,
        minutes=lambda video: video.duration_minutes,
        pivot=limits.video_brevity_pivot,
        limit=limits.max_videos,
        limits=limits,
    )


def recommend_articles(
    articles: Sequence[ArticleRec],
    flags: Iterable[str],
    *,
    params: DiagnosticParameters | None = None,
) -> Tuple[ArticleRec, ...]:
    """Rank articles by matched flags, quicker reads first on ties; at most ``max_articles``."""

    limits = resolve_parameters(params).recommendations
    return _rank(
        articles,
        flags,
        minutes=lambda article: article.est_minutes,
        pivot=limits.article_brevity_pivot,
        limit=limits.max_articles,
        limits=limits,
    )
