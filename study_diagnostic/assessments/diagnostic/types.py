from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Iterable, Mapping, Tuple, Union

from study_diagnostic.assessments.constants import CORE_DOMAINS
from study_diagnostic.assessments.enums import Flag, FocusCode, QuestionType
from study_diagnostic.core.errors import ConfigurationError, ValidationError
from study_diagnostic.i18n.messages import ConfigErrorMessages, RosterErrorMessages

AnswerValue = Union[int, str]
Answers = Mapping[str, AnswerValue]
Scores = Mapping[str, int]


def _frozen_mapping(data: Mapping[str, Any]) -> Mapping[str, Any]:
    return MappingProxyType(dict(data))


def _parse_reverse(payload: Mapping[str, Any]) -> bool:
    value = payload.get("reverse", False)
    if not isinstance(value, bool):
        raise ValidationError(
            RosterErrorMessages.REVERSE_NOT_BOOL.format(question_id=payload.get("id"), value=value),
            detail={"question_id": payload.get("id"), "reverse": value},
        )
    return value


# ---------------------------------------------------------------------------
# Roster and catalog records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Question:
    """A questionnaire item; identity is ``id``."""

    id: str
    text: str
    type: QuestionType
    domain: str
    reverse: bool = False

    @classmethod
    def from_raw(cls, payload: Mapping[str, Any]) -> "Question":
        return cls(
            id=str(payload["id"]),
            text=str(payload["text"]),
            type=QuestionType(payload["type"]),
            domain=str(payload["domain"]),
            reverse=_parse_reverse(payload),
        )


@dataclass(frozen=True, slots=True)
class VideoRec:
    id: str
    title: str
    url: str
    maps_to: frozenset[str]
    tldr: str
    duration_minutes: float
    reason: str = ""

    @classmethod
    def from_raw(cls, payload: Mapping[str, Any]) -> "VideoRec":
        return cls(
            id=str(payload["id"]),
            title=str(payload["title"]),
            url=str(payload["url"]),
            maps_to=frozenset(str(tag) for tag in payload["maps_to"]),
            tldr=str(payload["tldr"]),
            duration_minutes=float(payload["duration_minutes"]),
            reason=str(payload.get("reason", "")),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.url,
            "maps_to": sorted(self.maps_to),
            "tldr": self.tldr,
            "duration_minutes": self.duration_minutes,
            "reason": self.reason,
        }


@dataclass(frozen=True, slots=True)
class ArticleRec:
    id: str
    title: str
    authors: str
    year: int
    source: str
    url: str
    maps_to: frozenset[str]
    est_minutes: float
    tldr: Tuple[str, ...] = ()
    try_tomorrow: Tuple[str, ...] = ()
    reason: str = ""

    @classmethod
    def from_raw(cls, payload: Mapping[str, Any]) -> "ArticleRec":
        return cls(
            id=str(payload["id"]),
            title=str(payload["title"]),
            authors=str(payload["authors"]),
            year=int(payload["year"]),
            source=str(payload["source"]),
            url=str(payload["url"]),
            maps_to=frozenset(str(tag) for tag in payload["maps_to"]),
            est_minutes=float(payload["est_minutes"]),
            tldr=tuple(str(line) for line in payload.get("tldr", ())),
            try_tomorrow=tuple(str(line) for line in payload.get("try_tomorrow", ())),
            reason=str(payload.get("reason", "")),
        )

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "authors": self.authors,
            "year": self.year,
            "source": self.source,
            "url": self.url,
            "maps_to": sorted(self.maps_to),
            "est_minutes": self.est_minutes,
            "tldr": list(self.tldr),
            "try_tomorrow": list(self.try_tomorrow),
            "reason": self.reason,
        }


@dataclass(frozen=True, slots=True)
class QuestionRoster:
    """Core and meta question lists, scored independently."""

    core: Tuple[Question, ...]
    meta: Tuple[Question, ...] = ()

    def all_questions(self) -> Tuple[Question, ...]:
        return self.core + self.meta

    @classmethod
    def from_raw(
        cls,
        core: Iterable[Mapping[str, Any]],
        meta: Iterable[Mapping[str, Any]] = (),
    ) -> "QuestionRoster":
        return cls(
            core=tuple(Question.from_raw(item) for item in core),
            meta=tuple(Question.from_raw(item) for item in meta),
        )


@dataclass(frozen=True, slots=True)
class ResourceCatalog:
    videos: Tuple[VideoRec, ...] = ()
    articles: Tuple[ArticleRec, ...] = ()

    @classmethod
    def from_raw(
        cls,
        videos: Iterable[Mapping[str, Any]] = (),
        articles: Iterable[Mapping[str, Any]] = (),
    ) -> "ResourceCatalog":
        return cls(
            videos=tuple(VideoRec.from_raw(item) for item in videos),
            articles=tuple(ArticleRec.from_raw(item) for item in articles),
        )


# ---------------------------------------------------------------------------
# Pipeline outputs
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class OneThing:
    """The single focal intervention recommended to the learner."""

    title: str
    description: str
    steps: Tuple[str, ...]

    def as_dict(self) -> dict[str, Any]:
        return {"title": self.title, "description": self.description, "steps": list(self.steps)}


@dataclass(frozen=True, slots=True)
class ScoreSummary:
    scores: Scores
    meta_scores: Scores
    overall: int


@dataclass(frozen=True, slots=True)
class DiagnosticResult:
    """Immutable outcome of one completed questionnaire."""

    answers: Answers
    scores: Scores
    meta_scores: Scores
    overall: int
    flags: Tuple[Flag, ...]
    one_thing: OneThing
    domain_actions: Mapping[str, Tuple[str, ...]]
    recommended_videos: Tuple[VideoRec, ...]
    recommended_articles: Tuple[ArticleRec, ...]

    def as_dict(self) -> dict[str, Any]:
        return {
            "answers": dict(self.answers),
            "scores": dict(self.scores),
            "meta_scores": dict(self.meta_scores),
            "overall": self.overall,
            "flags": [str(flag) for flag in self.flags],
            "one_thing": self.one_thing.as_dict(),
            "domain_actions": {domain: list(actions) for domain, actions in self.domain_actions.items()},
            "recommended_videos": [video.as_dict() for video in self.recommended_videos],
            "recommended_articles": [article.as_dict() for article in self.recommended_articles],
        }


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class FlagThresholds:
    """Cut points for score-based flags (strict comparisons)."""

    low_priming: float
    low_retrieval: float
    low_encoding: float
    weak_reference: float
    overlearning: float
    overlearning_priming: float
    fixed_mindset: float
    low_resourcefulness: float
    big_picture: float


@dataclass(frozen=True, slots=True)
class NoteTakingRule:
    """Question ids read directly for the linear-notes pattern."""

    linear_notes_question: str
    unread_notes_question: str
    cutoff: float


@dataclass(frozen=True, slots=True)
class RecommendationLimits:
    max_videos: int
    max_articles: int
    match_weight: float
    brevity_coefficient: float
    video_brevity_pivot: float
    article_brevity_pivot: float


@dataclass(frozen=True, slots=True)
class FocusRule:
    """Fires when any of ``flags`` is present."""

    flags: frozenset[Flag]
    focus: FocusCode


@dataclass(frozen=True, slots=True)
class DiagnosticParameters:
    """Immutable container for every tunable constant of the pipeline."""

    instrument_id: str
    version: str
    core_domains: Tuple[str, ...]
    domain_weights: Mapping[str, float]
    default_weight: float
    thresholds: FlagThresholds
    note_taking: NoteTakingRule
    recommendations: RecommendationLimits
    focus_priority: Tuple[FocusRule, ...]
    default_focus: FocusCode

    def weight(self, domain: str) -> float:
        return self.domain_weights.get(domain, self.default_weight)

    @classmethod
    def from_raw(cls, payload: Mapping[str, Any]) -> "DiagnosticParameters":
        if not isinstance(payload, Mapping):
            raise ConfigurationError(ConfigErrorMessages.NOT_A_MAPPING.format(kind=type(payload).__name__))
        try:
            thresholds = payload["thresholds"]
            notes = payload["note_taking"]
            recs = payload["recommendations"]
            weights = {str(domain): float(value) for domain, value in payload["domain_weights"].items()}
            default_weight = float(payload.get("default_weight", 1))
            params = cls(
                instrument_id=str(payload["id"]),
                version=str(payload["version"]),
                core_domains=tuple(str(name) for name in payload.get("core_domains", CORE_DOMAINS)),
                domain_weights=_frozen_mapping(weights),
                default_weight=default_weight,
                thresholds=FlagThresholds(
                    low_priming=float(thresholds["low_priming"]),
                    low_retrieval=float(thresholds["low_retrieval"]),
                    low_encoding=float(thresholds["low_encoding"]),
                    weak_reference=float(thresholds["weak_reference"]),
                    overlearning=float(thresholds["overlearning"]),
                    overlearning_priming=float(thresholds["overlearning_priming"]),
                    fixed_mindset=float(thresholds["fixed_mindset"]),
                    low_resourcefulness=float(thresholds["low_resourcefulness"]),
                    big_picture=float(thresholds["big_picture"]),
                ),
                note_taking=NoteTakingRule(
                    linear_notes_question=str(notes["linear_notes_question"]),
                    unread_notes_question=str(notes["unread_notes_question"]),
                    cutoff=float(notes.get("cutoff", 50)),
                ),
                recommendations=RecommendationLimits(
                    max_videos=int(recs["max_videos"]),
                    max_articles=int(recs["max_articles"]),
                    match_weight=float(recs.get("match_weight", 2)),
                    brevity_coefficient=float(recs.get("brevity_coefficient", 0.1)),
                    video_brevity_pivot=float(recs.get("video_brevity_pivot", 5)),
                    article_brevity_pivot=float(recs.get("article_brevity_pivot", 10)),
                ),
                focus_priority=tuple(
                    _parse_focus_rule(index, rule) for index, rule in enumerate(payload["focus_priority"], start=1)
                ),
                default_focus=_parse_focus(payload["default_focus"]),
            )
        except KeyError as exc:
            raise ConfigurationError(ConfigErrorMessages.MISSING_KEY.format(key=exc.args[0])) from exc
        params._check_limits()
        return params

    def _check_limits(self) -> None:
        for name in ("max_videos", "max_articles"):
            value = getattr(self.recommendations, name)
            if value < 0:
                raise ConfigurationError(ConfigErrorMessages.NEGATIVE_LIMIT.format(name=name, value=value))
        for domain, weight in {**self.domain_weights, "<default>": self.default_weight}.items():
            if weight <= 0:
                raise ConfigurationError(ConfigErrorMessages.NON_POSITIVE_WEIGHT.format(domain=domain, value=weight))


def _parse_flag(value: Any) -> Flag:
    try:
        return Flag(str(value))
    except ValueError as exc:
        raise ConfigurationError(ConfigErrorMessages.UNKNOWN_FLAG.format(flag=value)) from exc


def _parse_focus(value: Any) -> FocusCode:
    try:
        return FocusCode(str(value))
    except ValueError as exc:
        raise ConfigurationError(ConfigErrorMessages.UNKNOWN_FOCUS.format(focus=value)) from exc


def _parse_focus_rule(index: int, rule: Mapping[str, Any]) -> FocusRule:
    flags = frozenset(_parse_flag(flag) for flag in rule.get("flags", ()))
    if not flags:
        raise ConfigurationError(ConfigErrorMessages.EMPTY_RULE.format(index=index))
    return FocusRule(flags=flags, focus=_parse_focus(rule["focus"]))
