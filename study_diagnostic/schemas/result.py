from __future__ import annotations

from typing import Dict, List, Union

from pydantic import BaseModel, ConfigDict, Field

from study_diagnostic.assessments.diagnostic.types import ArticleRec, DiagnosticResult, OneThing, VideoRec

__all__ = [
    "OneThingSchema",
    "VideoRecSchema",
    "ArticleRecSchema",
    "DiagnosticResultSchema",
]


class OneThingSchema(BaseModel):
    title: str
    description: str
    steps: List[str]

    @classmethod
    def from_domain(cls, one_thing: OneThing) -> "OneThingSchema":
        return cls(title=one_thing.title, description=one_thing.description, steps=list(one_thing.steps))


class VideoRecSchema(BaseModel):
    id: str
    title: str
    url: str
    maps_to: List[str]
    tldr: str
    duration_minutes: float = Field(ge=0)
    reason: str = ""

    @classmethod
    def from_domain(cls, video: VideoRec) -> "VideoRecSchema":
        return cls(**video.as_dict())


class ArticleRecSchema(BaseModel):
    id: str
    title: str
    authors: str
    year: int
    source: str
    url: str
    maps_to: List[str]
    est_minutes: float = Field(ge=0)
    tldr: List[str]
    try_tomorrow: List[str]
    reason: str = ""

    @classmethod
    def from_domain(cls, article: ArticleRec) -> "ArticleRecSchema":
        return cls(**article.as_dict())


class DiagnosticResultSchema(BaseModel):
    """Serializable view of a ``DiagnosticResult``.

    Dump with ``by_alias=True`` for the camelCase shape consumed by export
    and history collaborators.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    answers: Dict[str, Union[int, str]]
    scores: Dict[str, int]
    meta_scores: Dict[str, int] = Field(alias="metaScores")
    overall: int = Field(ge=0, le=100)
    flags: List[str]
    one_thing: OneThingSchema = Field(alias="oneThing")
    domain_actions: Dict[str, List[str]] = Field(alias="domainActions")
    recommended_videos: List[VideoRecSchema] = Field(alias="recommendedVideos")
    recommended_articles: List[ArticleRecSchema] = Field(alias="recommendedArticles")

    @classmethod
    def from_result(cls, result: DiagnosticResult) -> "DiagnosticResultSchema":
        return cls(
            answers=dict(result.answers),
            scores=dict(result.scores),
            meta_scores=dict(result.meta_scores),
            overall=result.overall,
            flags=[str(flag) for flag in result.flags],
            one_thing=OneThingSchema.from_domain(result.one_thing),
            domain_actions={domain: list(actions) for domain, actions in result.domain_actions.items()},
            recommended_videos=[VideoRecSchema.from_domain(video) for video in result.recommended_videos],
            recommended_articles=[ArticleRecSchema.from_domain(article) for article in result.recommended_articles],
        )
