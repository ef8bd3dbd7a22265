from __future__ import annotations

from types import MappingProxyType

from study_diagnostic.assessments.diagnostic import resolve_parameters
from study_diagnostic.assessments.diagnostic.flags import compute_flags
from study_diagnostic.assessments.diagnostic.recommendations import (
    recommend_articles,
    recommend_videos,
    select_domain_actions,
    select_one_thing,
)
from study_diagnostic.assessments.diagnostic.scoring import compute_scores
from study_diagnostic.assessments.diagnostic.types import (
    Answers,
    DiagnosticParameters,
    DiagnosticResult,
    QuestionRoster,
    ResourceCatalog,
)
from study_diagnostic.core.errors import InvalidAnswer
from study_diagnostic.core.logging import get_logger
from study_diagnostic.core.metrics import count_calls, measure_time, timer

logger = get_logger("study_diagnostic.engine.pipeline", component="engine")

__all__ = ["run_diagnostic"]


@count_calls("pipeline.diagnostic.run.calls")
@measure_time("pipeline.diagnostic.run", histogram=True)
def run_diagnostic(
    answers: Answers,
    roster: QuestionRoster,
    catalog: ResourceCatalog,
    *,
    params: DiagnosticParameters | None = None,
) -> DiagnosticResult:
    """Score a completed questionnaire and assemble the immutable result.

    Stages run strictly in order: scores, flags, recommendations. Inputs are
    never mutated; the returned result holds its own read-only copy of the
    answers.
    """
    cfg = resolve_parameters(params)
    frozen_answers = MappingProxyType(dict(answers))

    with timer("pipeline.diagnostic.scoring"):
        try:
            summary = compute_scores(roster.core, roster.meta, frozen_answers, params=cfg)
        except InvalidAnswer as exc:
            logger.warning(
                "diagnostic_scoring_failed",
                extra={
                    "structured_data": {
                        "question_id": exc.question_id,
                        "question_type": exc.question_type,
                        "reason": exc.message,
                    }
                },
            )
            raise

    with timer("pipeline.diagnostic.flags"):
        flags = compute_flags(
            summary.scores,
            summary.meta_scores,
            frozen_answers,
            roster.all_questions(),
            params=cfg,
        )

    with timer("pipeline.diagnostic.recommendations"):
        one_thing = select_one_thing(flags, summary.scores, params=cfg)
        domain_actions = select_domain_actions(summary.scores, params=cfg)
        videos = recommend_videos(catalog.videos, flags, params=cfg)
        articles = recommend_articles(catalog.articles, flags, params=cfg)

    result = DiagnosticResult(
        answers=frozen_answers,
        scores=summary.scores,
        meta_scores=summary.meta_scores,
        overall=summary.overall,
        flags=flags,
        one_thing=one_thing,
        domain_actions=domain_actions,
        recommended_videos=videos,
        recommended_articles=articles,
    )
    logger.info(
        "diagnostic_completed",
        extra={
            "structured_data": {
                "instrument": cfg.instrument_id,
                "instrument_version": cfg.version,
                "answered": len(frozen_answers),
                "overall": result.overall,
                "flags": [str(flag) for flag in flags],
                "focus": one_thing.title,
                "videos": len(videos),
                "articles": len(articles),
            }
        },
    )
    return result
