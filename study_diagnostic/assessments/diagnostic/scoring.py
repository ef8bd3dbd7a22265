"""Pure scoring functions: answers -> per-domain scores -> overall score.

Every function here is deterministic and free of I/O. Invalid answers raise
``InvalidAnswer`` and abort the pass; nothing is clamped or defaulted.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from numbers import Integral, Real
from types import MappingProxyType
from typing import Dict, Iterable, Optional, Sequence

from study_diagnostic.assessments.constants import LIKERT_MAX, LIKERT_MIN, YNM_VALUES
from study_diagnostic.assessments.diagnostic import resolve_parameters
from study_diagnostic.assessments.diagnostic.types import (
    Answers,
    AnswerValue,
    DiagnosticParameters,
    Question,
    ScoreSummary,
    Scores,
)
from study_diagnostic.assessments.enums import QuestionType
from study_diagnostic.core.errors import InvalidAnswer
from study_diagnostic.core.numeric import round_half_up, safe_div
from study_diagnostic.i18n.messages import AnswerErrorMessages

__all__ = [
    "score_answer",
    "compute_scores_for_questions",
    "compute_overall_score",
    "compute_scores",
    "find_question_by_id",
]


def _invalid(question: Question, answer: AnswerValue, template: str) -> InvalidAnswer:
    return InvalidAnswer(
        template.format(question_id=question.id, answer=answer),
        question_id=question.id,
        question_type=question.type.value,
        answer=answer,
    )


def _likert_value(question: Question, answer: AnswerValue) -> float:
    if isinstance(answer, bool):
        raise _invalid(question, answer, AnswerErrorMessages.LIKERT_NOT_NUMERIC)
    if isinstance(answer, Integral):
        numeric = int(answer)
    elif isinstance(answer, Real) and float(answer).is_integer():
        numeric = int(answer)
    elif isinstance(answer, str):
        try:
            parsed = Decimal(answer.strip())
        except InvalidOperation as exc:
            raise _invalid(question, answer, AnswerErrorMessages.LIKERT_NOT_NUMERIC) from exc
        if not parsed.is_finite() or parsed != parsed.to_integral_value():
            raise _invalid(question, answer, AnswerErrorMessages.LIKERT_NOT_NUMERIC)
        numeric = int(parsed)
    else:
        raise _invalid(question, answer, AnswerErrorMessages.LIKERT_NOT_NUMERIC)
    if not LIKERT_MIN <= numeric <= LIKERT_MAX:
        raise _invalid(question, answer, AnswerErrorMessages.LIKERT_OUT_OF_RANGE)
    return (numeric - LIKERT_MIN) / (LIKERT_MAX - LIKERT_MIN)


def _ynm_value(question: Question, answer: AnswerValue) -> float:
    token = str(answer).strip().lower()
    if token not in YNM_VALUES:
        raise _invalid(question, answer, AnswerErrorMessages.YNM_UNKNOWN_TOKEN)
    return YNM_VALUES[token]


def score_answer(question: Question, answer: AnswerValue) -> int:
    """Score a single answer on the 0..100 scale.

    Likert answers map 1..5 onto 0, 25, 50, 75, 100; yes/no/maybe map to
    0, 100, 50. Reverse-scored questions flip the normalized value before
    rounding, so a reversed answer always scores ``100 - forward``.

    Args:
        question: The question being answered.
        answer: Integer 1..5 (numeric strings accepted) for likert5, or a
            case-insensitive ``yes``/``no``/``maybe`` token for ynm.

    Returns:
        Integer score in [0, 100], rounded half-up.

    Raises:
        InvalidAnswer: The answer is outside the question type's domain.
    """
    if question.type is QuestionType.LIKERT5:
        value = _likert_value(question, answer)
    elif question.type is QuestionType.YES_NO_MAYBE:
        value = _ynm_value(question, answer)
    else:  # pragma: no cover - QuestionType is closed
        raise InvalidAnswer(
            AnswerErrorMessages.UNKNOWN_QUESTION_TYPE.format(question_id=question.id, question_type=question.type),
            question_id=question.id,
            question_type=str(question.type),
            answer=answer,
        )
    if question.reverse:
        value = 1.0 - value
    return round_half_up(value * 100)


def compute_scores_for_questions(questions: Iterable[Question], answers: Answers) -> Scores:
    """Average answered questions per domain.

    Domains without a single answered question are left out of the result
    entirely; callers decide what an absent domain means.
    """
    sums: Dict[str, int] = {}
    counts: Dict[str, int] = {}
    for question in questions:
        if question.id not in answers:
            continue
        score = score_answer(question, answers[question.id])
        sums[question.domain] = sums.get(question.domain, 0) + score
        counts[question.domain] = counts.get(question.domain, 0) + 1
    return MappingProxyType(
        {domain: round_half_up(total / counts[domain]) for domain, total in sums.items()}
    )


def compute_overall_score(scores: Scores, *, params: DiagnosticParameters | None = None) -> int:
    """Weighted mean of the domain scores present in ``scores``.

    Weights come from ``params.domain_weights`` (overlearning is discounted
    to 0.8 by default); unlisted domains use ``params.default_weight``.
    Returns 0 for an empty mapping.
    """
    cfg = resolve_parameters(params)
    weighted_sum = 0.0
    total_weight = 0.0
    for domain, score in scores.items():
        weight = cfg.weight(domain)
        weighted_sum += score * weight
        total_weight += weight
    return round_half_up(safe_div(weighted_sum, total_weight))


def compute_scores(
    core_questions: Sequence[Question],
    meta_questions: Sequence[Question],
    answers: Answers,
    *,
    params: DiagnosticParameters | None = None,
) -> ScoreSummary:
    """Score core and meta rosters independently; overall uses core only."""
    scores = compute_scores_for_questions(core_questions, answers)
    meta_scores = compute_scores_for_questions(meta_questions, answers)
    overall = compute_overall_score(scores, params=params)
    return ScoreSummary(scores=scores, meta_scores=meta_scores, overall=overall)


def find_question_by_id(questions: Iterable[Question], question_id: str) -> Optional[Question]:
    for question in questions:
        if question.id == question_id:
            return question
    return None
