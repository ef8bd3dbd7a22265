"""Threshold-driven flag inference.

Skill domains that were never answered are assumed healthy (default 100);
overlearning is assumed absent (default 0). Lookups go through
``score_or_default`` so a genuine score of 0 is never confused with a
missing domain.
"""

from __future__ import annotations

from typing import Iterable, List, Tuple

from study_diagnostic.assessments.diagnostic import resolve_parameters
from study_diagnostic.assessments.diagnostic.scoring import find_question_by_id, score_answer
from study_diagnostic.assessments.diagnostic.types import Answers, DiagnosticParameters, Question, Scores
from study_diagnostic.assessments.enums import Flag
from study_diagnostic.core.sentinels import score_or_default

__all__ = ["compute_flags", "note_taking_flags"]

HEALTHY_DEFAULT = 100
ABSENT_EXCESS_DEFAULT = 0


def _answer_score(
    answers: Answers, questions: Tuple[Question, ...], question_id: str
) -> int | None:
    if question_id not in answers:
        return None
    question = find_question_by_id(questions, question_id)
    if question is None:
        return None
    return score_answer(question, answers[question_id])


def note_taking_flags(
    answers: Answers,
    all_questions: Iterable[Question],
    *,
    params: DiagnosticParameters | None = None,
) -> List[Flag]:
    """Detect the linear-notes pattern from the two note-taking questions.

    The first question ("minimise linear notes") flags when it scores below
    the cutoff; the second ("write notes never re-read", usually reversed)
    flags when it scores above. Unanswered or unknown questions are skipped.
    """
    rule = resolve_parameters(params).note_taking
    questions = tuple(all_questions)
    found: List[Flag] = []

    linear = _answer_score(answers, questions, rule.linear_notes_question)
    if linear is not None and linear < rule.cutoff:
        found.append(Flag.LINEAR_NOTES)

    unread = _answer_score(answers, questions, rule.unread_notes_question)
    if unread is not None and unread > rule.cutoff:
        found.append(Flag.LINEAR_NOTES)
    return found


def compute_flags(
    scores: Scores,
    meta_scores: Scores,
    answers: Answers,
    all_questions: Iterable[Question],
    *,
    params: DiagnosticParameters | None = None,
) -> Tuple[Flag, ...]:
    """Derive the deduplicated flag set for one submission.

    Rules are evaluated in a fixed order and the result keeps first-trigger
    order, so output is reproducible; callers should still treat it as a set.
    """
    cfg = resolve_parameters(params)
    t = cfg.thresholds
    priming = score_or_default(scores, "priming", HEALTHY_DEFAULT)
    flags: List[Flag] = []

    if priming < t.low_priming:
        flags.append(Flag.LOW_PRIMING)
    if score_or_default(scores, "retrieval", HEALTHY_DEFAULT) < t.low_retrieval:
        flags.append(Flag.LOW_RETRIEVAL)
    if score_or_default(scores, "encoding", HEALTHY_DEFAULT) < t.low_encoding:
        flags.append(Flag.LOW_ENCODING)
    if score_or_default(scores, "reference", HEALTHY_DEFAULT) < t.weak_reference:
        flags.append(Flag.WEAK_REFERENCE)
    overlearning = score_or_default(scores, "overlearning", ABSENT_EXCESS_DEFAULT)
    if overlearning > t.overlearning and priming < t.overlearning_priming:
        flags.append(Flag.OVERLEARNING_EARLY)

    flags.extend(note_taking_flags(answers, all_questions, params=cfg))

    if score_or_default(meta_scores, "mindset_fixed", HEALTHY_DEFAULT) < t.fixed_mindset:
        flags.append(Flag.RISK_FIXED_MINDSET)
    if score_or_default(meta_scores, "resourcefulness", HEALTHY_DEFAULT) < t.low_resourcefulness:
        flags.append(Flag.LOW_RESOURCEFULNESS)
    if score_or_default(meta_scores, "big_picture", HEALTHY_DEFAULT) < t.big_picture:
        flags.append(Flag.NEEDS_BIG_PICTURE)

    return tuple(dict.fromkeys(flags))
