from __future__ import annotations

from typing import Dict, Iterable

from study_diagnostic.assessments.constants import LIKERT_DEFAULT, YNM_DEFAULT
from study_diagnostic.assessments.diagnostic.types import Answers, AnswerValue, Question
from study_diagnostic.assessments.enums import QuestionType


def default_answer(question: Question) -> AnswerValue:
    """Neutral answer the questionnaire pre-selects before the learner responds."""

    if question.type is QuestionType.LIKERT5:
        return LIKERT_DEFAULT
    return YNM_DEFAULT


def complete_answers(questions: Iterable[Question], answers: Answers) -> Dict[str, AnswerValue]:
    """Return a copy of ``answers`` with neutral defaults for unanswered questions.

    Meant for the questionnaire flow right before submission; the scoring
    pipeline itself never fills gaps. Given answers are kept as-is, even
    when invalid, so scoring still rejects them.
    """
    completed: Dict[str, AnswerValue] = dict(answers)
    for question in questions:
        completed.setdefault(question.id, default_answer(question))
    return completed


__all__ = ["default_answer", "complete_answers"]
