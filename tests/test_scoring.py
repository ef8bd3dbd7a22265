from dataclasses import replace
from types import MappingProxyType

import pytest

from study_diagnostic.assessments.diagnostic.scoring import (
    compute_overall_score,
    compute_scores,
    compute_scores_for_questions,
    find_question_by_id,
    score_answer,
)
from study_diagnostic.assessments.diagnostic.types import Question
from study_diagnostic.assessments.enums import QuestionType
from study_diagnostic.core.errors import InvalidAnswer, ValidationError


def _likert(reverse: bool = False, domain: str = "priming", qid: str = "L1") -> Question:
    return Question(id=qid, text="likert", type=QuestionType.LIKERT5, domain=domain, reverse=reverse)


def _ynm(reverse: bool = False, domain: str = "encoding", qid: str = "Y1") -> Question:
    return Question(id=qid, text="ynm", type=QuestionType.YES_NO_MAYBE, domain=domain, reverse=reverse)


class TestScoreAnswer:
    @pytest.mark.parametrize("answer, expected", [(1, 0), (2, 25), (3, 50), (4, 75), (5, 100)])
    def test_likert_forward(self, answer, expected):
        assert score_answer(_likert(), answer) == expected

    @pytest.mark.parametrize("answer, expected", [(1, 100), (2, 75), (3, 50), (4, 25), (5, 0)])
    def test_likert_reversed_is_complement(self, answer, expected):
        assert score_answer(_likert(reverse=True), answer) == expected
        assert score_answer(_likert(reverse=True), answer) == 100 - score_answer(_likert(), answer)

    def test_likert_coerces_numeric_strings_and_integral_floats(self):
        assert score_answer(_likert(), "4") == 75
        assert score_answer(_likert(), " 2 ") == 25
        assert score_answer(_likert(), 5.0) == 100
        assert score_answer(_likert(), "3.0") == 50
        assert score_answer(_likert(), " 4.0 ") == 75
        assert score_answer(_likert(), "3.0") == score_answer(_likert(), 3.0)

    @pytest.mark.parametrize("answer", [0, 6, -1, "abc", "", 3.5, True, None, "7", "3.5", "NaN", "Infinity", "5.0.1"])
    def test_likert_rejects_invalid(self, answer):
        with pytest.raises(InvalidAnswer):
            score_answer(_likert(), answer)

    @pytest.mark.parametrize("answer, expected", [("yes", 0), ("maybe", 50), ("no", 100)])
    def test_ynm_forward(self, answer, expected):
        assert score_answer(_ynm(), answer) == expected

    @pytest.mark.parametrize("answer, expected", [("yes", 100), ("maybe", 50), ("no", 0)])
    def test_ynm_reversed(self, answer, expected):
        assert score_answer(_ynm(reverse=True), answer) == expected

    def test_ynm_is_case_insensitive(self):
        assert score_answer(_ynm(), "YES") == 0
        assert score_answer(_ynm(), "No") == 100
        assert score_answer(_ynm(), " Maybe ") == 50

    @pytest.mark.parametrize("answer", ["unsure", "y", 1, ""])
    def test_ynm_rejects_unknown_tokens(self, answer):
        with pytest.raises(InvalidAnswer):
            score_answer(_ynm(), answer)

    def test_invalid_answer_carries_context(self):
        with pytest.raises(InvalidAnswer) as excinfo:
            score_answer(_likert(qid="Q9"), 6)
        err = excinfo.value
        assert isinstance(err, ValidationError)
        assert isinstance(err, ValueError)
        assert err.question_id == "Q9"
        assert err.question_type == "likert5"
        assert err.answer == 6
        assert "Q9" in err.message


class TestQuestionFromRaw:
    def test_reverse_defaults_to_false(self):
        question = Question.from_raw({"id": "Q1", "text": "t", "type": "likert5", "domain": "priming"})
        assert question.reverse is False

    def test_reverse_true(self):
        raw = {"id": "Q2", "text": "t", "type": "ynm", "domain": "encoding", "reverse": True}
        assert Question.from_raw(raw).reverse is True

    @pytest.mark.parametrize("value", ["false", "true", 0, 1, None])
    def test_reverse_must_be_a_real_boolean(self, value):
        raw = {"id": "Q3", "text": "t", "type": "likert5", "domain": "priming", "reverse": value}
        with pytest.raises(ValidationError) as excinfo:
            Question.from_raw(raw)
        assert "Q3" in excinfo.value.message


class TestComputeScoresForQuestions:
    def test_unanswered_domains_are_omitted(self):
        questions = [_likert(qid="P1"), _likert(qid="P2")]
        assert dict(compute_scores_for_questions(questions, {})) == {}

    def test_mock_roster_scores(self, core_questions):
        answers = {"Q1": 3, "Q2": 4, "Q3": "yes", "Q15": 2, "Q17": 4}
        scores = compute_scores_for_questions(core_questions, answers)
        assert dict(scores) == {"priming": 50, "retrieval": 25, "encoding": 0, "reference": 25}

    def test_domain_mean_rounds_half_up(self):
        questions = [_likert(qid="P1"), _likert(qid="P2")]
        scores = compute_scores_for_questions(questions, {"P1": 3, "P2": 4})
        assert scores["priming"] == 63

    def test_domains_follow_roster_order(self):
        questions = [
            _likert(qid="A", domain="retrieval"),
            _likert(qid="B", domain="priming"),
            _likert(qid="C", domain="retrieval"),
        ]
        scores = compute_scores_for_questions(questions, {"A": 1, "B": 2, "C": 5})
        assert list(scores) == ["retrieval", "priming"]
        assert scores["retrieval"] == 50

    def test_answers_for_unknown_questions_are_ignored(self):
        scores = compute_scores_for_questions([_likert(qid="P1")], {"P1": 5, "ZZZ": "not scored"})
        assert dict(scores) == {"priming": 100}

    def test_invalid_answer_aborts_the_pass(self, core_questions):
        with pytest.raises(InvalidAnswer):
            compute_scores_for_questions(core_questions, {"Q1": 3, "Q2": 9})

    def test_result_is_read_only(self):
        scores = compute_scores_for_questions([_likert(qid="P1")], {"P1": 1})
        with pytest.raises(TypeError):
            scores["priming"] = 99  # type: ignore[index]


class TestOverallScore:
    def test_empty_scores_yield_zero(self):
        assert compute_overall_score({}) == 0

    def test_overlearning_is_discounted(self):
        assert compute_overall_score({"priming": 50, "overlearning": 100}) == 72

    def test_unlisted_domain_defaults_to_weight_one(self):
        assert compute_overall_score({"priming": 40, "custom": 80}) == 60

    def test_uniform_scores(self):
        scores = {domain: 50 for domain in ("priming", "encoding", "reference", "retrieval", "overlearning")}
        assert compute_overall_score(scores) == 50

    def test_weights_can_be_overridden(self, params):
        custom = replace(params, domain_weights=MappingProxyType({"priming": 3.0}))
        assert compute_overall_score({"priming": 100, "retrieval": 0}, params=custom) == 75


class TestComputeScores:
    def test_meta_scores_never_feed_overall(self, core_questions, meta_questions):
        summary = compute_scores(core_questions, meta_questions, {"Q1": 3, "M1": 1})
        assert dict(summary.scores) == {"priming": 50}
        assert dict(summary.meta_scores) == {"mindset_fixed": 0}
        assert summary.overall == 50

    def test_meta_only_answers_give_zero_overall(self, core_questions, meta_questions):
        summary = compute_scores(core_questions, meta_questions, {"M2": "no"})
        assert dict(summary.scores) == {}
        assert summary.meta_scores["resourcefulness"] == 100
        assert summary.overall == 0


def test_find_question_by_id(core_questions):
    found = find_question_by_id(core_questions, "Q15")
    assert found is not None and found.domain == "reference"
    assert find_question_by_id(core_questions, "NONEXISTENT") is None
