"""English message constants used across the engine.

Keeps user-facing and log-facing texts in one place so error classes and
validators format consistent messages.
"""


class DomainErrorMessages:
    """Base domain error default messages."""

    DOMAIN_ERROR: str = "Diagnostic domain error"
    VALIDATION_ERROR: str = "Invalid diagnostic data"
    INVALID_ANSWER: str = "Invalid answer"
    CONFIGURATION_ERROR: str = "Invalid diagnostic configuration"


class AnswerErrorMessages:
    """Answer validation texts raised by the scoring engine."""

    LIKERT_OUT_OF_RANGE: str = "Invalid likert5 answer for {question_id}: {answer!r} (expected an integer 1..5)"
    LIKERT_NOT_NUMERIC: str = "Invalid likert5 answer for {question_id}: {answer!r} is not an integer"
    YNM_UNKNOWN_TOKEN: str = "Invalid ynm answer for {question_id}: {answer!r} (expected yes, no or maybe)"
    UNKNOWN_QUESTION_TYPE: str = "Unknown question type for {question_id}: {question_type!r}"


class RosterErrorMessages:
    """Texts for malformed question roster records."""

    REVERSE_NOT_BOOL: str = "Question {question_id}: reverse must be true or false, got {value!r}"


class ConfigErrorMessages:
    """Texts for diagnostic parameter loading failures."""

    FILE_NOT_FOUND: str = "Diagnostic config not found: {path}"
    NOT_A_MAPPING: str = "Diagnostic config must be a mapping, got {kind}"
    MISSING_KEY: str = "Diagnostic config is missing required key: {key}"
    UNKNOWN_FLAG: str = "Unknown flag in diagnostic config: {flag!r}"
    UNKNOWN_FOCUS: str = "Unknown focus code in diagnostic config: {focus!r}"
    EMPTY_RULE: str = "Focus priority rule #{index} declares no flags"
    NEGATIVE_LIMIT: str = "Recommendation limit {name} must be >= 0, got {value}"
    NON_POSITIVE_WEIGHT: str = "Domain weight for {domain!r} must be > 0, got {value}"


__all__ = ["DomainErrorMessages", "AnswerErrorMessages", "RosterErrorMessages", "ConfigErrorMessages"]
