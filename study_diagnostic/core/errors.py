from __future__ import annotations

"""Domain-specific exception hierarchy for the diagnostic engine."""

from typing import Any

from study_diagnostic.i18n.messages import DomainErrorMessages

__all__ = [
    "DomainError",
    "ValidationError",
    "InvalidAnswer",
    "ConfigurationError",
]


class DomainError(Exception):
    """Base class for domain-level errors raised by the engine."""

    error_code: str = "domain_error"
    default_message: str = DomainErrorMessages.DOMAIN_ERROR

    def __init__(self, message: str | None = None, *, detail: Any | None = None) -> None:
        final_message = message or self.default_message
        super().__init__(final_message)
        self.message = final_message
        self.detail = detail


class ValidationError(DomainError, ValueError):
    """Raised when caller-supplied data fails validation."""

    error_code = "validation_error"
    default_message = DomainErrorMessages.VALIDATION_ERROR


class InvalidAnswer(ValidationError):
    """Raised when an answer is outside its question type's valid domain.

    Aborts the whole scoring pass; the questionnaire flow is expected to
    submit well-formed answers, so this is never retried or defaulted.
    """

    error_code = "invalid_answer"
    default_message = DomainErrorMessages.INVALID_ANSWER

    def __init__(
        self,
        message: str | None = None,
        *,
        question_id: str | None = None,
        question_type: str | None = None,
        answer: Any = None,
    ) -> None:
        super().__init__(
            message,
            detail={"question_id": question_id, "question_type": question_type, "answer": answer},
        )
        self.question_id = question_id
        self.question_type = question_type
        self.answer = answer


class ConfigurationError(DomainError):
    """Raised when diagnostic parameters are invalid or incomplete."""

    error_code = "configuration_error"
    default_message = DomainErrorMessages.CONFIGURATION_ERROR
