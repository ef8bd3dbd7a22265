"""Closed enumerations for question types, flags and focal interventions.

Flags are ``StrEnum`` members so they compare equal to their wire strings
(``Flag.LOW_PRIMING == "low_priming"``) while still catching typos at
lookup time.
"""

from __future__ import annotations

from enum import StrEnum

__all__ = ["QuestionType", "Flag", "FocusCode"]


class QuestionType(StrEnum):
    """Answer scale of a question, keyed by the roster's ``type`` value."""

    LIKERT5 = "likert5"
    """Five-point agreement/frequency scale, answers 1..5."""

    YES_NO_MAYBE = "ynm"
    """Three-valued categorical answer: yes, no or maybe."""


class Flag(StrEnum):
    """Behavioral signals inferred from scores and note-taking answers."""

    LOW_PRIMING = "low_priming"
    LOW_RETRIEVAL = "low_retrieval"
    LOW_ENCODING = "low_encoding"
    WEAK_REFERENCE = "weak_reference"
    OVERLEARNING_EARLY = "overlearning_early"
    LINEAR_NOTES = "linear_notes"
    RISK_FIXED_MINDSET = "risk_fixed_mindset"
    LOW_RESOURCEFULNESS = "low_resourcefulness"
    NEEDS_BIG_PICTURE = "needs_big_picture"


class FocusCode(StrEnum):
    """Pre-authored focal recommendation bundles."""

    PRIMING_ROUTINE = "priming_routine"
    MICRO_RETRIEVAL = "micro_retrieval"
    CONCEPT_MAPS = "concept_maps"
    GROWTH_MINDSET = "growth_mindset"
    INTERLEAVING = "interleaving"
