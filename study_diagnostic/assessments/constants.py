"""Fixed vocabulary of the study diagnostic questionnaire.

Tunable numbers (weights, thresholds, limits) live in the packaged
``diagnostic/config.yaml`` so tests can substitute them; this module only
holds names and bounds that are part of the questionnaire's definition.
"""

from __future__ import annotations

from typing import Final, Tuple

__all__ = [
    "CORE_DOMAINS",
    "LIKERT_MIN",
    "LIKERT_MAX",
    "LIKERT_DEFAULT",
    "YNM_VALUES",
    "YNM_DEFAULT",
]

# =============================================================================
# Domains
# =============================================================================

CORE_DOMAINS: Final[Tuple[str, ...]] = ("priming", "encoding", "reference", "retrieval", "overlearning")
"""Core skill domains, in display order. Default for ``core_domains`` in the diagnostic config.

- priming: previewing material and building a frame before learning
- encoding: processing new information into understanding
- reference: how notes and external memory are organised
- retrieval: recalling and self-testing
- overlearning: high-volume drilling and repetition
"""

# =============================================================================
# Answer scales
# =============================================================================

LIKERT_MIN: Final[int] = 1
LIKERT_MAX: Final[int] = 5

LIKERT_DEFAULT: Final[int] = 3
"""Neutral answer the questionnaire flow pre-selects for likert5 questions."""

YNM_VALUES: Final[dict[str, float]] = {"yes": 0.0, "maybe": 0.5, "no": 1.0}
"""Normalized value of each yes/no/maybe token before reverse scoring."""

YNM_DEFAULT: Final[str] = "maybe"
