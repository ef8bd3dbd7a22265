"""
Pre-authored intervention content: focal bundles keyed by focus code and
per-domain action tips for the five core domains.
"""
from types import MappingProxyType
from typing import Any, Dict, Mapping, Tuple, TypedDict

from study_diagnostic.assessments.enums import FocusCode


class FocusBundle(TypedDict):
    title: str
    description: str
    steps: Tuple[str, ...]


_BUNDLES: Dict[FocusCode, FocusBundle] = {
    FocusCode.PRIMING_ROUTINE: {
        "title": "Establish a Priming and Brain-Dump Routine",
        "description": (
            "Start every learning session by previewing the topic, asking questions, and connecting new ideas "
            "to what you already know. Then summarise from memory immediately after."
        ),
        "steps": (
            "Before class: skim headings and bold terms to get the big picture.",
            "Write down three questions you expect to answer and one analogy or connection.",
            "After class: do a 2–3 minute brain dump without notes to consolidate and uncover gaps.",
        ),
    },
    FocusCode.MICRO_RETRIEVAL: {
        "title": "Implement Daily Micro-Retrieval",
        "description": (
            "Spaced, low-stakes recall strengthens memory better than re-reading. Engage in short recall "
            "sessions each day to test your knowledge and reveal misunderstandings."
        ),
        "steps": (
            "Write three practice questions at the end of each study session.",
            "The next day, answer those questions from memory without looking at notes.",
            "Check your answers and identify areas that need more work.",
        ),
    },
    FocusCode.CONCEPT_MAPS: {
        "title": "Switch to Concept-Map Based Note-Taking",
        "description": (
            "Rethink your notes: separate facts from concepts and use non-linear structures to map "
            "relationships instead of transcribing everything linearly."
        ),
        "steps": (
            "Use a blank page: centre the main idea and branch out related concepts, causes, examples and implications.",
            "Keep isolated facts in a small fact-bank separate from conceptual maps.",
            "Review your maps regularly and update them with new insights.",
        ),
    },
    FocusCode.GROWTH_MINDSET: {
        "title": "Cultivate a Growth Mindset",
        "description": (
            "Believing that intelligence can grow increases motivation and resilience. Reframe mistakes as "
            "opportunities and focus on effort and strategy."
        ),
        "steps": (
            "Reflect on a time when persistence led to success.",
            "Replace 'I can't' with 'I can't yet' in your self-talk.",
            "Seek feedback and view challenges as ways to strengthen your brain.",
        ),
    },
    FocusCode.INTERLEAVING: {
        "title": "Practice Interleaving and Spaced Revision",
        "description": (
            "Mix different topics and problem types within a study session and distribute your practice over "
            "time to improve discrimination and long-term retention."
        ),
        "steps": (
            "Alternate between different subjects or problem types instead of studying one in isolation.",
            "Schedule multiple short review sessions over several days instead of one long cram.",
            "Include problems that combine multiple concepts to encourage transfer.",
        ),
    },
}

_missing = set(FocusCode) - set(_BUNDLES)
if _missing:  # pragma: no cover - guards edits to this table
    raise RuntimeError(f"Focus codes without content: {sorted(_missing)}")

# Read-only views; bundles are shared by every diagnostic run in the process.
FOCUS_BUNDLES: Mapping[FocusCode, Mapping[str, Any]] = MappingProxyType(
    {code: MappingProxyType(dict(bundle)) for code, bundle in _BUNDLES.items()}
)


DOMAIN_ACTIONS: Mapping[str, tuple[str, ...]] = MappingProxyType({
    "priming": (
        "Preview material before class by skimming headings and summaries.",
        "Write down what you already know and generate questions to guide your learning.",
        "Create analogies to relate new concepts to familiar experiences.",
        "Pause during study to reorganise and summarise what you have learned so far.",
    ),
    "encoding": (
        "Teach the material to someone else or record yourself explaining it.",
        "Break complex ideas into smaller chunks and relate them to examples.",
        "Use diagrams or flowcharts to illustrate processes and relationships.",
        "Make connections across topics to deepen understanding.",
    ),
    "reference": (
        "Separate conceptual maps from fact banks: use non-linear structures for concepts and lists for facts.",
        "Minimise verbatim note-taking; focus on relationships and synthesis.",
        "Organise notes using colours or shapes to group related ideas.",
        "Regularly prune your notes, keeping only what aids understanding.",
    ),
    "retrieval": (
        "Self-test within 24 hours of learning new material to identify gaps.",
        "Use flashcards or quizzes for isolated facts and open-ended questions for concepts.",
        "Practice recalling information in different ways: writing, drawing and explaining verbally.",
        "Incorporate cumulative questions that combine topics to encourage transfer.",
    ),
    "overlearning": (
        "Delay intensive drilling until you have built a solid understanding through priming, encoding and retrieval.",
        "Use high-volume practice strategically for core skills that require speed or automaticity.",
        "Balance repetition with reflection to avoid rote memorisation without understanding.",
    ),
})
