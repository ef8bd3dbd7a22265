import pytest

from study_diagnostic.assessments.diagnostic import default_parameters
from study_diagnostic.assessments.diagnostic.types import (
    ArticleRec,
    Question,
    QuestionRoster,
    ResourceCatalog,
    VideoRec,
)
from study_diagnostic.core.metrics import metrics_registry

CORE_QUESTIONS = [
    {"id": "Q1", "text": "Do you preview material before class?", "type": "likert5", "domain": "priming"},
    {"id": "Q2", "text": "Do you mostly re-read instead of testing yourself?", "type": "likert5", "domain": "retrieval", "reverse": True},
    {"id": "Q3", "text": "Do you explain new ideas in your own words?", "type": "ynm", "domain": "encoding"},
    {"id": "Q15", "text": "Do you minimise the usage of linear notes?", "type": "likert5", "domain": "reference"},
    {"id": "Q17", "text": "Do you write many notes that you do not read again?", "type": "likert5", "domain": "reference", "reverse": True},
]

META_QUESTIONS = [
    {"id": "M1", "text": "Can intelligence be developed with effort?", "type": "likert5", "domain": "mindset_fixed"},
    {"id": "M2", "text": "Do you look for new resources when stuck?", "type": "ynm", "domain": "resourcefulness"},
]

VIDEOS = [
    {"id": "V1", "title": "Video about priming", "url": "https://example.com/v1", "maps_to": ["low_priming"], "tldr": "Learn about priming techniques", "duration_minutes": 5},
    {"id": "V2", "title": "Video about retrieval", "url": "https://example.com/v2", "maps_to": ["low_retrieval", "low_encoding"], "tldr": "Learn about retrieval practice", "duration_minutes": 10},
    {"id": "V3", "title": "Short video about mindset", "url": "https://example.com/v3", "maps_to": ["risk_fixed_mindset"], "tldr": "Growth mindset basics", "duration_minutes": 3},
]

ARTICLES = [
    {
        "id": "A1",
        "title": "Article about learning",
        "authors": "Smith et al.",
        "year": 2020,
        "source": "Journal of Learning",
        "url": "https://example.com/a1",
        "maps_to": ["low_priming", "low_retrieval"],
        "est_minutes": 5,
        "tldr": ["Key point 1", "Key point 2"],
        "try_tomorrow": ["Action 1", "Action 2"],
    },
    {
        "id": "A2",
        "title": "Article about notes",
        "authors": "Jones",
        "year": 2021,
        "source": "Education Review",
        "url": "https://example.com/a2",
        "maps_to": ["linear_notes", "weak_reference"],
        "est_minutes": 8,
        "tldr": ["Note-taking strategies"],
        "try_tomorrow": ["Try concept maps"],
    },
]


def make_video(video_id: str, maps_to, minutes: float) -> VideoRec:
    return VideoRec(
        id=video_id,
        title=f"Video {video_id}",
        url=f"https://example.com/{video_id}",
        maps_to=frozenset(maps_to),
        tldr="",
        duration_minutes=minutes,
    )


def make_article(article_id: str, maps_to, minutes: float) -> ArticleRec:
    return ArticleRec(
        id=article_id,
        title=f"Article {article_id}",
        authors="Doe",
        year=2022,
        source="Test Source",
        url=f"https://example.com/{article_id}",
        maps_to=frozenset(maps_to),
        est_minutes=minutes,
    )


@pytest.fixture()
def core_questions():
    return [Question.from_raw(item) for item in CORE_QUESTIONS]


@pytest.fixture()
def meta_questions():
    return [Question.from_raw(item) for item in META_QUESTIONS]


@pytest.fixture()
def all_questions(core_questions, meta_questions):
    return core_questions + meta_questions


@pytest.fixture()
def roster():
    return QuestionRoster.from_raw(CORE_QUESTIONS, META_QUESTIONS)


@pytest.fixture()
def catalog():
    return ResourceCatalog.from_raw(VIDEOS, ARTICLES)


@pytest.fixture()
def params():
    return default_parameters()


@pytest.fixture()
def clean_metrics():
    metrics_registry.reset()
    yield metrics_registry
    metrics_registry.reset()
