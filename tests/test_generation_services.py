from __future__ import annotations

import json
import logging
from pathlib import Path

import httpx
import pytest

from apps.generation import CurriculumService, GenerativeTextClient, ResourceService
from careerpath.core.config import GenerationConfig
from careerpath.core.errors import TransportError
from careerpath.core.events import GenerationEventLog
from careerpath.core.models import CareerStep
from careerpath.core.result import StageResult
from tests.mocks.generative_api import FakeGenerator, candidate_payload

GENERATED_STEPS = json.dumps(
    [
        {
            "stepNumber": index,
            "title": f"Step {index}",
            "duration": "2 weeks",
            "description": f"Learn topic {index}.",
            "skills": ["Skill A", "Skill B"],
        }
        for index in range(1, 9)
    ]
)

GENERATED_RESOURCES = json.dumps(
    {
        "videos": [{"title": "Intro", "searchQuery": "ml intro", "difficulty": "beginner", "duration": "1 hour"}],
        "documents": [{"title": "Docs", "url": "https://scikit-learn.org/", "difficulty": "beginner"}],
        "projects": [{"title": "Predict prices", "description": "Regression project"}],
        "practice": [{"title": "Kaggle", "url": "https://www.kaggle.com/"}],
    }
)


def test_curriculum_uses_generated_steps() -> None:
    generator = FakeGenerator(f"Here is your path:\n```json\n{GENERATED_STEPS}\n```")
    service = CurriculumService(generator)

    outcome = service.generate("data-science")

    assert outcome.source == "generated"
    assert not outcome.used_fallback
    assert outcome.reason is None
    assert len(outcome.steps) == 8
    assert outcome.steps[0].title == "Step 1"
    assert "data-science" in generator.prompts[0]


def test_curriculum_transport_failure_falls_back_to_default_path(caplog: pytest.LogCaptureFixture) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("offline", request=request)

    client = GenerativeTextClient(
        GenerationConfig(api_key="k", max_retries=0),
        client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    service = CurriculumService(client)

    with caplog.at_level(logging.WARNING):
        outcome = service.generate("web-development")

    assert outcome.used_fallback
    assert len(outcome.steps) == 6
    assert all(step.title and step.description and step.skills for step in outcome.steps)
    assert outcome.reason is not None and outcome.reason.startswith("generate: transport")
    assert "serving fallback data" in caplog.text


def test_curriculum_unknown_career_without_client_gets_web_development() -> None:
    outcome = CurriculumService().generate("underwater-basket-weaving")

    assert outcome.used_fallback
    assert outcome.steps[0].title == "HTML & CSS Fundamentals"
    assert outcome.reason is not None and outcome.reason.startswith("client: client_unavailable")


@pytest.mark.parametrize(
    ("reply", "reason"),
    [
        ("I cannot help with that.", "extract: extraction"),
        ("[stepNumber 1, title A]", "extract: parse"),
        ('[{"title": "Only a title"}]', "extract: shape"),
        ("[]", "extract: shape"),
    ],
)
def test_curriculum_bad_replies_fall_back(reply: str, reason: str) -> None:
    outcome = CurriculumService(FakeGenerator(reply)).generate("data-science")

    assert outcome.used_fallback
    assert outcome.steps[0].title == "Python Programming Fundamentals"
    assert outcome.reason is not None and outcome.reason.startswith(reason)


def test_curriculum_deeply_nested_reply_falls_back() -> None:
    generator = FakeGenerator("[" * 100_000 + "]" * 100_000)

    outcome = CurriculumService(generator).generate("web-development")

    assert outcome.used_fallback
    assert len(outcome.steps) == 6
    assert outcome.reason is not None and outcome.reason.startswith("extract: parse")


def test_resources_deeply_nested_reply_falls_back() -> None:
    generator = FakeGenerator("{\"videos\": " + "[" * 100_000 + "]" * 100_000 + "}")

    outcome = ResourceService(generator).generate("web-development", "JavaScript Basics", "Functions.")

    assert outcome.used_fallback
    assert outcome.resources.videos[0].title == "JavaScript Tutorial for Beginners"


def test_curriculum_finds_steps_behind_stray_brackets() -> None:
    reply = f"Here are the steps [1]:\n{GENERATED_STEPS}\nNote: [draft"

    outcome = CurriculumService(FakeGenerator(reply)).generate("data-science")

    assert outcome.source == "generated"
    assert len(outcome.steps) == 8


def test_curriculum_blank_career_is_prompt_failure() -> None:
    generator = FakeGenerator(GENERATED_STEPS)

    outcome = CurriculumService(generator).generate("  ")

    assert outcome.used_fallback
    assert outcome.reason is not None and outcome.reason.startswith("prompt: prompt")
    assert generator.prompts == []


def test_curriculum_malformed_endpoint_payload_falls_back() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"candidates": []})

    client = GenerativeTextClient(
        GenerationConfig(api_key="k"), client=httpx.Client(transport=httpx.MockTransport(handler))
    )

    outcome = CurriculumService(client).generate("web-development")

    assert outcome.used_fallback
    assert "malformed_response" in (outcome.reason or "")


def test_curriculum_get_steps_returns_plain_list() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json=candidate_payload(GENERATED_STEPS))

    client = GenerativeTextClient(
        GenerationConfig(api_key="k"), client=httpx.Client(transport=httpx.MockTransport(handler))
    )

    steps = CurriculumService(client).get_steps("devops")

    assert len(steps) == 8
    assert all(isinstance(step, CareerStep) for step in steps)


def test_resources_generated_bundle_has_video_urls() -> None:
    generator = FakeGenerator(f"Resources below\n{GENERATED_RESOURCES}\nHappy learning!")
    service = ResourceService(generator)

    outcome = service.generate("data-science", "Machine Learning Basics", "Learn scikit-learn.")

    assert outcome.source == "generated"
    assert outcome.resources.videos[0].url == "https://youtube.com/results?search_query=ml%20intro"
    assert outcome.resources.total() == 4
    assert "Step: Machine Learning Basics" in generator.prompts[0]


def test_resources_failure_uses_static_catalog() -> None:
    service = ResourceService(FakeGenerator(503))

    outcome = service.generate("web-development", "HTML & CSS Fundamentals", "Layouts.")

    assert outcome.used_fallback
    assert outcome.step_title == "HTML & CSS Fundamentals"
    assert outcome.resources.videos[0].title == "HTML & CSS Full Course Tutorial"
    assert len(outcome.resources.practice) == 4


def test_resources_for_step_uses_step_fields() -> None:
    generator = FakeGenerator(GENERATED_RESOURCES)
    step = CareerStep(stepNumber=3, title="Data Visualization", duration="2 weeks", description="Plots.", skills=["Seaborn"])

    outcome = ResourceService(generator).resources_for_step("data-science", step)

    assert outcome.step_title == "Data Visualization"
    assert "Description: Plots." in generator.prompts[0]


def test_services_write_generation_events(tmp_path: Path) -> None:
    event_log = GenerationEventLog(tmp_path / "logs" / "events.jsonl")
    curriculum = CurriculumService(FakeGenerator(GENERATED_STEPS), event_log=event_log)
    resources = ResourceService(FakeGenerator("nothing useful"), event_log=event_log)

    curriculum.generate("data-science")
    resources.generate("data-science", "Step 1", "Learn topic 1.")

    events = event_log.read()
    assert [(event.stage, event.outcome) for event in events] == [
        ("curriculum", "generated"),
        ("resources", "fallback"),
    ]
    assert events[0].payload == {"career": "data-science", "step_count": 8}
    assert events[1].reason is not None and events[1].reason.startswith("extract: extraction")
    assert events[0].failed_stage is None
    assert events[1].failed_stage == "extract"
    assert event_log.fallback_rate() == 0.5


def test_event_log_creates_directory_on_first_record(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "events.jsonl"
    event_log = GenerationEventLog(path)
    assert not path.parent.exists()
    assert event_log.read() == []
    assert event_log.fallback_rate() == 0.0

    failure = StageResult.failure(TransportError("HTTP 503", status_code=503), stage="generate")
    event = event_log.record("curriculum", "fallback", failure, {"career": "devops"})

    assert path.exists()
    assert event.reason == "generate: transport: HTTP 503"
    assert event_log.read() == [event]
