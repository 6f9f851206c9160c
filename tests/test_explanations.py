from __future__ import annotations

import asyncio
from types import SimpleNamespace

import httpx
import openai
import pytest

from scholarmatch.config import Settings
from scholarmatch.errors import (
    ProviderError,
    ProviderRateLimitedError,
    ProviderUnauthorizedError,
    ProviderUnavailableError,
)
from scholarmatch.explanations.orchestrator import (
    DEGRADED_EXPLANATION,
    NOT_CONFIGURED_EXPLANATION,
    ExplanationOrchestrator,
)
from scholarmatch.explanations.provider import (
    EMPTY_COMPLETION_TEXT,
    OpenAIExplanationProvider,
    build_explanation_provider,
    build_prompt,
)

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


class FakeProvider:
    def __init__(self, failing: set[str] | None = None, error: Exception | None = None):
        self.failing = failing or set()
        self.error = error or ProviderError("boom")
        self.calls: list[str] = []

    async def generate_explanation(self, student, scholarship) -> str:
        self.calls.append(scholarship.id)
        await asyncio.sleep(0)
        if scholarship.id in self.failing:
            raise self.error
        return f"{student.name} fits {scholarship.name}"


class FakeCompletions:
    def __init__(self, content: str | None = None, error: Exception | None = None):
        self.content = content
        self.error = error
        self.requests: list[dict] = []

    async def create(self, **kwargs):
        self.requests.append(kwargs)
        if self.error is not None:
            raise self.error
        message = SimpleNamespace(content=self.content)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])


def _provider(completions: FakeCompletions) -> OpenAIExplanationProvider:
    client = SimpleNamespace(chat=SimpleNamespace(completions=completions))
    return OpenAIExplanationProvider(api_key="sk-test", model="gpt-test", client=client)


def _status_error(cls, status: int):
    response = httpx.Response(status, request=httpx.Request("POST", OPENAI_URL))
    return cls(f"HTTP {status}", response=response, body=None)


def test_one_failure_degrades_only_that_item(make_student, make_scholarship) -> None:
    scholarships = [make_scholarship(id=f"sch_00{i}", name=f"Award {i}") for i in (1, 2, 3)]
    provider = FakeProvider(failing={"sch_002"})

    explanations = asyncio.run(
        ExplanationOrchestrator(provider).explain_all(make_student(), scholarships)
    )

    assert explanations == [
        "Ada Lovelace fits Award 1",
        DEGRADED_EXPLANATION,
        "Ada Lovelace fits Award 3",
    ]
    assert sorted(provider.calls) == ["sch_001", "sch_002", "sch_003"]


def test_unexpected_exceptions_are_degraded_too(make_student, make_scholarship) -> None:
    provider = FakeProvider(failing={"sch_001"}, error=RuntimeError("socket closed"))

    explanations = asyncio.run(
        ExplanationOrchestrator(provider).explain_all(make_student(), [make_scholarship()])
    )

    assert explanations == [DEGRADED_EXPLANATION]


def test_unconfigured_provider_returns_placeholders_without_calls(make_student, make_scholarship) -> None:
    orchestrator = ExplanationOrchestrator(None)
    scholarships = [make_scholarship(id="sch_001"), make_scholarship(id="sch_002")]

    explanations = asyncio.run(orchestrator.explain_all(make_student(), scholarships))

    assert not orchestrator.enabled
    assert explanations == [NOT_CONFIGURED_EXPLANATION, NOT_CONFIGURED_EXPLANATION]


def test_explain_all_with_no_matches(make_student) -> None:
    provider = FakeProvider()

    assert asyncio.run(ExplanationOrchestrator(provider).explain_all(make_student(), [])) == []
    assert provider.calls == []


def test_build_explanation_provider_requires_api_key() -> None:
    assert build_explanation_provider(Settings(openai_api_key=None)) is None
    assert build_explanation_provider(Settings(openai_api_key="")) is None

    provider = build_explanation_provider(Settings(openai_api_key="sk-test", openai_model="gpt-x"))
    assert isinstance(provider, OpenAIExplanationProvider)
    assert provider.model == "gpt-x"


def test_provider_returns_stripped_completion(make_student, make_scholarship) -> None:
    completions = FakeCompletions(content="  You are a great fit.  ")

    text = asyncio.run(_provider(completions).generate_explanation(make_student(), make_scholarship()))

    assert text == "You are a great fit."
    request = completions.requests[0]
    assert request["model"] == "gpt-test"
    assert request["max_tokens"] == 150
    assert request["messages"][0]["role"] == "system"


def test_provider_handles_empty_completion(make_student, make_scholarship) -> None:
    completions = FakeCompletions(content=None)

    text = asyncio.run(_provider(completions).generate_explanation(make_student(), make_scholarship()))

    assert text == EMPTY_COMPLETION_TEXT


@pytest.mark.parametrize(
    ("error", "expected"),
    [
        (_status_error(openai.AuthenticationError, 401), ProviderUnauthorizedError),
        (_status_error(openai.RateLimitError, 429), ProviderRateLimitedError),
        (_status_error(openai.APIStatusError, 503), ProviderUnavailableError),
        (openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL)), ProviderUnavailableError),
        (_status_error(openai.InternalServerError, 500), ProviderError),
    ],
)
def test_provider_maps_sdk_errors(make_student, make_scholarship, error, expected) -> None:
    provider = _provider(FakeCompletions(error=error))

    with pytest.raises(expected):
        asyncio.run(provider.generate_explanation(make_student(), make_scholarship()))


def test_build_prompt_lists_student_and_scholarship_details(make_student, make_scholarship) -> None:
    student = make_student(
        major="Physics",
        first_generation=True,
        ethnicity={"Asian", "White"},
        community_service_hours=20,
    )
    scholarship = make_scholarship(name="Physics Prize", amount=12500, first_generation=True)

    prompt = build_prompt(student, scholarship)

    assert 'Explain why the "Physics Prize" scholarship' in prompt
    assert "Major: Physics" in prompt
    assert "First-generation college student" in prompt
    assert "Ethnicity: Asian, White" in prompt
    assert "Community service: 20 hours" in prompt
    assert "Amount: $12,500" in prompt
    assert "First-generation required: true" in prompt
    assert "Financial need required" not in prompt
