"""Shared fixtures: sample specs, scripted askers and a fake LLM provider."""

from typing import Any, Dict, List, Optional, Type

import pytest
from pydantic import BaseModel

from paramflow.data.airline import (
    AirlineSchedule,
    build_airline_flow_spec,
    build_airline_validation_spec,
)
from paramflow.domain.models import FieldRule, OptionChoice
from paramflow.llm.interface import LLMProvider
from paramflow.services.asker import Asker


class ScriptedAsker(Asker):
    """Answers prompts from a fixed script and records every prompt it saw."""

    def __init__(self, answers: List[str]):
        self.answers = list(answers)
        self.prompts: List[str] = []

    async def ask(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if not self.answers:
            raise AssertionError(f"Unexpected question: {prompt}")
        return self.answers.pop(0)


class FakeLLMProvider(LLMProvider):
    """Returns queued responses (or raises queued errors) and records calls."""

    def __init__(self, responses: Optional[List[Any]] = None):
        self.responses = list(responses or [])
        self.calls: List[Dict[str, Any]] = []

    async def generate_structured_output(
        self,
        messages: List[dict],
        response_model: Type[BaseModel],
        temperature: float = 0.0,
    ) -> BaseModel:
        self.calls.append(
            {"messages": messages, "response_model": response_model, "temperature": temperature}
        )
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def schedule() -> AirlineSchedule:
    return AirlineSchedule()


@pytest.fixture
def validation_spec(schedule):
    return build_airline_validation_spec(schedule)


@pytest.fixture
def flow_spec(schedule):
    return build_airline_flow_spec(schedule)


@pytest.fixture
def single_field_spec():
    """One field `a` with options x and y."""
    return {
        "a": FieldRule(
            description="Letter",
            fetch_options=lambda context: [OptionChoice("x", "x"), OptionChoice("y", "y")],
        )
    }


@pytest.fixture
def scripted_asker():
    return ScriptedAsker


@pytest.fixture
def fake_llm():
    return FakeLLMProvider
