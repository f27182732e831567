import asyncio
from types import SimpleNamespace

import pytest
from jinja2 import UndefinedError

from paramflow.config import settings
from paramflow.domain.models import OptionChoice
from paramflow.exceptions import SpecificationError
from paramflow.llm.adapters.openai_adapter import OpenAIAdapter
from paramflow.llm.interface import build_messages
from paramflow.prompts import Template, render
from paramflow.schemas.decisions import OptionSelection, ParameterQuestion
from paramflow.services.asker import CallbackAsker, LLMQuestionWriter, TemplateQuestionWriter
from paramflow.services.specifier import ExactMatchSpecifier, LLMSpecifier

CITIES = [
    OptionChoice(id="LON", value="London"),
    OptionChoice(id="BER", value="Berlin"),
]


# ==============================================================================
# Askers and question writers
# ==============================================================================

def test_callback_asker_accepts_sync_callables():
    asker = CallbackAsker(lambda prompt: "  London \n")

    assert asyncio.run(asker.ask("Where from?")) == "London"


def test_callback_asker_accepts_coroutines():
    prompts = []

    async def reply(prompt):
        prompts.append(prompt)
        return 3

    answer = asyncio.run(CallbackAsker(reply).ask("How many?"))

    assert answer == "3"
    assert prompts == ["How many?"]


def test_template_question_lists_option_ids():
    question = asyncio.run(TemplateQuestionWriter().compose("departure", "City of departure", CITIES))

    assert question == "What is the city of departure?\nAvailable options:\n- LON\n- BER"


def test_template_question_falls_back_to_the_name():
    question = asyncio.run(TemplateQuestionWriter().compose("Seat", "", []))

    assert question == "What is the seat?"


def test_llm_question_writer(fake_llm):
    llm = fake_llm([ParameterQuestion(question="Which city? London or Berlin")])

    question = asyncio.run(LLMQuestionWriter(llm).compose("departure", "City of departure", CITIES))

    assert question == "Which city? London or Berlin"
    call = llm.calls[0]
    assert call["response_model"] is ParameterQuestion
    assert call["temperature"] == settings.LLM_TEMPERATURE
    assert '- LON: "London"' in call["messages"][0]["content"]


# ==============================================================================
# Specifiers
# ==============================================================================

def test_exact_match_by_id_then_value():
    specifier = ExactMatchSpecifier()

    assert asyncio.run(specifier.specify("BER", CITIES, "departure")) == CITIES[1]
    assert asyncio.run(specifier.specify(" London ", CITIES, "departure")) == CITIES[0]


def test_exact_match_does_not_fold_case():
    with pytest.raises(SpecificationError):
        asyncio.run(ExactMatchSpecifier().specify("london", CITIES, "departure"))


def test_llm_specifier_returns_chosen_option(fake_llm):
    llm = fake_llm([OptionSelection(selected_option="BER")])
    specifier = LLMSpecifier(llm, use_reasoning=True, temperature=0.3)

    chosen = asyncio.run(specifier.specify("berln", CITIES, "departure"))

    assert chosen == CITIES[1]
    call = llm.calls[0]
    assert call["response_model"] is OptionSelection
    assert call["temperature"] == 0.3
    prompt = call["messages"][0]["content"]
    assert '"berln"' in prompt
    assert "Think through your reasoning first" in prompt


def test_llm_specifier_rejects_unknown_option(fake_llm):
    llm = fake_llm([OptionSelection(selected_option="PAR")])

    with pytest.raises(SpecificationError):
        asyncio.run(LLMSpecifier(llm).specify("Paris", CITIES, "departure"))


def test_llm_specifier_wraps_provider_errors(fake_llm):
    failure = RuntimeError("rate limited")
    llm = fake_llm([failure])

    with pytest.raises(SpecificationError) as exc_info:
        asyncio.run(LLMSpecifier(llm).specify("London", CITIES, "departure"))

    assert exc_info.value.__cause__ is failure


def test_llm_specifier_needs_candidates(fake_llm):
    llm = fake_llm()

    with pytest.raises(SpecificationError):
        asyncio.run(LLMSpecifier(llm).specify("London", [], "departure"))

    assert llm.calls == []


# ==============================================================================
# LLM plumbing
# ==============================================================================

def test_build_messages():
    assert build_messages("system") == [{"role": "system", "content": "system"}]
    assert build_messages("system", "hi")[1] == {"role": "user", "content": "hi"}


def test_every_template_renders():
    options = CITIES
    assert render(Template.ASK_PARAMETER, name="a", description="", options=options)
    assert render(Template.PHRASE_QUESTION, name="a", description="", options=options)
    assert render(
        Template.SPECIFY_PARAMETER, user_input="x", name="a", options=options, use_reasoning=False
    )


def fake_openai_client(parsed):
    calls = []

    async def parse(**kwargs):
        calls.append(kwargs)
        message = SimpleNamespace(parsed=parsed)
        return SimpleNamespace(choices=[SimpleNamespace(message=message)])

    completions = SimpleNamespace(parse=parse)
    client = SimpleNamespace(beta=SimpleNamespace(chat=SimpleNamespace(completions=completions)))
    return client, calls


def test_openai_adapter_unwraps_parsed_output():
    expected = ParameterQuestion(question="Where to?")
    client, calls = fake_openai_client(expected)
    adapter = OpenAIAdapter(api_key="test", model_name="test-model", client=client)

    result = asyncio.run(adapter.generate_structured_output(build_messages("hi"), ParameterQuestion, 0.2))

    assert result is expected
    assert calls[0]["model"] == "test-model"
    assert calls[0]["response_format"] is ParameterQuestion
    assert calls[0]["temperature"] == 0.2


def test_openai_adapter_raises_without_parsed_output():
    client, _ = fake_openai_client(None)
    adapter = OpenAIAdapter(api_key="test", client=client)

    with pytest.raises(ValueError):
        asyncio.run(adapter.generate_structured_output(build_messages("hi"), ParameterQuestion))


def test_prompt_missing_a_variable_fails():
    with pytest.raises(UndefinedError):
        render(Template.SPECIFY_PARAMETER, name="a", options=CITIES, use_reasoning=False)


def test_templates_can_be_named_by_string():
    assert render("ask_parameter", name="Seat", description="", options=[]) == "What is the seat?"
