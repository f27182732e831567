import pytest

from paramflow import dependencies
from paramflow.config import settings
from paramflow.exceptions import ConfigurationError
from paramflow.llm.adapters.openai_adapter import OpenAIAdapter
from paramflow.services.asker import LLMQuestionWriter
from paramflow.services.specifier import LLMSpecifier


@pytest.fixture(autouse=True)
def clear_singletons():
    for factory in (dependencies.get_llm_provider, dependencies.get_specifier, dependencies.get_question_writer):
        factory.cache_clear()
    yield
    for factory in (dependencies.get_llm_provider, dependencies.get_specifier, dependencies.get_question_writer):
        factory.cache_clear()


def test_missing_api_key_is_a_configuration_error(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", None)

    with pytest.raises(ConfigurationError):
        dependencies.get_llm_provider()


def test_collaborators_share_one_provider(monkeypatch):
    monkeypatch.setattr(settings, "OPENAI_API_KEY", "sk-test")
    monkeypatch.setattr(settings, "OPENAI_MODEL", "gpt-test")

    provider = dependencies.get_llm_provider()
    specifier = dependencies.get_specifier()
    writer = dependencies.get_question_writer()

    assert isinstance(provider, OpenAIAdapter)
    assert provider.model_name == "gpt-test"
    assert isinstance(specifier, LLMSpecifier)
    assert isinstance(writer, LLMQuestionWriter)
    assert specifier.llm is provider
    assert writer.llm is provider
    assert dependencies.get_specifier() is specifier


def test_settings_read_from_environment(monkeypatch):
    from paramflow.config import Settings

    monkeypatch.setenv("SPECIFICATION_USE_REASONING", "true")
    monkeypatch.setenv("MAX_RETRIES", "5")

    configured = Settings()

    assert configured.SPECIFICATION_USE_REASONING is True
    assert configured.MAX_RETRIES == 5
