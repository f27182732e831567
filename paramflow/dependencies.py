"""
Dependency Wiring (Composition Root).

This module is the central "container" for the LLM-backed collaborators.
It is responsible for:
1. Instantiating the LLM provider from settings.
2. Wiring it into the question writer and the specifier.
3. Creating each of them only once per process, using @lru_cache.

Callers that want other collaborators (a test fake, a different provider)
construct them directly and hand them to the ElicitationEngine instead.
"""

from functools import lru_cache

from .config import settings
from .exceptions import ConfigurationError
from .llm.interface import LLMProvider
from .services.asker import LLMQuestionWriter, QuestionWriter
from .services.specifier import LLMSpecifier, Specifier


# LLM Provider (Singleton)
@lru_cache()
def get_llm_provider() -> LLMProvider:
    if not settings.OPENAI_API_KEY:
        raise ConfigurationError("OPENAI_API_KEY is not set; LLM collaborators are unavailable")

    # Imported lazily so the core does not require the openai client at import time
    from .llm.adapters.openai_adapter import OpenAIAdapter

    return OpenAIAdapter(
        api_key=settings.OPENAI_API_KEY,
        model_name=settings.OPENAI_MODEL,
        max_retries=settings.MAX_RETRIES,
    )


# The Specifier (Singleton)
@lru_cache()
def get_specifier() -> Specifier:
    return LLMSpecifier(get_llm_provider())


# The Question Writer (Singleton)
@lru_cache()
def get_question_writer() -> QuestionWriter:
    return LLMQuestionWriter(get_llm_provider())
