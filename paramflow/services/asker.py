"""
Asking Collaborators.

Defines the contracts the elicitation engine uses to obtain a missing value:
a QuestionWriter turns a field into prompt text, and an Asker delivers that
prompt to whoever answers it (a person at a terminal, a chat UI, another
agent) and returns their free-text reply.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, List, Optional

from ..config import settings
from ..domain.models import OptionChoice, resolve
from ..prompts import Template, render
from ..llm.interface import LLMProvider, build_messages
from ..schemas.decisions import ParameterQuestion

logger = logging.getLogger(__name__)


class Asker(ABC):
    @abstractmethod
    async def ask(self, prompt: str) -> str:
        """
        Shows the prompt to the answering party and returns its raw reply.
        """
        pass


class CallbackAsker(Asker):
    """
    Adapts a plain callable, sync or async, that takes the prompt and
    returns the reply.
    """
    def __init__(self, callback: Callable[[str], Any]):
        self.callback = callback

    async def ask(self, prompt: str) -> str:
        answer = await resolve(self.callback(prompt))
        return str(answer).strip()


class QuestionWriter(ABC):
    @abstractmethod
    async def compose(self, name: str, description: str, options: List[OptionChoice]) -> str:
        """
        Returns the prompt text asking for a value of the given field.
        """
        pass


class TemplateQuestionWriter(QuestionWriter):
    """
    Renders a fixed question listing the option ids. No LLM involved.
    """
    async def compose(self, name: str, description: str, options: List[OptionChoice]) -> str:
        return render(Template.ASK_PARAMETER, name=name, description=description, options=options)


class LLMQuestionWriter(QuestionWriter):
    """
    Lets an LLM phrase the question, constrained to the fetched options.
    """
    def __init__(self, llm_provider: LLMProvider, temperature: Optional[float] = None):
        self.llm = llm_provider
        self.temperature = settings.LLM_TEMPERATURE if temperature is None else temperature

    async def compose(self, name: str, description: str, options: List[OptionChoice]) -> str:
        system_prompt = render(
            Template.PHRASE_QUESTION,
            name=name,
            description=description,
            options=options,
        )
        result = await self.llm.generate_structured_output(
            messages=build_messages(system_prompt),
            response_model=ParameterQuestion,
            temperature=self.temperature,
        )
        logger.debug(f"Phrased question for '{name}'")
        return result.question
