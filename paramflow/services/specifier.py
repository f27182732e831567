"""
Specifier Service Interface.

Defines the contract for the "Specifier" - the component responsible for
mapping a piece of free-text input onto exactly one of a field's candidate
options.
"""
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from ..config import settings
from ..domain.models import OptionChoice
from ..prompts import Template, render
from ..llm.interface import LLMProvider, build_messages
from ..schemas.decisions import OptionSelection
from ..exceptions import SpecificationError

logger = logging.getLogger(__name__)


class Specifier(ABC):
    @abstractmethod
    async def specify(
        self, raw_text: str, candidates: List[OptionChoice], parameter_name: str
    ) -> OptionChoice:
        """
        Resolves the user's raw text to one of the candidates.

        Raises:
            SpecificationError if no candidate can be chosen.
        """
        pass


class ExactMatchSpecifier(Specifier):
    """
    Matches by option id first, then by the string form of the option value.
    Surrounding whitespace is ignored; nothing else is forgiven.
    """
    async def specify(
        self, raw_text: str, candidates: List[OptionChoice], parameter_name: str
    ) -> OptionChoice:
        text = raw_text.strip()
        for option in candidates:
            if option.id == text:
                return option
        for option in candidates:
            if str(option.value) == text:
                return option
        raise SpecificationError(
            f"'{raw_text}' does not match any option for '{parameter_name}'"
        )


class LLMSpecifier(Specifier):
    """
    Asks an LLM which option the user most likely meant. Tolerates typos and
    approximations, but only ever returns one of the candidates.
    """
    def __init__(
        self,
        llm_provider: LLMProvider,
        use_reasoning: Optional[bool] = None,
        temperature: Optional[float] = None,
    ):
        self.llm = llm_provider
        self.use_reasoning = settings.SPECIFICATION_USE_REASONING if use_reasoning is None else use_reasoning
        self.temperature = settings.SPECIFICATION_TEMPERATURE if temperature is None else temperature

    async def specify(
        self, raw_text: str, candidates: List[OptionChoice], parameter_name: str
    ) -> OptionChoice:
        if not candidates:
            raise SpecificationError(f"No options to choose from for '{parameter_name}'")

        system_prompt = render(
            Template.SPECIFY_PARAMETER,
            user_input=raw_text,
            name=parameter_name,
            options=candidates,
            use_reasoning=self.use_reasoning,
        )

        try:
            selection = await self.llm.generate_structured_output(
                messages=build_messages(system_prompt),
                response_model=OptionSelection,
                temperature=self.temperature,
            )
        except Exception as e:
            raise SpecificationError(f"Failed to specify parameter '{parameter_name}' with LLM: {e}") from e

        chosen = next((opt for opt in candidates if opt.id == selection.selected_option), None)
        if chosen is None:
            raise SpecificationError(
                f"LLM selected invalid option ID '{selection.selected_option}' for '{parameter_name}'"
            )

        if selection.reasoning:
            logger.debug(f"Specified '{parameter_name}' as '{chosen.id}': {selection.reasoning}")
        return chosen
