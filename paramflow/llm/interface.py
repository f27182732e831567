from abc import ABC, abstractmethod
from typing import List, Optional, Type, TypeVar

from pydantic import BaseModel

# Generic type variable for the Pydantic model expected in structured responses.
T = TypeVar("T", bound=BaseModel)

class LLMProvider(ABC):
    """
    Abstract Base Class interface for the LLM backing the question writer
    and the specifier (OpenAI, Anthropic, a local model, or a test fake).
    """

    @abstractmethod
    async def generate_structured_output(
        self,
        messages: List[dict],
        response_model: Type[T],
        temperature: float = 0.0
    ) -> T:
        """
        Generates a response from the LLM strictly matching the Pydantic 'response_model'.

        Messages use the chat format: [{"role": "system" | "user", "content": str}, ...].
        """
        pass


def build_messages(system_prompt: str, user_input: Optional[str] = None) -> List[dict]:
    """Wraps a rendered prompt (and optional user text) in chat messages."""
    messages = [{"role": "system", "content": system_prompt}]
    if user_input:
        messages.append({"role": "user", "content": user_input})
    return messages
