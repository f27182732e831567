import logging
from typing import List, Optional, Type, TypeVar

from openai import AsyncOpenAI
from pydantic import BaseModel

from ..interface import LLMProvider
from ...config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)

class OpenAIAdapter(LLMProvider):
    def __init__(
        self,
        api_key: str,
        model_name: str = settings.OPENAI_MODEL,
        max_retries: int = settings.MAX_RETRIES,
        client: Optional[AsyncOpenAI] = None,
    ):
        # Retries and timeouts belong to the client; the engines never retry.
        self.client = client or AsyncOpenAI(api_key=api_key, max_retries=max_retries)
        self.model_name = model_name

    async def generate_structured_output(
        self,
        messages: List[dict],
        response_model: Type[T],
        temperature: float = 0.0
    ) -> T:
        logger.debug(f"Requesting {response_model.__name__} from {self.model_name}")
        completion = await self.client.beta.chat.completions.parse(
            model=self.model_name,
            messages=messages,
            response_format=response_model,
            temperature=temperature,
        )

        # Unwrap the OpenAI response structure here so callers only see the model
        parsed = completion.choices[0].message.parsed
        if parsed is None:
            raise ValueError(
                f"{self.model_name} returned no parsable {response_model.__name__}"
            )
        return parsed
