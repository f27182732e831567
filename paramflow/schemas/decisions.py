"""
Schemas - Structured Output Models for LLM Responses

This module defines Pydantic models used for structured LLM outputs.
These schemas enforce strict JSON formatting on LLM responses, so the
question writer and the specifier always get a parseable answer.
"""
from typing import Optional
from pydantic import BaseModel, Field


class ParameterQuestion(BaseModel):
    """
    The question the LLM phrases when a parameter value is missing.
    """
    question: str = Field(
        ...,
        description="The question to show the user. Succinct, listing the available options as raw text."
    )


class OptionSelection(BaseModel):
    """
    The LLM's choice of option for a piece of free-text user input.
    """
    reasoning: Optional[str] = Field(
        None,
        description="Brief explanation of how the chosen option matches the user's input."
    )
    selected_option: str = Field(
        ...,
        description="The ID of the option that best matches what the user meant."
    )
