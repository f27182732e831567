"""
LLM Layer - Provider Interface and Adapters

The core engines never call an LLM directly. Collaborators that phrase
questions or match free text to options depend on LLMProvider only.
"""

from paramflow.llm.interface import LLMProvider, build_messages

__all__ = [
    "LLMProvider",
    "build_messages",
]
