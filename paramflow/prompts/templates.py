"""
Prompt template names.

One member per .jinja2 file under templates/; no I/O here.
"""

from enum import Enum


class Template(str, Enum):
    """Prompt templates shipped with paramflow."""

    ASK_PARAMETER = "ask_parameter"  # Fixed question, no LLM
    PHRASE_QUESTION = "phrase_question"  # LLM phrases the question
    SPECIFY_PARAMETER = "specify_parameter"  # LLM maps free text to an option id

    @property
    def filename(self) -> str:
        return f"{self.value}.jinja2"
