"""
Services - External Collaborators of the Elicitation Engine

Contracts and reference implementations for asking questions and for
resolving free-text answers onto candidate options.
"""

from paramflow.services.asker import (
    Asker,
    CallbackAsker,
    LLMQuestionWriter,
    QuestionWriter,
    TemplateQuestionWriter,
)
from paramflow.services.specifier import ExactMatchSpecifier, LLMSpecifier, Specifier

__all__ = [
    "Asker",
    "CallbackAsker",
    "ExactMatchSpecifier",
    "LLMQuestionWriter",
    "LLMSpecifier",
    "QuestionWriter",
    "Specifier",
    "TemplateQuestionWriter",
]
