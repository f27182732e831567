"""
Prompt rendering.

Templates live next to this module and are rendered with StrictUndefined, so
a prompt missing one of its variables fails loudly instead of going out to
the LLM with a blank in it.
"""

from functools import lru_cache
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from .templates import Template

TEMPLATES_DIR = Path(__file__).parent / "templates"


def _check_templates_exist() -> None:
    """Every Template member must have its file. Runs once, at import."""
    missing = [t.filename for t in Template if not (TEMPLATES_DIR / t.filename).is_file()]
    if missing:
        raise FileNotFoundError(f"Prompt template(s) missing from {TEMPLATES_DIR}: {', '.join(missing)}")


_check_templates_exist()


@lru_cache(maxsize=1)
def _environment() -> Environment:
    # Prompts are plain text; nothing is HTML-escaped.
    return Environment(
        loader=FileSystemLoader(TEMPLATES_DIR),
        autoescape=False,
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def render(template: Template, **context) -> str:
    """
    Renders a prompt template and strips surrounding whitespace.

    Raises:
        jinja2.UndefinedError if the template uses a variable not in context.
    """
    return _environment().get_template(Template(template).filename).render(**context).strip()
