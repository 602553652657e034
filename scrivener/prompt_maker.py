"""
Prompt maker that renders persona prompts from Jinja templates.

Uses Pydantic models for type-safe, validated prompt construction.

"""
from pathlib import Path
from jinja2 import Environment, FileSystemLoader, StrictUndefined

from scrivener.prompts import BasePromptConfig


PROMPTS_PATH = (Path(__file__).parent / "prompts" / "templates").resolve()

class PromptMaker:
    """Renders system and user prompts from Jinja templates using Pydantic models."""

    def __init__(self, templates_path: Path = PROMPTS_PATH):
        """Initialize the prompt maker with a Jinja environment.

        Args:
            templates_path: Directory holding the .jinja files; override to
                ship alternative wording for the same prompt models
        """
        self.env = Environment(
            loader=FileSystemLoader(templates_path),
            trim_blocks=True,
            lstrip_blocks=True,
            undefined=StrictUndefined,
            autoescape=False,
        )

    def render(self, prompt_model: BasePromptConfig) -> str:
        """
        Render a prompt from a Pydantic model.

        Args:
            prompt_model: Pydantic model containing validated template variables

        Returns:
            Rendered prompt as a string, without surrounding whitespace

        Raises:
            pydantic.ValidationError: If model has invalid/missing fields
            jinja2.TemplateNotFound: If template file doesn't exist

        Example:
            maker = PromptMaker()
            config = RewriteUserConfig(text="hey whats up")
            prompt = maker.render(config)
        """
        template_name = prompt_model.template_name() + ".jinja"
        template_vars = prompt_model.model_dump()

        template = self.env.get_template(template_name)
        return template.render(**template_vars).strip()
