"""
Prompt Template System

Provides templating and versioning for the two stage prompts.

Design decisions:
- Templates use Jinja2 for flexibility
- No autoescaping: prompts carry literal <question>/<thinking> tags
- Trailing newlines are significant and preserved
- Immutable templates (create new versions, don't modify)
- Registry pattern for centralized access
"""

from typing import Any

from jinja2 import BaseLoader, Environment, TemplateSyntaxError, UndefinedError
from pydantic import BaseModel, ConfigDict, Field

_environment = Environment(loader=BaseLoader(), keep_trailing_newline=True, autoescape=False)


class PromptTemplate(BaseModel):
    """
    A versioned prompt template.

    Templates are immutable after creation. To update a prompt,
    create a new version and make it the default.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    template: str
    version: str
    description: str = ""

    # Expected variables (for validation)
    required_variables: frozenset[str] = Field(default_factory=frozenset)

    def render(self, **variables: Any) -> str:
        """
        Render the template with provided variables.

        Raises:
            ValueError: If required variables are missing
        """
        missing = self.required_variables - set(variables.keys())
        if missing:
            raise ValueError(f"Missing required variables: {sorted(missing)}")

        try:
            return _environment.from_string(self.template).render(**variables)
        except UndefinedError as e:
            raise ValueError(f"Undefined variable in template: {e}")

    def validate_template(self) -> list[str]:
        """Return syntax errors (empty if valid)."""
        try:
            _environment.parse(self.template)
        except TemplateSyntaxError as e:
            return [f"Syntax error: {e}"]
        return []


class PromptRegistry:
    """
    Central registry for prompt templates.

    Provides:
    - Template storage and retrieval
    - Version management
    - The built-in reasoning and response prompts
    """

    def __init__(self):
        self._templates: dict[str, dict[str, PromptTemplate]] = {}
        self._default_versions: dict[str, str] = {}

        self._register_defaults()

    def _register_defaults(self) -> None:
        """Register the built-in stage prompts."""

        # Input to the reasoning backend
        self.register(PromptTemplate(
            name="reasoning_request",
            version="1.0.0",
            template=(
                "{% if history %}Previous conversation:\n{{ history }}\n\n"
                "New question: {{ prompt }}{% else %}{{ prompt }}{% endif %}"
            ),
            description="Question for the reasoning model, with prior turns when present",
            required_variables=frozenset({"prompt"}),
        ))
        self.set_default_version("reasoning_request", "1.0.0")

        # Input to the answering backend
        self.register(PromptTemplate(
            name="response_request",
            version="1.0.0",
            template=(
                "{% if history %}Previous conversation:\n{{ history }}\n\n{% endif %}"
                "Current question: <question>{{ prompt }}</question>\n\n"
                "<thinking>{{ reasoning }}</thinking>\n\n"
            ),
            description="Question plus extracted reasoning, tagged for the answering model",
            required_variables=frozenset({"prompt", "reasoning"}),
        ))
        self.set_default_version("response_request", "1.0.0")

    def register(self, template: PromptTemplate) -> None:
        """Register a template version."""
        errors = template.validate_template()
        if errors:
            raise ValueError(f"Invalid template {template.name}: {errors}")

        versions = self._templates.setdefault(template.name, {})
        versions[template.version] = template

        # First registered version becomes the default
        self._default_versions.setdefault(template.name, template.version)

    def set_default_version(self, name: str, version: str) -> None:
        """Select which version get() returns by default."""
        if version not in self._templates.get(name, {}):
            raise KeyError(f"Unknown template version: {name}@{version}")
        self._default_versions[name] = version

    def get(self, name: str, version: str | None = None) -> PromptTemplate | None:
        """Get a template by name, default version unless specified."""
        versions = self._templates.get(name)
        if not versions:
            return None
        return versions.get(version or self._default_versions[name])

    def render(self, name: str, **variables: Any) -> str:
        """Render the default version of a template."""
        template = self.get(name)
        if template is None:
            raise KeyError(f"Unknown template: {name}")
        return template.render(**variables)


_registry: PromptRegistry | None = None


def get_prompt_registry() -> PromptRegistry:
    """Get or create the global prompt registry."""
    global _registry
    if _registry is None:
        _registry = PromptRegistry()
    return _registry


def build_reasoning_prompt(prompt: str, history: str = "") -> str:
    """Input for the reasoning stage."""
    return get_prompt_registry().render("reasoning_request", prompt=prompt, history=history)


def build_response_prompt(prompt: str, reasoning: str, history: str = "") -> str:
    """Input for the answering stage."""
    return get_prompt_registry().render(
        "response_request",
        prompt=prompt,
        reasoning=reasoning,
        history=history,
    )
