"""
Prompt loader utility for chunkwise.

Loads YAML prompt templates shipped in chunkwise/prompts/ and checks them
against the placeholders a caller is able to fill, so a broken template is
reported when the source is built rather than on the first request.
"""

from pathlib import Path
from string import Formatter
from typing import Any, Iterable
import yaml


# chunkwise/prompts/*.yaml, installed as package data
PROMPTS_DIR = Path(__file__).parent.parent / "prompts"

REQUIRED_KEYS = ("meta", "system", "user_template")


def template_fields(template: str) -> set[str]:
    """Placeholder names used by a template; escaped {{ }} braces are ignored."""
    names = set()
    for _, field_name, _, _ in Formatter().parse(template):
        if field_name:
            names.add(field_name.split(".")[0].split("[")[0])
    return names


def load_prompt(
    name: str,
    prompts_dir: Path | None = None,
    fields: Iterable[str] | None = None,
) -> dict[str, Any]:
    """
    Load and check a prompt template by name.

    Args:
        name: Prompt name without .yaml extension (e.g., "generate_chunks")
        prompts_dir: Optional custom prompts directory
        fields: Placeholders the caller supplies; the user template may not
            use any other

    Returns:
        Dict with keys:
        - meta: version, model, temperature
        - system: system prompt string
        - user_template: user prompt template with {placeholders}

    Raises:
        FileNotFoundError: If prompt file doesn't exist
        yaml.YAMLError: If YAML parsing fails
        ValueError: If a required key is missing or empty, or the user
            template uses a placeholder outside `fields`
    """
    dir_path = prompts_dir or PROMPTS_DIR
    file_path = dir_path / f"{name}.yaml"

    if not file_path.exists():
        raise FileNotFoundError(f"Prompt template not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        prompt = yaml.safe_load(f)

    if not isinstance(prompt, dict):
        raise ValueError(f"Prompt '{name}' must be a mapping, got {type(prompt).__name__}")

    missing = [key for key in REQUIRED_KEYS if not prompt.get(key)]
    if missing:
        raise ValueError(f"Prompt '{name}' is missing: {', '.join(missing)}")

    if fields is not None:
        unknown = template_fields(prompt["user_template"]) - set(fields)
        if unknown:
            raise ValueError(f"Prompt '{name}' uses unknown placeholders: {', '.join(sorted(unknown))}")

    return prompt


def format_prompt(template: str, **kwargs) -> str:
    """
    Format a prompt template with provided values.

    Raises:
        ValueError: If the template needs a value that was not given
    """
    try:
        return template.format(**kwargs)
    except (KeyError, IndexError) as e:
        raise ValueError(f"No value for prompt placeholder {e}") from e
