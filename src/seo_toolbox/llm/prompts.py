"""Prompt templates for the analysis tools.

Each tool has templates/<name>.yaml with `name`, `description` and `content`.
Content uses $placeholders because the templates quote literal JSON, braces included.
"""

import yaml
from functools import lru_cache
from pathlib import Path
from string import Template
from typing import Any, Dict

TEMPLATE_DIR = Path(__file__).parent / "templates"

@lru_cache()
def load_prompt(name: str) -> Template:
    """
    Read and compile a template once per process.
    Raises FileNotFoundError for unknown names and ValueError for a file without content.
    """
    yaml_path = TEMPLATE_DIR / f"{name}.yaml"
    if yaml_path.exists():
        with open(yaml_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        content = data.get("content", "")
    else:
        # Plain markdown templates are accepted for quick experiments
        md_path = TEMPLATE_DIR / f"{name}.md"
        if not md_path.exists():
            raise FileNotFoundError(f"Prompt {name} not found as .yaml or .md")
        content = md_path.read_text(encoding="utf-8")

    if not content.strip():
        raise ValueError(f"Prompt {name} has no content")
    return Template(content)

def render_prompt(name: str, context: Dict[str, Any]) -> str:
    """
    Fill a template's $placeholders from context.
    A placeholder missing from context raises KeyError rather than leaking into the prompt.
    """
    return load_prompt(name).substitute({k: _as_text(v) for k, v in context.items()}).strip()

def _as_text(value: Any) -> str:
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value)
    return str(value)
