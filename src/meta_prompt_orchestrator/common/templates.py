"""Prompt templating helpers.

Placeholders are written as ``{{ name }}``. The inner text must not contain a
brace; surrounding whitespace is ignored.
"""
from __future__ import annotations
import re
from pathlib import Path
from typing import Mapping

PLACEHOLDER_RE = re.compile(r"{{\s*([^{}]+?)\s*}}")

def load_template(path: str = "configs/meta_prompt.txt") -> str:
    """
    Load a meta prompt template file.

    Args:
        path: Path to template.
    """
    return Path(path).read_text(encoding="utf-8")

def format_marker(name: str) -> str:
    return "{{" + name + "}}"

def detect_placeholders(template: str) -> list[str]:
    """
    Collect placeholder names in order of first appearance.

    Malformed markers are skipped without error.

    Args:
        template: Template text.

    Returns:
        Distinct, trimmed, non-empty names.
    """
    seen: dict[str, None] = {}
    for match in PLACEHOLDER_RE.finditer(template):
        name = match.group(1).strip()
        if name:
            seen.setdefault(name, None)
    return list(seen)

def render_prompt(template: str, values: Mapping[str, str]) -> str:
    """
    Render variable values into the template.

    Args:
        template: Template content containing {{name}} markers.
        values: Mapping of placeholder name to value.

    Returns:
        Rendered prompt. Names with no value, or an empty one, are written
        back as ``{{name}}``.
    """
    def _sub(match: re.Match[str]) -> str:
        name = match.group(1).strip()
        if not name:
            return match.group(0)
        value = values.get(name)
        return value if value else format_marker(name)

    return PLACEHOLDER_RE.sub(_sub, template)

def unresolved_placeholders(template: str, values: Mapping[str, str]) -> list[str]:
    """Names referenced by the template that have no non-empty value."""
    return [name for name in detect_placeholders(template) if not values.get(name)]
