"""Render templates and write generated output.

Takes the context from context_builder and writes one Java file per type:
records through record.java.j2, enums through enum.java.j2.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

from .config import OUTPUT_DIR

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )


def render(template_name: str, type_context: dict[str, Any]) -> str:
    """Render a single record or enum context."""
    return _environment().get_template(template_name).render(**type_context)


def generate(context: dict[str, Any], output_dir: Path | None = None) -> list[Path]:
    """Render every record and enum and write them under output_dir."""
    env = _environment()
    root = output_dir or OUTPUT_DIR
    written: list[Path] = []

    jobs = [("record.java.j2", r) for r in context["records"]]
    jobs += [("enum.java.j2", e) for e in context["enums"]]
    for template_name, type_context in jobs:
        output = env.get_template(template_name).render(**type_context)
        output_path = root / type_context["path"]
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(output, encoding="utf-8")
        written.append(output_path)

    print(
        f"Generated {len(written)} files in {root}"
        f" ({context['record_count']} records, {context['enum_count']} enums)"
    )
    return written
