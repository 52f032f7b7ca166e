"""Markdown templates for the notes that sync writes.

Placeholders use ``string.Template`` syntax (``$name``).
"""
from functools import lru_cache
from pathlib import Path
from string import Template

TEMPLATES_DIR = Path(__file__).resolve().parent


@lru_cache(maxsize=None)
def load_template(name: str, templates_dir: Path = TEMPLATES_DIR) -> Template:
    """Return ``<templates_dir>/<name>.md`` as a Template.

    Raises FileNotFoundError for an unknown name.
    """
    template_file = Path(templates_dir) / f"{name}.md"
    if not template_file.is_file():
        raise FileNotFoundError(f"No note template named {name!r} in {template_file.parent}")
    return Template(template_file.read_text(encoding="utf-8"))
