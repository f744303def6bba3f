"""Rendering — Jinja2 templates shared by routes and error handlers.

Invariants:
    - Autoescaping is on for .html templates: post content is never trusted markup
    - Template directory is resolved relative to the package, not the working directory
"""

from pathlib import Path

from fastapi.templating import Jinja2Templates

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
