"""Jinja2 template environment for the HTML front end."""

from pathlib import Path

from fastapi.templating import Jinja2Templates

from user_management.core.constants import ACTION_TYPES


TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
templates.env.globals["action_types"] = ACTION_TYPES
