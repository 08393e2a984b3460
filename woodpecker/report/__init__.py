# File: woodpecker/report/__init__.py
"""woodpecker.report: выгрузка загруженных записей в JSON / JSON Lines и HTML."""

from __future__ import annotations

from .html_report import render_html, summarize
from .json_report import render_json

__all__ = ["render_json", "render_html", "summarize"]
