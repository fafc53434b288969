# File: micrawl/report/__init__.py
"""micrawl.report: запись результата обхода в файл (текст и JSON)."""

from .json_report import render_json
from .text_report import render_text

__all__ = ["render_json", "render_text"]
