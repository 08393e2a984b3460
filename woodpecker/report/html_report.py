# File: woodpecker/report/html_report.py
"""woodpecker.report.html_report: HTML-страница с загруженными записями (Jinja2)."""

from __future__ import annotations

from collections import Counter
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

#: шаблоны, поставляемые вместе с пакетом
DEFAULT_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
TEMPLATE_NAME = "records.html.j2"


def summarize(records: List[Dict[str, Any]]) -> Dict[str, Any]:
    """Сводка для шапки отчёта: число записей, виды постов, диапазон снимков."""
    kinds = Counter(r["entry"]["kind"]["type"] for r in records if "kind" in r["entry"])
    snapshots = sorted(r["snapshot"] for r in records)
    return {
        "total": len(records),
        "kinds": dict(sorted(kinds.items())),
        "first_snapshot": snapshots[0] if snapshots else None,
        "last_snapshot": snapshots[-1] if snapshots else None,
    }


def render_html(
    records: List[Dict[str, Any]],
    template_dir: Optional[Union[Path, str]],
    output_path: Union[Path, str],
    title: str = "Woodpecker",
) -> Path:
    """Рендерит ``records.html.j2`` и сохраняет результат.

    Args:
        records: ``resource.to_records()``.
        template_dir: папка со своим ``records.html.j2``; None — встроенный шаблон.
        output_path: путь к итоговому HTML-файлу.
        title: заголовок страницы.
    """
    loader = FileSystemLoader(str(Path(template_dir) if template_dir else DEFAULT_TEMPLATE_DIR))
    env = Environment(loader=loader, autoescape=select_autoescape(["html", "xml", "j2"]))
    html_content = env.get_template(TEMPLATE_NAME).render(
        title=title, records=records, summary=summarize(records)
    )

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(html_content, encoding="utf-8")
    return output_path
