# File: micrawl/report/text_report.py
"""micrawl.report.text_report: Генерация текстового отчёта с помощью Jinja2."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from micrawl.config import CrawlConfig
from micrawl.crawler.models import CrawlResult

TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_NAME = "report.txt.j2"


def _entries(result: CrawlResult) -> list[dict[str, str]]:
    """Код ответа для загруженных страниц, иначе метка области."""
    entries = []
    for link in result.links:
        status = result.statuses.get(link.url)
        marker = str(status) if status is not None else link.scope.value
        entries.append({"marker": marker, "url": link.url})
    return entries


def render_text(
    result: CrawlResult,
    config: CrawlConfig,
    output_path: Union[Path, str],
    template_dir: Union[Path, str] = TEMPLATE_DIR,
) -> Path:
    """Рендерит текстовый отчёт и сохраняет его по указанному пути.

    Args:
        result: результат обхода.
        config: конфигурация запуска (выводится в шапке).
        output_path: путь к итоговому файлу.
        template_dir: директория с Jinja2-шаблонами.

    Returns:
        Path до сохранённого файла.

    Пример:
    ```python
    from micrawl.report.text_report import render_text
    render_text(result, config, 'reports/example.txt')
    ```
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    env = Environment(
        loader=FileSystemLoader(str(template_dir)),
        autoescape=select_autoescape(["html", "xml"]),
        trim_blocks=True,
        keep_trailing_newline=True,
    )
    template = env.get_template(TEMPLATE_NAME)

    context: dict[str, Any] = {
        "seed": result.seed,
        "config_lines": config.describe(),
        "robots": result.robots,
        "links": _entries(result),
        "count": len(result.links),
        "elapsed": result.elapsed_display,
    }

    output_path.write_text(template.render(**context), encoding="utf-8")
    return output_path
