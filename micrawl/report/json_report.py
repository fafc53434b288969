# micrawl/report/json_report.py

"""
Генерация JSON-отчёта для проекта Micrawl.

Сериализация объекта CrawlResult в файл.
"""
import json
from pathlib import Path

from micrawl.crawler.models import CrawlResult


def render_json(result: CrawlResult, output_path: Path | str) -> Path:
    """
    Сохраняет результат обхода в формате JSON по указанному пути.

    :param result: объект CrawlResult
    :param output_path: путь к JSON-файлу
    :return: Path сохранённого файла
    """
    output = Path(output_path)
    output.parent.mkdir(parents=True, exist_ok=True)

    data = {
        'seed': result.seed,
        'links': [
            {
                'url': link.url,
                'scope': link.scope.value,
                'status': result.statuses.get(link.url),
            }
            for link in result.links
        ],
        'robots': result.robots,
        'elapsed': round(result.elapsed, 3),
    }

    with output.open('w', encoding='utf-8') as f:
        json.dump(data, f, ensure_ascii=False, indent=2)

    return output
