#!/usr/bin/env python3
"""
Точка входа для запуска краулера Micrawl через командную строку.

Опции:
  -u, --url URL        Стартовый URL (со схемой, http(s)://...)
  -o, --output PATH    Сохранить текстовый отчёт в файл
  -e, --external       Включать внешние ссылки в отчёт
  -r, --robots         Скачать и вывести robots.txt
  -t, --threads INT    Число одновременных запросов, 1..30 (default: 10)
  --json PATH          Сохранить JSON-отчёт в файл
  --config PATH        YAML/JSON-файл с теми же параметрами
  --timeout SEC        Таймаут на загрузку страницы
  --log-level LEVEL    Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH      Файл для логов (stdout, если не указан)

Пример:
  micrawl -u https://example.com -o report.txt -t 20 -e
"""
import asyncio
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from micrawl import __version__
from micrawl.config import ConfigError, load_config, prepare_output
from micrawl.engine import check_reachable, start_crawl
from micrawl.logger import init_logging
from micrawl.report.json_report import render_json
from micrawl.report.text_report import render_text

CONTEXT_SETTINGS = dict(help_option_names=["--help"])

BANNER = r"""
   _____  .__                           .__
  /     \ |__| ________________ __  _  _|  |
 /  \ /  \|  |/ ___\_  __ \__  \\ \/ \/ /  |
/    Y    \  \  \___|  | \// __ \\     /|  |__
\____|__  /__|\___  >__|  (____  /\/\_/ |____/
        \/        \/           \/
"""


def print_error(message: str):
    click.secho(f'[!] {message}. Terminating.', fg='red', err=True)
    sys.exit(1)


def _format_validation_error(exc: ValidationError) -> str:
    parts = []
    for err in exc.errors():
        field = '.'.join(str(p) for p in err['loc']) or 'config'
        parts.append(f"{field}: {err['msg']}")
    return 'Invalid configuration (' + '; '.join(parts) + ')'


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='Micrawl, version %(version)s')
@click.option('--url', '-u', 'url', default=None,
              help='Хост для обхода, со схемой (http(s)://<ip> или http(s)://<url>).')
@click.option('--output', '-o', 'output', default=None,
              type=click.Path(dir_okay=False, path_type=Path),
              help='Файл для текстового отчёта (относительно текущей папки).')
@click.option('--external', '-e', 'external', is_flag=True,
              help='Дополнительно выводить внешние ссылки.')
@click.option('--robots', '-r', 'robots', is_flag=True,
              help='Скачать содержимое robots.txt.')
@click.option('--threads', '-t', 'threads', default=None,
              help='Число одновременных запросов (1-30, по умолчанию 10).')
@click.option('--json', 'json_output', default=None,
              type=click.Path(dir_okay=False, path_type=Path),
              help='Сохранить JSON-отчёт в файл.')
@click.option('--config', '-c', 'config_path', default=None,
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Путь к файлу конфигурации YAML/JSON.')
@click.option('--timeout', 'timeout', default=None,
              help='Таймаут на загрузку одной страницы (секунд).')
@click.option('--log-level', 'log_level', default='INFO', show_default=True,
              type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
              help='Уровень логирования')
@click.option('--log-file', 'log_file', default=None,
              type=click.Path(dir_okay=False, path_type=Path),
              help='Путь к файлу логов (stdout, если не указан)')
def cli(url, output, external, robots, threads, json_output, config_path, timeout,
        log_level, log_file):
    """Обойти сайт, начиная с URL, и собрать найденные ссылки."""
    logger = init_logging(level=log_level, log_file=str(log_file) if log_file else None)
    click.echo(BANNER)

    if url is None and config_path is None:
        print_error("Missing option '-u' / '--url'")

    # 1. Конфигурация
    try:
        cfg = load_config(
            config_path,
            seed=url,
            output=output,
            json_output=json_output,
            list_external=external or None,
            extract_robots=robots or None,
            threads=threads,
            timeout=timeout,
        )
    except ValidationError as e:
        print_error(_format_validation_error(e))
    except (ValueError, TypeError, OSError) as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')

    # 2. Предварительные проверки
    try:
        prepare_output(cfg.output)
        prepare_output(cfg.json_output)
        asyncio.run(check_reachable(cfg))
    except ConfigError as e:
        print_error(str(e))

    for line in cfg.describe():
        click.echo(line)
    click.echo('')

    # 3. Обход
    result = asyncio.run(start_crawl(cfg))
    click.echo(f'\n{result.summary()}')

    # 4. Отчёты: ошибка записи не отменяет результат
    if cfg.output is not None:
        try:
            saved = render_text(result, cfg, cfg.output)
            click.echo(f'Text report: {saved}')
        except OSError as e:
            logger.warning('[!] Failed writing output to file %s: %s', cfg.output, e)

    if cfg.json_output is not None:
        try:
            saved = render_json(result, cfg.json_output)
            click.echo(f'JSON report: {saved}')
        except OSError as e:
            logger.warning('[!] Failed writing JSON report %s: %s', cfg.json_output, e)


if __name__ == "__main__":
    cli()
