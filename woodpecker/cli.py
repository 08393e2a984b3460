#!/usr/bin/env python3
"""
Точка входа для выборки данных из API через командную строку.

Команды:
  feed               Лента
  attention          Список отслеживаемых
  search KEYWORD     Поиск по ключевому слову
  single PID         Одна запись по номеру
  replies PID        Ответы к записи
  config             Показать текущую конфигурацию

Общие опции:
  --config PATH       Путь к YAML/JSON-конфигу (default: configs/default.yaml, если есть)
  --token TOKEN       Токен пользователя (или переменная WOODPECKER_USER_TOKEN)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (stderr, если не указан)
  --log-format FORMAT Формат логирования

Опции выборки:
  --mode MODE         default | single | sequential | concurrent
  --count INT         Число страниц
  --page-size INT     Размер страницы
  --polite            Не запрашивать страницы сверх лимитов сервера
  --fetch-timeout SEC Вернуть частичный результат по истечении времени
  --json PATH         Сохранить JSON в файл (.jsonl — по записи на строку)
  --html PATH         Сохранить HTML-отчёт в файл
  --template DIR      Папка с Jinja2-шаблоном records.html.j2
  --pretty            Преформатировать JSON-вывод (отступ 2)

Пример:
  woodpecker --token $TOKEN search "考试" --mode sequential --count 3 --pretty
"""
import asyncio
import json
import sys
from pathlib import Path

import click

from woodpecker import __version__
from woodpecker.common.errors import FetchError
from woodpecker.common.swarm import Concurrent, Sequential
from woodpecker.config import load_config
from woodpecker.logger import init_logging
from woodpecker.prebuilt import FetchAttention, FetchFeed, FetchReply, FetchSearch, FetchSingle
from woodpecker.report.html_report import render_html
from woodpecker.report.json_report import render_json
from woodpecker.runner import UNSET, start_fetch

CONTEXT_SETTINGS = dict(help_option_names=["--help"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='Woodpecker, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='Путь к файлу конфигурации YAML/JSON.'
)
@click.option(
    '--token', 'token',
    envvar='WOODPECKER_USER_TOKEN',
    default=None,
    help='Токен пользователя (переопределяет user_token из конфига).'
)
@click.option(
    '--log-level', 'log_level',
    default='WARNING', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (stderr, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default='%(asctime)s %(levelname)s %(message)s',
    show_default=True,
    help='Строка формата для логов'
)
@click.pass_context
def cli(ctx, config_path, token, log_level, log_file, log_format):
    """Группа команд Woodpecker CLI."""
    init_logging(
        level=log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    try:
        cfg = load_config(config_path)
    except Exception as e:
        print_error(f'Ошибка загрузки конфигурации: {e}')
    if token:
        cfg = cfg.model_copy(update={'user_token': token})
    ctx.ensure_object(dict)
    ctx.obj['config'] = cfg


def fetch_options(func):
    """Опции, общие для всех команд выборки."""
    options = [
        click.option('--mode', 'mode', default='default', show_default=True,
                     type=click.Choice(['default', 'single', 'sequential', 'concurrent']),
                     help='Стратегия выборки страниц'),
        click.option('--count', 'count', type=click.IntRange(min=1), default=None,
                     help='Число страниц'),
        click.option('--page-size', 'page_size', type=click.IntRange(min=1), default=None,
                     help='Размер страницы'),
        click.option('--polite', is_flag=True, help='Соблюдать лимиты сервера на страницы'),
        click.option('--fetch-timeout', 'fetch_timeout', type=float, default=None,
                     help='Таймаут выборки (секунд); возвращается частичный результат'),
        click.option('--json', '-j', 'json_output', default=None,
                     type=click.Path(writable=True, dir_okay=False, path_type=Path),
                     help='Сохранить записи в файл (.jsonl — JSON Lines)'),
        click.option('--html', 'html_output', default=None,
                     type=click.Path(writable=True, dir_okay=False, path_type=Path),
                     help='Сохранить HTML-отчёт в файл'),
        click.option('--template', '-t', 'template_dir', default=None,
                     type=click.Path(exists=True, file_okay=False, path_type=Path),
                     help='Папка с Jinja2-шаблоном'),
        click.option('--pretty', is_flag=True, help='Преформатировать JSON-вывод (отступ 2)'),
    ]
    func = click.pass_context(func)
    for option in reversed(options):
        func = option(func)
    return func


def build_swarm(location, mode, count, page_size):
    """Собирает стратегию из опций; UNSET — оставить стратегию location."""
    if mode == 'single':
        return None
    if mode == 'default' and count is None and page_size is None:
        return UNSET
    base = location.default_swarm()
    count = count or (base.count if base else 1)
    page_size = page_size or (base.page_size if base else 25)
    if mode == 'sequential' or (mode == 'default' and isinstance(base, Sequential)):
        return Sequential(count=count, page_size=page_size)
    return Concurrent(count=count, page_size=page_size)


def run_fetch(ctx, location, mode, count, page_size, polite, fetch_timeout,
              json_output, html_output, template_dir, pretty):
    cfg = ctx.obj['config']
    if polite:
        cfg = cfg.model_copy(update={'polite': True})
    swarm = build_swarm(location, mode, count, page_size)
    try:
        resource = asyncio.run(start_fetch(cfg, location, swarm, fetch_timeout))
    except FetchError as e:
        print_error(f'Ошибка выборки: {e}')
    except ValueError as e:
        print_error(f'Неверные параметры выборки: {e}')

    records = resource.to_records()

    # Если не сохраняем в файл — печатаем в stdout
    if not json_output and not html_output:
        indent = 2 if pretty else None
        click.echo(json.dumps(records, ensure_ascii=False, indent=indent))
        return

    if json_output:
        try:
            saved_json = render_json(records, json_output, pretty=pretty)
            click.echo(f'JSON: {saved_json}')
        except Exception as e:
            print_error(f'Ошибка при сохранении JSON: {e}')

    if html_output:
        try:
            saved_html = render_html(records, template_dir, html_output)
            click.echo(f'HTML report: {saved_html}')
        except Exception as e:
            print_error(f'Ошибка при сохранении HTML: {e}')


@cli.command('feed', context_settings=CONTEXT_SETTINGS)
@fetch_options
def feed(ctx, **options):
    """Загрузить ленту."""
    run_fetch(ctx, FetchFeed(), **options)


@cli.command('attention', context_settings=CONTEXT_SETTINGS)
@fetch_options
def attention(ctx, **options):
    """Загрузить отслеживаемые записи."""
    run_fetch(ctx, FetchAttention(), **options)


@cli.command('search', context_settings=CONTEXT_SETTINGS)
@click.argument('keyword')
@fetch_options
def search(ctx, keyword, **options):
    """Поиск по ключевому слову."""
    run_fetch(ctx, FetchSearch(keyword), **options)


@cli.command('single', context_settings=CONTEXT_SETTINGS)
@click.argument('pid', type=int)
@fetch_options
def single(ctx, pid, **options):
    """Загрузить одну запись."""
    run_fetch(ctx, FetchSingle(pid), **options)


@cli.command('replies', context_settings=CONTEXT_SETTINGS)
@click.argument('pid', type=int)
@fetch_options
def replies(ctx, pid, **options):
    """Загрузить ответы к записи."""
    run_fetch(ctx, FetchReply(pid), **options)


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.pass_context
def show_config(ctx):
    """Показать текущую конфигурацию в JSON (токен скрыт)."""
    cfg = ctx.obj['config']
    data = cfg.model_dump(mode='json')
    if data.get('user_token'):
        data['user_token'] = '***'
    click.echo(json.dumps(data, indent=2, ensure_ascii=False))


if __name__ == "__main__":
    cli()
