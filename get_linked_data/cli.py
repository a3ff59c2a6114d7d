# === FILE: get_linked_data/cli.py ===
#!/usr/bin/env python3
"""
Точка входа get-linked-data: обход списка URL и извлечение JSON-LD в CSV.

Команды:
  scrape    Обойти URL из CSV и записать извлечённые данные и неудачные URL
  config    Показать итоговую конфигурацию

Общие опции:
  --config PATH       YAML/JSON-файл с настройками (опции команд важнее)
  --log-level LEVEL   Уровень логирования (DEBUG, INFO, ...)
  --log-file PATH     Файл для логов (только консоль, если не указан)
  --log-format FORMAT Формат логирования
  --verbose, -v       То же, что --log-level DEBUG

Команда scrape опции:
  -i PATH             CSV с URL в первом столбце (обязательно)
  -e SELECTOR         CSS-селектор или XPath (с --xml) (обязательно, если нет в конфиге)
  -o PATH             CSV для извлечённых данных (обязательно)
  -f PATH             CSV для неудачных URL (default: <output>_failed.csv)
  -q JQ               jq-запрос к JSON-тексту элемента
  -d CHAR             Разделитель полей (default: ",")
  -p INT              Параллелизм (default: 100)
  -w MS               Верхняя граница случайной задержки, мс (default: 2000)
  -t SEC              Таймаут запроса (default: 120)
  --xml               XPath по XML-дереву вместо CSS по HTML
  --keep-alive        Не отключать keep-alive соединения
  --with-source       Добавить исходный URL вторым полем
  --scan-timeout SEC  Таймаут всего обхода; незавершённые URL считаются неудачными

Пример:
  get-linked-data scrape -i urls.csv -e 'script[type="application/ld+json"]' -q '.name' -o data.csv
"""
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from get_linked_data import __version__
from get_linked_data.config import load_config
from get_linked_data.engine import Engine
from get_linked_data.errors import GetLinkedDataError
from get_linked_data.logger import DEFAULT_FORMAT, init_logging, logger

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


def _build_policy(config_path, **overrides):
    try:
        return load_config(config_path, **overrides)
    except ValidationError as e:
        print_error(f'Invalid configuration:\n{e}')
    except (OSError, ValueError, TypeError) as e:
        print_error(f'Failed loading configuration: {e}')


@click.group(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', message='get-linked-data, version %(version)s')
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML/JSON-файл с настройками обхода.'
)
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Уровень логирования'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(writable=True, dir_okay=False, path_type=Path),
    help='Путь к файлу логов (только консоль, если не указан)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Строка формата для логов'
)
@click.option('--verbose', '-v', is_flag=True, help='Подробный вывод (DEBUG)')
@click.pass_context
def cli(ctx, config_path, log_level, log_file, log_format, verbose):
    """Обход списка URL и извлечение структурированных данных (JSON-LD) в CSV."""
    init_logging(
        level='DEBUG' if verbose else log_level,
        log_file=str(log_file) if log_file else None,
        log_format=log_format
    )
    ctx.ensure_object(dict)
    ctx.obj['config_path'] = config_path


@cli.command('scrape', context_settings=CONTEXT_SETTINGS)
@click.option('-i', '--input', 'input_path', required=True,
              type=click.Path(dir_okay=False, path_type=Path),
              help='CSV с URL для обхода (первый столбец)')
@click.option('-e', '--element', 'selector', default=None, help='Селектор элементов')
@click.option('-o', '--output', 'output_path', required=True,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='CSV для извлечённых данных')
@click.option('-f', '--failed', 'failed_path', default=None,
              type=click.Path(writable=True, dir_okay=False, path_type=Path),
              help='CSV для неудачных URL')
@click.option('-q', '--query', 'query', default=None, help='jq-запрос к тексту элемента')
@click.option('-d', '--delimiter', 'delimiter', default=None, help='Разделитель полей [,]')
@click.option('-p', '--parallelism', 'parallelism', type=int, default=None, help='Параллелизм [100]')
@click.option('-w', '--wait', 'wait_time', type=int, default=None, help='Случайная задержка до, мс [2000]')
@click.option('-t', '--timeout', 'timeout', type=float, default=None, help='Таймаут запроса, с [120]')
@click.option('--xml', 'xml_mode', is_flag=True, help='XPath по XML-дереву')
@click.option('--keep-alive', 'keep_alive', is_flag=True, help='Не отключать keep-alive')
@click.option('--with-source', 'with_source', is_flag=True, help='Добавить исходный URL вторым полем')
@click.option('--scan-timeout', 'scan_timeout', type=float, default=None,
              help='Таймаут всего обхода (секунд)')
@click.pass_context
def scrape(ctx, input_path, selector, output_path, failed_path, query, delimiter, parallelism,
           wait_time, timeout, xml_mode, keep_alive, with_source, scan_timeout):
    """Обойти URL и записать извлечённые данные и неудачные URL в CSV."""
    policy = _build_policy(
        ctx.obj['config_path'],
        selector=selector,
        query=query,
        delimiter=delimiter,
        parallelism=parallelism,
        wait_time=wait_time,
        timeout=timeout,
        mode='xml' if xml_mode else None,
        disable_keep_alive=False if keep_alive else None,
    )
    logger.info("get-linked-data %s", __version__)
    logger.info("Arguments")
    logger.info("... CSV file containing URLs to scrape: %s", input_path)
    logger.info("... Element selector: %s", policy.selector)
    logger.info("... jq selector: %s", policy.query or "<none>")
    logger.info("... Output CSV file: %s", output_path)
    logger.info("... Field delimiter: %r", policy.delimiter)
    logger.info("... Parallelism: %d, random delay up to %d ms", policy.parallelism, policy.wait_time)
    logger.info("Begin")

    try:
        result = Engine(policy).run(
            input_path,
            output_path,
            failed_path,
            with_source=with_source,
            scan_timeout=scan_timeout,
        )
    except (GetLinkedDataError, OSError) as e:
        print_error(f'Ошибка: {e}')

    summary = result.sink.summary()
    click.echo(f'Scraped records: {summary["records"]} -> {result.output_path}')
    click.echo(f'Failed URLs: {summary["failed"]} -> {result.failed_path}')
    logger.info("Done!")


@cli.command('config', context_settings=CONTEXT_SETTINGS)
@click.option('-e', '--element', 'selector', default=None, help='Селектор элементов')
@click.option('-q', '--query', 'query', default=None, help='jq-запрос к тексту элемента')
@click.option('--xml', 'xml_mode', is_flag=True, help='XPath по XML-дереву')
@click.pass_context
def show_config(ctx, selector, query, xml_mode):
    """Показать итоговую конфигурацию в JSON."""
    policy = _build_policy(
        ctx.obj['config_path'],
        selector=selector,
        query=query,
        mode='xml' if xml_mode else None,
    )
    click.echo(policy.model_dump_json(indent=2))


if __name__ == "__main__":
    cli()
