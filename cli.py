# cli.py

"""
Запуск get-linked-data без установки пакета.

Пример запуска:
    python cli.py scrape -i urls.csv -e 'script[type="application/ld+json"]' -o data.csv
"""
from get_linked_data.cli import cli


if __name__ == '__main__':
    cli()
