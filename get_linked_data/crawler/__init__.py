# File: get_linked_data/crawler/__init__.py
"""get_linked_data.crawler: Пул воркеров, загрузка страниц и ограничение доменов."""
