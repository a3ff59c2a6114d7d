# File: get_linked_data/report/__init__.py
"""get_linked_data.report: Запись результатов обхода в CSV-файлы, используется CLI и Engine."""

from .csv_report import default_failed_path, render_data, render_failed

__all__ = ["default_failed_path", "render_data", "render_failed"]
