# get_linked_data/__init__.py
"""
get-linked-data package initializer.
Defines package version and exposes the CLI.
"""
__version__ = "0.1.0"

from .cli import cli  # экспорт для pytest и console_scripts

__all__ = ["__version__", "cli"]
