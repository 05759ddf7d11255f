"""An interactive shell with built-in file, text, date, calculator and to-do commands, pipelines and small parsing and formatting helpers."""

__version__ = "1.0.0"