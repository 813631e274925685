"""Configuration and CSV import/export."""

from .config import SchedulerConfig, load_config
from .export_csv import export_assistants_csv, export_sessions_csv
from .import_csv import import_assistants_csv

__all__ = [
    "SchedulerConfig",
    "load_config",
    "import_assistants_csv",
    "export_sessions_csv",
    "export_assistants_csv",
]
