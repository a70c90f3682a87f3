"""
Atomized access to data_export
"""

from .data_exporter import DataExporter, REPORT_COLUMNS
from .export_text import export_text
from .export_json import export_json
from .export_csv import export_csv

__all__ = ['DataExporter', 'REPORT_COLUMNS', 'export_text', 'export_json', 'export_csv']
