from .data_exporter import DataExporter, Records


def export_text(records: Records, file_path: str) -> str:
    """Quick plain-text report export"""
    return DataExporter(records).to_text(file_path)
