from .data_exporter import DataExporter, Records


def export_json(records: Records, file_path: str, **kwargs) -> str:
    """Quick JSON export"""
    return DataExporter(records).to_json(file_path, **kwargs)
