from .data_exporter import DataExporter, Records


def export_csv(records: Records, file_path: str, **kwargs) -> str:
    """Quick CSV export"""
    return DataExporter(records).to_csv(file_path, **kwargs)
