import csv
import io
import json
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from ..detection.models import ProductRecord

REPORT_COLUMNS = ["title", "price", "imageUrl"]

Records = Iterable[Union[ProductRecord, Dict[str, str]]]


class DataExporter:
    """
    Export detected product records

    Usage:
        exporter = DataExporter(result.records)
        exporter.to_text("detected-products.txt")
        exporter.to_json("products.json")
        exporter.to_csv("products.csv")
    """

    def __init__(self, records: Records, metadata: Optional[Dict] = None):
        """
        Initialize exporter

        Args:
            records: ProductRecord objects or dicts with title/price/imageUrl
            metadata: Optional metadata to include in JSON output
        """
        self.data: List[Dict[str, str]] = [
            r.to_dict() if isinstance(r, ProductRecord) else dict(r) for r in records
        ]
        self.metadata = metadata or {}
        self.metadata.setdefault("exported_at", datetime.now().isoformat())
        self.metadata.setdefault("count", len(self.data))

    def to_text(self, file_path: Optional[Union[str, Path]] = None) -> str:
        """
        Export to the plain-text report

        Each record is three lines (Title, Image, Price) followed by a
        blank line.
        """
        text = "".join(
            f"Title: {item.get('title', '')}\n"
            f"Image: {item.get('imageUrl', '')}\n"
            f"Price: {item.get('price', '')}\n\n"
            for item in self.data
        )

        if file_path:
            Path(file_path).write_text(text, encoding='utf-8')

        return text

    def to_json(
        self,
        file_path: Optional[Union[str, Path]] = None,
        pretty: bool = True,
        include_metadata: bool = True
    ) -> str:
        """
        Export to JSON

        Args:
            file_path: Optional path to save file
            pretty: Pretty print with indentation
            include_metadata: Include metadata in output

        Returns:
            JSON string
        """
        output = {
            "data": self.data,
        }

        if include_metadata:
            output["metadata"] = self.metadata

        json_str = json.dumps(
            output,
            indent=2 if pretty else None,
            ensure_ascii=False
        )

        if file_path:
            Path(file_path).write_text(json_str, encoding='utf-8')

        return json_str

    def to_csv(
        self,
        file_path: Optional[Union[str, Path]] = None,
        delimiter: str = ',',
        include_headers: bool = True
    ) -> str:
        """Export to CSV with title, price, imageUrl columns"""
        output = io.StringIO()
        writer = csv.DictWriter(
            output,
            fieldnames=REPORT_COLUMNS,
            delimiter=delimiter,
            extrasaction='ignore',
            lineterminator='\n',
        )

        if include_headers:
            writer.writeheader()

        writer.writerows(self.data)

        csv_str = output.getvalue()

        if file_path:
            Path(file_path).write_text(csv_str, encoding='utf-8')

        return csv_str

    def export(self, fmt: str, file_path: Optional[Union[str, Path]] = None) -> str:
        """Export in the named format: text, json or csv"""
        exporters = {
            "text": self.to_text,
            "txt": self.to_text,
            "json": self.to_json,
            "csv": self.to_csv,
        }
        try:
            return exporters[fmt.lower()](file_path)
        except KeyError:
            raise ValueError(f"Unsupported export format: {fmt}") from None
