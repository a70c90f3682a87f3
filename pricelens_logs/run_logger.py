"""
Run Logger - Markdown log of a detection pass

Provides a unified interface for logging detection runs with:
- Table of Contents generation
- Step-by-step logging
- Result tables

Usage:
    logger = RunLogger(url="https://shop.example.com/c/mice")
    logger.log_heading("Detection")
    logger.log_text("Found 12 potential price element(s)")
    logger.log_table(["Title", "Price"], [["Wireless Mouse", "$19.99"]])
    logger.finalize(success=True, duration_ms=420)
"""

import re
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional


class RunLogger:
    """Markdown run logger for step-by-step diagnostics (with TOC)."""

    def __init__(
        self,
        url: Optional[str] = None,
        command_line: Optional[str] = None,
        log_dir: str = "./logs",
        session_id: Optional[str] = None
    ):
        """
        Initialize the run logger.

        Args:
            url: Page or snapshot being scanned
            command_line: Full CLI command
            log_dir: Directory for log files
            session_id: Optional session ID (auto-generated if not provided)
        """
        self.session_id = session_id or datetime.now().strftime('%Y%m%d-%H%M%S')
        self.dir = Path(log_dir)
        self.dir.mkdir(parents=True, exist_ok=True)
        self.path = self.dir / f'run-{self.session_id}.md'

        self._toc_placeholder = "<!-- TOC_PLACEHOLDER -->"
        self._toc: List[str] = []

        with open(self.path, 'w', encoding='utf-8') as f:
            f.write(f"# pricelens Run Log ({self.session_id})\n\n")
            f.write("## Navigation\n\n")
            f.write(self._toc_placeholder + "\n\n")
            if command_line:
                f.write(f"```bash\n{command_line}\n```\n\n")
            if url:
                f.write(f"- **URL**: {url}\n\n")

    def _write(self, text: str):
        """Append text to log file"""
        with open(self.path, 'a', encoding='utf-8') as f:
            f.write(text)

    def log_heading(self, text: str):
        """Log a section heading with TOC entry."""
        self._write("\n---\n\n")
        self._write(f"## {text}\n\n")
        self._toc.append(text)
        self._update_toc()

    def log_text(self, text: str):
        """Log a paragraph of text"""
        self._write(f"{text}\n\n")

    def log_kv(self, key: str, value: str):
        """Log a key-value pair"""
        self._write(f"- {key}: {value}\n")

    def log_table(self, headers: List[str], rows: List[List[str]], title: str = ""):
        """
        Log a Markdown table.

        Args:
            headers: List of column headers
            rows: List of rows, each row is a list of cell values
            title: Optional title above the table
        """
        if title:
            self._write(f"### {title}\n\n")

        if not headers or not rows:
            return

        col_widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                if i < len(col_widths):
                    col_widths[i] = max(col_widths[i], len(self._cell(cell)))

        header_line = "| " + " | ".join(h.ljust(col_widths[i]) for i, h in enumerate(headers)) + " |"
        self._write(header_line + "\n")

        sep_line = "|" + "|".join("-" * (w + 2) for w in col_widths) + "|"
        self._write(sep_line + "\n")

        for row in rows:
            padded_row = list(row) + [""] * (len(headers) - len(row))
            row_line = "| " + " | ".join(
                self._cell(c).ljust(col_widths[i]) for i, c in enumerate(padded_row[:len(headers)])
            ) + " |"
            self._write(row_line + "\n")

        self._write("\n")

    def log_success(self, message: str):
        """Log a success message"""
        self._write(f"✅ **SUCCESS:** {message}\n\n")

    def log_error(self, message: str):
        """Log an error message"""
        self._write(f"❌ **ERROR:** {message}\n\n")

    def finalize(self, success: bool, duration_ms: int = 0, error: Optional[str] = None):
        """
        Finalize the log with summary.

        Args:
            success: Whether the pass produced records
            duration_ms: Total execution time
            error: Error message if failed
        """
        self._write("\n---\n\n")
        self._write("## Summary\n\n")

        status = "✅ SUCCESS" if success else "❌ FAILED"
        self._write(f"**Status:** {status}\n")
        self._write(f"**Duration:** {duration_ms}ms\n")

        if error:
            self._write(f"\n**Error:** {error}\n")

        self._write("\n")

    # --- Helpers ---
    @staticmethod
    def _cell(value: Any) -> str:
        return str(value).replace("|", "\\|").replace("\n", " ")

    def _slugify(self, text: str) -> str:
        """Convert text to URL-safe slug"""
        s = text.strip().lower()
        s = re.sub(r"[^a-z0-9\s-]", "", s)
        s = re.sub(r"\s+", "-", s)
        return s

    def _update_toc(self):
        """Rewrite the table of contents in the log file"""
        content = self.path.read_text(encoding='utf-8')
        items = "\n".join(f"- [{title}](#{self._slugify(title)})" for title in self._toc)
        start = content.find("## Navigation\n\n")
        end = content.find("\n\n", start + len("## Navigation\n\n"))
        if start == -1 or end == -1:
            return
        head = content[:start + len("## Navigation\n\n")]
        content = head + items + content[end:]
        self.path.write_text(content, encoding='utf-8')

    @property
    def log_path(self) -> str:
        """Get the path to the log file"""
        return str(self.path)


def create_run_logger(
    url: Optional[str] = None,
    command_line: Optional[str] = None,
    log_dir: str = "./logs"
) -> RunLogger:
    """Create a new run logger instance"""
    return RunLogger(url=url, command_line=command_line, log_dir=log_dir)
