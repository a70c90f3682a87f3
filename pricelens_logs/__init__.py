"""
pricelens_logs - Markdown run logs for pricelens detection passes

Usage:
    from pricelens_logs import create_run_logger

    run_logger = create_run_logger(url="https://shop.example.com")
    status = await run_detection(page, run_logger=run_logger)
"""

from .run_logger import RunLogger, create_run_logger

__all__ = [
    'RunLogger',
    'create_run_logger',
]

__version__ = '0.1.0'
