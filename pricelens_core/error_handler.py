"""
User-Friendly Error Handler.

Converts failures around a detection pass (browser, navigation, snapshot
files) into short status messages with actionable suggestions. The
detection engine itself does not raise; these errors come from the
boundary.
"""

from typing import Dict, Optional
import logging

logger = logging.getLogger(__name__)


def format_user_friendly_error(
    error: Exception,
    context: str = "general",
    technical_details: Optional[str] = None
) -> Dict:
    """
    Convert technical error to user-friendly message.

    Args:
        error: The exception that occurred
        context: Context where error occurred (e.g., "navigation", "snapshot")
        technical_details: Additional technical information

    Returns:
        Dictionary with user-friendly error information:
        {
            "message": str,          # User-friendly message
            "suggestion": str,       # Actionable suggestion
            "technical": str,        # Technical details
            "severity": str,         # "critical", "error", "warning"
            "can_retry": bool        # Whether retry might help
        }
    """
    error_str = f"{type(error).__name__}: {error}"

    for pattern, friendly_error in ERROR_MAPPINGS.items():
        if pattern.lower() in error_str.lower():
            result = friendly_error.copy()
            result["technical"] = technical_details or str(error)
            logger.debug(f"Mapped error to user-friendly: {result['message']}")
            return result

    return {
        "message": "An unexpected error occurred during product detection",
        "suggestion": "Re-run with PRICELENS_DEBUG=true and check the logs",
        "technical": technical_details or str(error),
        "severity": "error",
        "can_retry": True
    }


# Error mappings: pattern -> user-friendly info (first match wins)
ERROR_MAPPINGS = {
    # Browser setup
    "executable doesn't exist": {
        "message": "The browser is not installed",
        "suggestion": "Run: playwright install chromium",
        "severity": "critical",
        "can_retry": False
    },

    # Network/timeout errors
    "timeout": {
        "message": "The page took too long to respond",
        "suggestion": "Check the URL and your connection, or raise PRICELENS_NAV_TIMEOUT_MS",
        "severity": "warning",
        "can_retry": True
    },
    "err_name_not_resolved": {
        "message": "The site address could not be resolved",
        "suggestion": "Check the URL for typos",
        "severity": "error",
        "can_retry": False
    },
    "connection refused": {
        "message": "Could not connect to the page",
        "suggestion": "Check that the URL is correct and the site is reachable",
        "severity": "error",
        "can_retry": True
    },
    "err_connection": {
        "message": "Could not connect to the page",
        "suggestion": "Check that the URL is correct and the site is reachable",
        "severity": "error",
        "can_retry": True
    },
    "cannot navigate to invalid url": {
        "message": "The URL is not valid",
        "suggestion": "Include the scheme, e.g. https://example.com",
        "severity": "error",
        "can_retry": False
    },

    # Page access (the script could not run inside the page)
    "target closed": {
        "message": "The page was closed before detection finished",
        "suggestion": "Keep the tab open and run detection again",
        "severity": "warning",
        "can_retry": True
    },
    "execution context was destroyed": {
        "message": "The page navigated away during detection",
        "suggestion": "Wait for the page to finish loading and run detection again",
        "severity": "warning",
        "can_retry": True
    },
    "empty dom snapshot": {
        "message": "The page did not expose any content to scan",
        "suggestion": "Wait for the page to render and run detection again",
        "severity": "warning",
        "can_retry": True
    },

    # Snapshot files
    "jsondecodeerror": {
        "message": "The snapshot file is not valid JSON",
        "suggestion": "Re-capture the snapshot or check the file",
        "severity": "error",
        "can_retry": False
    },
    "filenotfounderror": {
        "message": "The snapshot file does not exist",
        "suggestion": "Check the --snapshot path",
        "severity": "error",
        "can_retry": False
    },
    "snapshot must be a json object": {
        "message": "The snapshot file has an unexpected layout",
        "suggestion": "Use a snapshot written by pricelens (object with a 'root' node)",
        "severity": "error",
        "can_retry": False
    },
}


def format_error_for_logging(error: Exception, context: str = "") -> str:
    """Format error for structured logging."""
    friendly = format_user_friendly_error(error, context)

    lines = [
        f"❌ {friendly['message']}",
        f"💡 {friendly['suggestion']}",
        f"🔧 Technical: {friendly['technical']}"
    ]

    if context:
        lines.insert(0, f"📍 Context: {context}")

    return "\n".join(lines)
