#!/usr/bin/env python3
from dataclasses import dataclass
import os
from dotenv import load_dotenv

load_dotenv()


def _flag(name: str, default: str) -> bool:
    return os.getenv(name, default).lower() in ["true", "1", "yes"]


@dataclass
class Config:
    """Application configuration"""
    headless: bool = _flag("PRICELENS_HEADLESS", "true")
    navigation_timeout_ms: int = int(os.getenv("PRICELENS_NAV_TIMEOUT_MS", "30000"))
    settle_ms: int = int(os.getenv("PRICELENS_SETTLE_MS", "1000"))
    report_filename: str = os.getenv("PRICELENS_REPORT_FILE", "detected-products.txt")

    # Re-running a pass skips cards highlighted by a previous pass
    skip_highlighted: bool = _flag("PRICELENS_SKIP_HIGHLIGHTED", "false")
    highlight: bool = _flag("PRICELENS_HIGHLIGHT", "true")
    notification_ms: int = int(os.getenv("PRICELENS_NOTIFICATION_MS", "3000"))

    # Price candidate scanning
    max_price_text_length: int = int(os.getenv("PRICELENS_MAX_PRICE_TEXT", "50"))
    review_climb_depth: int = int(os.getenv("PRICELENS_REVIEW_CLIMB_DEPTH", "6"))

    # Container climbing (px bounds are inclusive)
    max_climb_depth: int = int(os.getenv("PRICELENS_MAX_CLIMB_DEPTH", "10"))
    container_min_width: int = int(os.getenv("PRICELENS_CONTAINER_MIN_WIDTH", "100"))
    container_max_width: int = int(os.getenv("PRICELENS_CONTAINER_MAX_WIDTH", "1000"))
    container_min_height: int = int(os.getenv("PRICELENS_CONTAINER_MIN_HEIGHT", "100"))
    container_max_height: int = int(os.getenv("PRICELENS_CONTAINER_MAX_HEIGHT", "1500"))

    # Image selection (rendered size must exceed the floor)
    image_min_size: int = int(os.getenv("PRICELENS_IMAGE_MIN_SIZE", "60"))
    image_min_natural_size: int = int(os.getenv("PRICELENS_IMAGE_MIN_NATURAL_SIZE", "50"))

    # Title selection (inclusive)
    title_min_length: int = int(os.getenv("PRICELENS_TITLE_MIN_LENGTH", "5"))
    title_max_length: int = int(os.getenv("PRICELENS_TITLE_MAX_LENGTH", "200"))

    def container_fits(self, width: float, height: float) -> bool:
        return (
            self.container_min_width <= width <= self.container_max_width
            and self.container_min_height <= height <= self.container_max_height
        )


config = Config()
