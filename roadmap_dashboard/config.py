# roadmap_dashboard/config.py

from typing import List, Optional, TextIO
from pathlib import Path
import logging
import sys

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv
from pythonjsonlogger.json import JsonFormatter

load_dotenv()

# Custom JSON formatter that excludes null/None fields
class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter that only includes fields with non-None values."""

    def add_fields(self, log_record, record, message_dict):
        """Override to filter out None values before adding to JSON output."""
        super().add_fields(log_record, record, message_dict)

        # Remove keys with None values
        log_record_copy = dict(log_record)
        for key, value in log_record_copy.items():
            if value is None:
                del log_record[key]

def setup_json_logging(log_level: int = logging.INFO, stream: Optional[TextIO] = None) -> None:
    """Initialize JSON logging configuration for the application."""
    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)

    # JSON formatter with common fields used across the store and timeline code
    formatter = CustomJsonFormatter(
        "%(asctime)s %(levelname)s %(name)s %(message)s "
        "%(capability_id)s %(plan_id)s %(milestone_id)s %(version)s "
        "%(count)s %(total)s %(removed)s %(reason)s %(storage_key)s"
    )

    handler.setFormatter(formatter)

    root_logger = logging.getLogger("roadmap_dashboard")
    root_logger.setLevel(log_level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers = []

    root_logger.addHandler(handler)

    # Prevent propagation to avoid duplicate logs
    root_logger.propagate = False


BASE_DIR = Path(__file__).resolve().parent.parent  # project root folder


class Settings(BaseSettings):
    # App
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    # Local storage (SQLite file by default; any SQLAlchemy URL works)
    DATABASE_URL: str = f"sqlite:///{BASE_DIR / 'roadmap_dashboard.db'}"
    STORAGE_KEY: str = "projectManagerData"

    # Timeline rendering
    TIMELINE_MONTH_WIDTH: int = 120  # pixels per month column
    TIMELINE_ROW_HEIGHT: int = 48
    TIMELINE_MONTHS_BEFORE: int = 1  # default view starts one month back
    TIMELINE_MONTHS_AFTER: int = 11
    TIMELINE_PADDING_MONTHS: int = 1  # padding around plan dates in the full scroll range

    # Plan store
    # Raise PlanIntegrityError when a capability has more than one active plan;
    # when off, the violation is only logged and no plan is returned.
    STRICT_ACTIVE_PLAN_CHECK: bool = True

    # Day offsets from "today" used to pre-fill a new plan form:
    # req start/end, design start/end, dev start/end, cst start/end, uat start/end
    PLAN_DEFAULT_PHASE_OFFSETS: List[int] = [0, 14, 15, 35, 36, 92, 93, 121, 122, 150]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore",
    )

    @field_validator("TIMELINE_MONTH_WIDTH", "TIMELINE_ROW_HEIGHT")
    @classmethod
    def validate_positive_size(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("Timeline sizes must be positive pixel values.")
        return v

    @field_validator("PLAN_DEFAULT_PHASE_OFFSETS")
    @classmethod
    def validate_phase_offsets(cls, v: List[int]) -> List[int]:
        if len(v) != 10:
            raise ValueError(
                "PLAN_DEFAULT_PHASE_OFFSETS must list 10 day offsets (start/end for each of the 5 phases)."
            )
        return v


settings = Settings()
