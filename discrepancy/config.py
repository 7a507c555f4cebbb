"""
Configuration management for the discrepancy checker.

Centralizes environment variable loading and scan settings.
"""

import os
import logging

from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _split_list(value: str) -> list[str]:
    """Split a comma-separated environment value into trimmed entries."""
    return [item.strip() for item in value.split(",") if item.strip()]


class Config:
    """Application configuration."""

    # Corpus selection
    TEXT_EXTENSIONS: list[str] = _split_list(
        os.getenv("TEXT_EXTENSIONS", ".html,.json,.md,.yml,.yaml,.txt")
    )
    RICH_DOCUMENT_EXTENSIONS: list[str] = _split_list(
        os.getenv("RICH_DOCUMENT_EXTENSIONS", ".pdf,.xlsx,.xls")
    )
    IGNORE_NAMES: list[str] = _split_list(
        os.getenv("IGNORE_NAMES", ".git,node_modules,scripts,fonts,docs/assets")
    )
    MAX_FILE_MB: float = float(os.getenv("MAX_FILE_MB", "2"))

    # Extraction Settings
    MIN_MONETARY_KEY_LENGTH: int = int(os.getenv("MIN_MONETARY_KEY_LENGTH", "12"))
    MIN_COUNT_KEY_LENGTH: int = int(os.getenv("MIN_COUNT_KEY_LENGTH", "5"))

    # Grouping
    SIMILARITY_THRESHOLD: float = float(os.getenv("SIMILARITY_THRESHOLD", "0.5"))

    # Output
    REPORT_PATH: str = os.getenv("REPORT_PATH", "discrepancy-report.md")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def max_document_bytes(cls) -> int:
        """Size cap for a single document, in bytes."""
        return int(cls.MAX_FILE_MB * 1024 * 1024)

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration and return any issues.

        Returns:
            List of validation error messages (empty if valid)
        """
        issues = []

        if cls.MAX_FILE_MB <= 0:
            issues.append("MAX_FILE_MB must be positive")

        if not 0 < cls.SIMILARITY_THRESHOLD <= 1:
            issues.append("SIMILARITY_THRESHOLD must be in (0, 1]")

        if not cls.TEXT_EXTENSIONS:
            issues.append("TEXT_EXTENSIONS is empty")

        return issues

    @classmethod
    def is_valid(cls) -> bool:
        """Check if configuration is valid for operation."""
        return len(cls.validate()) == 0

    @classmethod
    def setup_logging(cls, level: str | None = None):
        """
        Configure application logging.

        Args:
            level: Optional override for log level
        """
        log_level = level or cls.LOG_LEVEL

        logging.basicConfig(
            level=getattr(logging, log_level.upper(), logging.INFO),
            format=cls.LOG_FORMAT,
        )

        # PDF and spreadsheet readers are chatty at DEBUG
        logging.getLogger("fitz").setLevel(logging.WARNING)
        logging.getLogger("openpyxl").setLevel(logging.WARNING)


# Singleton config instance
config = Config()


def get_config() -> Config:
    """Get the configuration instance."""
    return config
