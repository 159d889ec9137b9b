"""
Logging utilities for Global Gourmet Scout backend.

Provides standardized logger configuration.

SECURITY RULES:
- NEVER log Gemini, Pexels or Pixabay API keys (raw or obfuscated)
- NEVER log full model responses at INFO level (use DEBUG, truncated)

Acceptable logging:
- High-level events (e.g., "Search started for city='Lisbon'")
- Provider fall-through (e.g., "pexels returned no image")
- Error classes and sanitized error messages
"""

import logging
from typing import Optional


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a configured logger for the specified module.

    Args:
        name: Module name (typically __name__)
        level: Optional logging level (defaults to INFO)

    Returns:
        Configured logger instance

    Usage:
        >>> from scout.utils.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.info("High-level event occurred")
    """
    logger = logging.getLogger(name)

    if level is None:
        level = logging.INFO

    logger.setLevel(level)

    # Add handler if not already configured (avoid duplicate handlers)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    return logger


def mask_secret(value: str, visible: int = 4) -> str:
    """Return a masked preview of a secret, e.g. 'AIza…9xQk' -> '****9xQk'."""
    if not value:
        return ""
    if len(value) <= visible:
        return "*" * len(value)
    return "*" * (len(value) - visible) + value[-visible:]
