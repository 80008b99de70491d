"""Configuration management for the budget planner.

This module centralizes the API endpoint, retry settings and display
constants, with environment variable overrides.
"""

from __future__ import annotations

import logging
import os

from .retry import RetryPolicy

# Remote budgeting API
API_BASE_URL = os.getenv(
    "WEALTHSYNC_API_URL", "https://wealthsync-backend.onrender.com"
).rstrip("/")
BUDGET_ENDPOINT = "/api/budget"
HISTORY_ENDPOINT = "/api/budget/history"

# Retry and timeout settings
MAX_ATTEMPTS = int(os.getenv("WEALTHSYNC_MAX_ATTEMPTS", "3"))
RETRY_DELAY_MS = int(os.getenv("WEALTHSYNC_RETRY_DELAY_MS", "2000"))
REQUEST_TIMEOUT_SECONDS = float(os.getenv("WEALTHSYNC_TIMEOUT_SECONDS", "30"))

LOG_LEVEL = os.getenv("WEALTHSYNC_LOG_LEVEL", "INFO").upper()

# Display
CURRENCY_SYMBOL = "₹"
INFLATION_REGION = "India"


def get_retry_policy() -> RetryPolicy:
    """Build the retry policy from the configured attempts and delay."""
    return RetryPolicy(max_attempts=MAX_ATTEMPTS, delay_ms=RETRY_DELAY_MS)


def configure_logging() -> None:
    """Apply ``WEALTHSYNC_LOG_LEVEL`` to the root logger once per process."""
    root = logging.getLogger()
    if root.handlers:
        root.setLevel(LOG_LEVEL)
        return
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
