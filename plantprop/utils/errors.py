"""
Error handling utilities for sanitizing user-facing messages and logging.

Provides consistent error handling across the application:
- Sanitizes error messages to prevent information leakage
- Degrades failed lookups to safe defaults with a user-facing notice
- Logs detailed error information for debugging
"""

from __future__ import annotations
from typing import Any, Optional, Tuple
from flask import current_app

from plantprop.services.results import LookupResult

# User-friendly generic error messages
GENERIC_MESSAGES = {
    "server": "We're experiencing technical difficulties. Please try again.",
    "validation": "The information provided is invalid. Please check and try again.",
    "plant_data": "Plant data is temporarily unavailable. Please try again shortly.",
    "not_found": "The requested item was not found.",
    "network": "Network error occurred. Please check your connection and try again.",
}


def sanitize_error(
    error: Exception,
    error_type: str = "server",
    log_prefix: str = ""
) -> str:
    """
    Sanitize error message for user display and log full details.

    Args:
        error: The exception that occurred
        error_type: Type of error (server, validation, plant_data, not_found, network)
        log_prefix: Optional prefix for log message context

    Returns:
        User-friendly error message

    Examples:
        >>> try:
        ...     store.create_request(payload)
        ... except Exception as e:
        ...     user_msg = sanitize_error(e, "server", "Failed to save request")
        ...     flash(user_msg, "error")
    """
    error_message = str(error)
    log_message = f"{log_prefix}: {error_message}" if log_prefix else error_message

    if error_type in ["validation", "not_found"]:
        # These are expected errors (user mistakes), log as info
        current_app.logger.info(f"Expected error - {log_message}")
    else:
        current_app.logger.error(f"Unexpected error - {log_message}", exc_info=True)

    return GENERIC_MESSAGES.get(error_type, GENERIC_MESSAGES["server"])


def unwrap_lookup(
    result: LookupResult,
    default: Any,
    context: str = "Plant lookup"
) -> Tuple[Any, Optional[str]]:
    """
    Turn a LookupResult into (value, notice) for templates and JSON.

    Empty results give (default, None). Failed results are logged and give
    (default, GENERIC_MESSAGES["plant_data"]) so the page can say the data is
    unavailable instead of "no matches".

    Examples:
        >>> plants, notice = unwrap_lookup(store.search_plants(q), [])
        >>> if notice:
        ...     flash(notice, "warning")
    """
    if result.is_failed:
        current_app.logger.error(f"{context} failed: {result.error}")
        return default, GENERIC_MESSAGES["plant_data"]
    return result.value_or(default), None


def log_info(message: str, **context) -> None:
    """
    Log an info message with optional context.

    Examples:
        >>> log_info("Request created", plant_id="snake-plant", zone="9a")
    """
    if context:
        context_str = ", ".join(f"{k}={v}" for k, v in context.items())
        message = f"{message} | Context: {context_str}"

    current_app.logger.info(message)
