"""
Logging helpers shared by routers and services.
"""

import logging
from typing import Any, Dict

SENSITIVE_FIELDS = {
    'password', 'token', 'secret', 'api_key', 'cvv', 'exp_date', 'expdate'
}
CARD_FIELDS = {'card_number', 'cardnumber'}


def get_logger(name: str) -> logging.Logger:
    """
    Usage:
        from utils.logger import get_logger
        logger = get_logger(__name__)
    """
    return logging.getLogger(name)


def mask_card_number(value: str) -> str:
    digits = value.strip()
    if len(digits) <= 4:
        return "****"
    return "*" * (len(digits) - 4) + digits[-4:]


def sanitize_log_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Return a copy of data that is safe to log.

    Passwords, secrets, CVVs and expiry dates are redacted, tokens keep their
    first 8 characters, card numbers keep their last 4 digits. Nested dicts
    and lists of dicts (e.g. cart lines) are sanitized recursively.
    """
    sanitized = data.copy()

    for key, value in sanitized.items():
        lowered = key.lower()

        if lowered in CARD_FIELDS:
            if isinstance(value, str):
                sanitized[key] = mask_card_number(value)

        elif any(sensitive in lowered for sensitive in SENSITIVE_FIELDS):
            if isinstance(value, str):
                if 'token' in lowered and len(value) > 8:
                    sanitized[key] = f"{value[:8]}..."
                else:
                    sanitized[key] = "***REDACTED***"

        elif isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)

        elif isinstance(value, list):
            sanitized[key] = [
                sanitize_log_data(item) if isinstance(item, dict) else item
                for item in value
            ]

    return sanitized
