"""Validation of the fixed address match_client classification."""

import structlog

from ..constants import MATCH_CLIENT_VALUES
from ..utils.exceptions import MatchClientValidationError

logger = structlog.get_logger(__name__)


def is_valid_match_client(value: str) -> bool:
    """Return True only for the exact, case-sensitive match_client literals."""
    return value in MATCH_CLIENT_VALUES


def validate_match_client(value: str) -> str:
    """
    Return value unchanged if it is a valid match_client classification.

    Raises:
        MatchClientValidationError: If value is not one of MATCH_CLIENT_VALUES
    """
    if not is_valid_match_client(value):
        logger.warning(
            "Rejected match_client value",
            value=value,
            allowed=sorted(MATCH_CLIENT_VALUES),
        )
        raise MatchClientValidationError(value)
    return value
