"""
Error classification.

Upstream failures arrive in heterogeneous shapes: exceptions with a
``name``/``message``, plain mappings, strings, or a message that is itself a
JSON-encoded nodeos error envelope with nested ``error.details[0].message``.
``classify`` maps any of them onto a single ClassifiedError by ordered
pattern match. Each parse step is guarded and collapses to a generic
category; classification never raises.
"""

from __future__ import annotations
import json
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Optional

from .errors import ClassifiedError, ErrorCategory

logger = logging.getLogger(__name__)

ASSERTION_KIND = "AssertionError"
INVALID_ACTOR_MARKER = "permission_level.actor"
INVALID_PUBLIC_KEY = "Invalid public key"

CHAIN_INFO_MESSAGE = "Fail to get Chain Info"
BLOCK_DATA_MESSAGE = "Fail to get Last Irreversible Block Data"
EMPTY_CHAIN_INFO_MESSAGE = "Chain Info response was empty"
EMPTY_BLOCK_DATA_MESSAGE = "Last Irreversible Block response was empty"
PRODUCERS_MESSAGE = "Fail to list Producers"
SIGN_FAILURE_MESSAGE = (
    "Fail to Sign Transaction, please make sure you entered a correct "
    "Private Key and Account Name"
)
KEY_MISMATCH_MESSAGE = "Incorrect Private Key, could not find Matching Public Key"
BROADCAST_FAILURE_MESSAGE = "Fail to Submit Transaction"
ACCOUNT_DOES_NOT_EXIST_MESSAGE = (
    "Entered account name does not exist, please restart the process and make "
    "sure you enter the correct account name for the provided key."
)
UNAUTHORIZED_KEY_MESSAGE = (
    "Provided key has no authorization to sign for account entered. Please "
    "restart the process and make sure you enter the correct key for account entered."
)


class ErrorContext(str, Enum):
    """Pipeline step a failure came from."""

    SIGN = "sign"
    BROADCAST = "broadcast"
    INFO = "info"
    BLOCK = "block"
    PRODUCERS = "producers"


_FALLBACKS = {
    ErrorContext.SIGN: (ErrorCategory.SIGN_FAILURE, SIGN_FAILURE_MESSAGE),
    ErrorContext.BROADCAST: (ErrorCategory.BROADCAST_FAILURE, BROADCAST_FAILURE_MESSAGE),
    ErrorContext.INFO: (ErrorCategory.CHAIN_INFO_UNAVAILABLE, CHAIN_INFO_MESSAGE),
    ErrorContext.BLOCK: (ErrorCategory.BLOCK_DATA_UNAVAILABLE, BLOCK_DATA_MESSAGE),
    ErrorContext.PRODUCERS: (ErrorCategory.PRODUCERS_UNAVAILABLE, PRODUCERS_MESSAGE),
}


def declared_kind(raw: Any) -> Optional[str]:
    """Return the error's declared kind (its ``name``), if it has one."""
    if isinstance(raw, Mapping):
        kind = raw.get("name")
    elif isinstance(raw, AssertionError):
        return ASSERTION_KIND
    else:
        kind = getattr(raw, "name", None)
    return kind if isinstance(kind, str) else None


def error_message(raw: Any) -> Optional[str]:
    """Extract a message string from any error shape, or None."""
    if raw is None:
        return None
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (bytes, bytearray)):
        return bytes(raw).decode("utf-8", errors="replace")
    if isinstance(raw, Mapping):
        message = raw.get("message")
        return message if isinstance(message, str) else None
    message = getattr(raw, "message", None)
    if isinstance(message, str):
        return message
    if isinstance(raw, BaseException):
        return str(raw) or None
    return None


def _offending_account(raw: Any, account: Optional[str]) -> str:
    if account:
        return account
    found = getattr(raw, "account", None)
    return found if isinstance(found, str) else ""


def _parse_envelope(raw: Any, message: str) -> Optional[Mapping]:
    if isinstance(raw, Mapping) and "error" in raw:
        return raw
    try:
        parsed = json.loads(message)
    except (TypeError, ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, Mapping) else None


def _first_detail(envelope: Mapping) -> Optional[str]:
    """Nested ``error.details[0].message``; "" when details exist but carry no message."""
    error = envelope.get("error")
    if not isinstance(error, Mapping):
        return None
    details = error.get("details")
    if not isinstance(details, list) or not details:
        return None
    first = details[0]
    message = first.get("message") if isinstance(first, Mapping) else None
    return message if isinstance(message, str) else ""


def _classify_sign(raw: Any, message: Optional[str], account: Optional[str]) -> ClassifiedError:
    kind = declared_kind(raw)

    if message and INVALID_ACTOR_MARKER in message:
        offending = _offending_account(raw, account)
        return ClassifiedError(
            category=ErrorCategory.INVALID_ACCOUNT_NAME,
            message=f"Invalid account name {offending}".rstrip(),
        )
    if kind == ASSERTION_KIND and message == INVALID_PUBLIC_KEY:
        return ClassifiedError(category=ErrorCategory.KEY_MISMATCH, message=KEY_MISMATCH_MESSAGE)
    if kind == ASSERTION_KIND and message:
        return ClassifiedError(category=ErrorCategory.ASSERTION_FAILURE, message=message)
    return ClassifiedError(category=ErrorCategory.SIGN_FAILURE, message=SIGN_FAILURE_MESSAGE)


def _classify_broadcast(raw: Any, message: Optional[str]) -> ClassifiedError:
    if declared_kind(raw) == ASSERTION_KIND and message:
        return ClassifiedError(category=ErrorCategory.ASSERTION_FAILURE, message=message)
    if not message and not isinstance(raw, Mapping):
        return ClassifiedError(
            category=ErrorCategory.BROADCAST_FAILURE, message=BROADCAST_FAILURE_MESSAGE
        )

    envelope = _parse_envelope(raw, message or "")
    if envelope is None:
        return ClassifiedError(
            category=ErrorCategory.UNKNOWN_BROADCAST_ERROR,
            message=f"{BROADCAST_FAILURE_MESSAGE} - Unknown Reason",
        )

    detail = _first_detail(envelope)
    if detail is not None:
        if "authorizing actor" in detail and "does not exist" in detail:
            return ClassifiedError(
                category=ErrorCategory.ACCOUNT_DOES_NOT_EXIST,
                message=f"{BROADCAST_FAILURE_MESSAGE} - {ACCOUNT_DOES_NOT_EXIST_MESSAGE}",
            )
        if "transaction declares authority" in detail and "does not have signatures" in detail:
            return ClassifiedError(
                category=ErrorCategory.UNAUTHORIZED_KEY,
                message=f"{BROADCAST_FAILURE_MESSAGE} - {UNAUTHORIZED_KEY_MESSAGE}",
            )
        return ClassifiedError(
            category=ErrorCategory.DETAILED_BROADCAST_ERROR,
            message=f"{BROADCAST_FAILURE_MESSAGE} - {detail or 'Unknown Details'}",
        )

    error = envelope.get("error")
    if isinstance(error, Mapping) and "code" in error:
        return ClassifiedError(
            category=ErrorCategory.BROADCAST_ERROR_CODE,
            message=f"{BROADCAST_FAILURE_MESSAGE} - Error Code: {error['code']}",
        )

    return ClassifiedError(
        category=ErrorCategory.UNKNOWN_BROADCAST_ERROR,
        message=f"{BROADCAST_FAILURE_MESSAGE} - Unknown EOS Error",
    )


def classify(raw: Any, context: ErrorContext, account: Optional[str] = None) -> ClassifiedError:
    """
    Map an arbitrary upstream failure to a ClassifiedError.

    Args:
        raw: The failure (exception, mapping, string, or None)
        context: Pipeline step the failure came from
        account: Account name the step was acting for, used in messages

    Returns:
        Exactly one classified error; never raises
    """
    context = ErrorContext(context)
    try:
        message = error_message(raw)
        if context is ErrorContext.SIGN:
            result = _classify_sign(raw, message, account)
        elif context is ErrorContext.BROADCAST:
            result = _classify_broadcast(raw, message)
        else:
            category, fallback = _FALLBACKS[context]
            result = ClassifiedError(category=category, message=fallback)
    except Exception:
        logger.exception("Error shape could not be inspected, using generic %s failure", context.value)
        category, fallback = _FALLBACKS[context]
        result = ClassifiedError(category=category, message=fallback)

    logger.warning("%s failed: %s", context.value, result)
    logger.debug("Raw %s error: %r", context.value, raw)
    return result
