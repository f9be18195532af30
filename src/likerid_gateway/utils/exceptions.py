"""Custom exceptions and error handling utilities."""

import logging
from typing import Optional

import sentry_sdk

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """Base exception for gateway errors."""


class ConfigurationError(GatewayError):
    """Gateway configuration is missing or invalid."""


class ProfileFetchError(GatewayError):
    """Identity API request failed unexpectedly."""


class RequestDecodeError(GatewayError, ValueError):
    """Inbound call data could not be decoded."""


class UnsupportedFunctionError(GatewayError):
    """Inbound call targets a resolver function the gateway does not serve."""


def capture_exception(
    exception: Exception,
    context: Optional[dict] = None,
    level: str = "error",
) -> None:
    """
    Capture exception to Sentry if configured, otherwise log it.

    Args:
        exception: The exception to capture
        context: Additional context to include
        level: Log level ('error', 'warning', 'info')
    """
    # Imported here: config depends on this module for ConfigurationError
    from likerid_gateway.core.config import get_settings

    settings = get_settings()

    # Log locally
    log_func = getattr(logger, level, logger.error)
    log_func("%s: %s", type(exception).__name__, exception, exc_info=exception)

    # Send to Sentry if configured
    if settings.sentry_dsn:
        if context:
            with sentry_sdk.new_scope() as scope:
                for key, value in context.items():
                    scope.set_extra(key, value)
                sentry_sdk.capture_exception(exception)
        else:
            sentry_sdk.capture_exception(exception)
