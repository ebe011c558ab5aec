# foraldradagar/core/sentry_config.py
"""
Sentry configuration for error tracking in production.

Inkomstuppgifter är känsliga och filtreras bort innan något skickas.
"""

import logging
import os
import re

logger = logging.getLogger(__name__)

#: Nycklar vars värden aldrig får lämna servern.
SENSITIVE_KEYS = (
    "monthly_income",
    "monthly_gross_income",
    "income",
    "daily_rate",
    "daily_vab_rate",
    "monthly_on_leave",
    "monthly_with_top_up",
    "household_income",
)

_SENSITIVE_QUERY = re.compile(r"income|salary|lon", re.IGNORECASE)


def init_sentry() -> bool:
    """
    Initialize Sentry error tracking.

    Returns:
        True if Sentry was initialized successfully, False otherwise.
    """
    is_production = os.getenv("PRODUCTION", "false").lower() == "true"
    sentry_dsn = os.getenv("SENTRY_DSN", "").strip()

    if not is_production:
        logger.info("Sentry disabled in development mode")
        return False

    if not sentry_dsn:
        logger.warning(
            "SENTRY_DSN not set. Error tracking disabled. "
            "Set SENTRY_DSN environment variable to enable Sentry in production."
        )
        return False

    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration
    from sentry_sdk.integrations.logging import LoggingIntegration
    from sentry_sdk.integrations.starlette import StarletteIntegration

    try:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FastApiIntegration(),
                StarletteIntegration(),
                LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
            ],
            traces_sample_rate=0.1,
            sample_rate=1.0,
            release=os.getenv("RELEASE_VERSION", "foraldradagar@0.1.0"),
            environment=os.getenv("SENTRY_ENVIRONMENT", "production"),
            send_default_pii=False,
            attach_stacktrace=True,
            before_send=before_send_hook,
        )
    except Exception as e:
        logger.error(f"Failed to initialize Sentry: {e}", exc_info=True)
        return False

    env = os.getenv("SENTRY_ENVIRONMENT", "production")
    logger.info(f"Sentry initialized successfully (environment: {env})")
    return True


def _scrub(value):
    """Ersätter inkomstfält rekursivt med "[Filtered]"."""
    if isinstance(value, dict):
        return {
            key: "[Filtered]" if isinstance(key, str) and key in SENSITIVE_KEYS else _scrub(item)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [_scrub(item) for item in value]
    return value


def before_send_hook(event, hint):
    """
    Filter sensitive data before sending to Sentry.

    Args:
        event: Sentry event data
        hint: Additional context

    Returns:
        Modified event
    """
    request = event.get("request")
    if request:
        headers = request.get("headers")
        if headers:
            for header in ("cookie", "authorization", "x-api-key"):
                if header in headers:
                    headers[header] = "[Filtered]"

        query = request.get("query_string")
        if query and _SENSITIVE_QUERY.search(query):
            request["query_string"] = "[Filtered]"

        # Request bodies innehåller onboarding-svar med löner
        if "data" in request:
            request["data"] = _scrub(request["data"])

    if "extra" in event:
        event["extra"] = _scrub(event["extra"])

    return event
