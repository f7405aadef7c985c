"""Optional Sentry error tracking.

Farmer utterances never leave the process through Sentry: request bodies
are not attached and the ``utterance`` field is scrubbed from any event
extras before sending.
"""

import logging

from krishi_sakhi.core.config import settings

logger = logging.getLogger(__name__)

_SCRUBBED = "[scrubbed]"


def scrub_event(event: dict, hint: dict) -> dict:
    """``before_send`` hook: blank any utterance carried in the event."""
    request = event.get("request")
    if isinstance(request, dict) and "data" in request:
        request["data"] = _SCRUBBED
    extra = event.get("extra")
    if isinstance(extra, dict) and "utterance" in extra:
        extra["utterance"] = _SCRUBBED
    return event


def init_sentry() -> bool:
    """Initialize Sentry when SENTRY_DSN is set. Returns whether it was initialized."""
    if not settings.sentry_dsn:
        logger.debug("SENTRY_DSN not set; error tracking disabled")
        return False

    import sentry_sdk
    from sentry_sdk.integrations.fastapi import FastApiIntegration

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.app_env,
        traces_sample_rate=0.1 if settings.app_env == "production" else 1.0,
        send_default_pii=False,
        max_request_body_size="never",
        before_send=scrub_event,
        integrations=[FastApiIntegration(transaction_style="endpoint")],
    )
    sentry_sdk.set_tag("gemini_models", settings.gemini_models)
    logger.info("Sentry initialized (env=%s)", settings.app_env)
    return True
