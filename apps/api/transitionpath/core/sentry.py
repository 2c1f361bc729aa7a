"""Error reporting for the assessment API.

Events never carry credentials or the text of uploaded project documents;
both are masked in ``before_send``.
"""

import structlog
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.httpx import HttpxIntegration

logger = structlog.get_logger()

REDACTED = "[REDACTED]"
_MASKED_HEADERS = frozenset({"authorization", "cookie", "x-api-key"})
_MASKED_BODY_FIELDS = frozenset({"rawDocumentText", "raw_document_text"})


def _mask(mapping: dict, keys: frozenset[str], case_insensitive: bool = False) -> None:
    for key in list(mapping):
        if (key.lower() if case_insensitive else key) in keys:
            mapping[key] = REDACTED


def scrub_event(event: dict, hint: dict) -> dict:
    request = event.get("request", {})
    _mask(request.get("headers", {}), _MASKED_HEADERS, case_insensitive=True)
    body = request.get("data")
    if isinstance(body, dict):
        _mask(body, _MASKED_BODY_FIELDS)
    return event


def init_sentry(
    dsn: str | None,
    environment: str = "development",
    release: str | None = None,
) -> None:
    """Set up Sentry for request and outbound-HTTP tracing.

    Must run before ``FastAPI()`` is constructed. Without a DSN it only logs
    ``sentry_disabled``.
    """
    if not dsn:
        logger.warning("sentry_disabled", reason="SENTRY_DSN not set")
        return

    sample_rate = 0.1 if environment == "production" else 1.0
    sentry_sdk.init(
        dsn=dsn,
        environment=environment,
        release=release,
        traces_sample_rate=sample_rate,
        integrations=[
            FastApiIntegration(transaction_style="endpoint"),
            HttpxIntegration(),
        ],
        send_default_pii=False,
        before_send=scrub_event,
    )
    sentry_sdk.set_tag("service", "transitionpath-api")
    logger.info("sentry_initialized", environment=environment, traces_sample_rate=sample_rate)
