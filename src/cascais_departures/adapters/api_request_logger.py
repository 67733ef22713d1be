"""Debug logging of outbound upstream requests.

Enabled with CASCAIS_LOG_REQUESTS=true. Credential headers of the timetable
API gateway never reach the log.
"""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

REQUEST_LOG_ENV = "CASCAIS_LOG_REQUESTS"
REDACTED = "***REDACTED***"
CREDENTIAL_HEADERS = frozenset(
    {"authorization", "cookie", "x-api-key", "x-cp-connect-id", "x-cp-connect-secret"}
)


def request_logging_enabled() -> bool:
    return os.getenv(REQUEST_LOG_ENV, "").lower() == "true"


def redact_headers(headers: dict[str, str]) -> dict[str, str]:
    """Copy of headers with credential values replaced, matched case-insensitively."""
    return {
        name: REDACTED if name.lower() in CREDENTIAL_HEADERS else value
        for name, value in headers.items()
    }


def log_api_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    payload: Any = None,
) -> None:
    """Log one outbound request on a single line when request logging is enabled."""
    if not request_logging_enabled():
        return

    line = f"Upstream request: {method} {url}"
    if headers:
        line += f" headers={json.dumps(redact_headers(headers), sort_keys=True)}"
    if payload is not None:
        line += f" payload={json.dumps(payload, sort_keys=True, default=str)}"
    logger.info(line)
