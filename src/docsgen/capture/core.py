from __future__ import annotations

import logging

from docsgen.domain.models import Response, endpoint_key
from docsgen.redact import MISSING, redact_body
from docsgen.registry import EndpointRegistry

logger = logging.getLogger(__name__)


def is_documented(registry: EndpointRegistry, method: str, path: str) -> bool:
    """True when METHOD + path has an endpoint worth capturing for."""
    return endpoint_key(method, path) in registry


def record_sample(
    registry: EndpointRegistry,
    method: str,
    path: str,
    status_code: int,
    body: bytes | None,
) -> bool:
    """
    Redact a captured response body and append it to the matching endpoint.

    Returns False, without raising, when there is nothing to record:
    empty body, body that is not JSON, or no endpoint registered for
    METHOD + path.
    """
    shape = redact_body(body)
    if shape is MISSING:
        logger.debug("capture skipped %s %s: empty or non-JSON body", method, path)
        return False

    key = endpoint_key(method, path)
    if not registry.append_response(key, Response(body=shape, status_code=status_code)):
        logger.debug("capture skipped %s: no documented endpoint", key)
        return False

    logger.debug("captured %s %s %r", key, status_code, shape)
    return True
