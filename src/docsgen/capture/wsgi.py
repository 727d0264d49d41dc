from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Iterator

from docsgen.capture.core import is_documented, record_sample
from docsgen.registry import EndpointRegistry

logger = logging.getLogger(__name__)

WSGIApp = Callable[[dict, Callable[..., Any]], Iterable[bytes]]


def request_path(environ: dict) -> str:
    # full path as the client sent it, including the mount prefix
    return environ.get("SCRIPT_NAME", "") + environ.get("PATH_INFO", "")


def capture_wsgi(app: WSGIApp, registry: EndpointRegistry) -> WSGIApp:
    """Wrap a WSGI app (or a single view) so its JSON responses are recorded."""

    def wrapped(environ: dict, start_response: Callable[..., Any]) -> Iterable[bytes]:
        method = environ.get("REQUEST_METHOD", "GET")
        path = request_path(environ)
        if not is_documented(registry, method, path):
            # undocumented routes stream through without buffering
            return app(environ, start_response)
        return _capture(app, registry, environ, start_response, method, path)

    return wrapped


def _capture(
    app: WSGIApp,
    registry: EndpointRegistry,
    environ: dict,
    start_response: Callable[..., Any],
    method: str,
    path: str,
) -> Iterator[bytes]:
    status = {"code": 200}
    chunks: list[bytes] = []

    def start_wrapper(status_line: str, headers: list, exc_info: Any = None):
        status["code"] = int(status_line.split(None, 1)[0])
        write = start_response(status_line, headers, exc_info)

        def write_wrapper(data: bytes) -> None:
            chunks.append(data)
            write(data)

        return write_wrapper

    result = app(environ, start_wrapper)
    try:
        for chunk in result:
            chunks.append(chunk)
            yield chunk
    finally:
        close = getattr(result, "close", None)
        if close is not None:
            close()

    try:
        record_sample(registry, method, path, status["code"], b"".join(chunks))
    except Exception:
        logger.exception("capture failed for %s %s", method, path)
