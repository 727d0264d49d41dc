import logging

from docsgen.capture.core import is_documented, record_sample
from docsgen.domain.models import Endpoint
from docsgen.registry import EndpointRegistry


def _registry() -> EndpointRegistry:
    return EndpointRegistry([Endpoint(handler="list_users", method="GET", path="/users")])


def test_captured_shape_is_logged_lazily_at_debug(caplog):
    reg = _registry()

    with caplog.at_level(logging.INFO, logger="docsgen.capture.core"):
        assert record_sample(reg, "GET", "/users", 200, b'{"name": "Jay"}')
    assert caplog.records == []

    with caplog.at_level(logging.DEBUG, logger="docsgen.capture.core"):
        assert record_sample(reg, "GET", "/users", 200, b'{"name": "Jay"}')
    (rec,) = [r for r in caplog.records if r.getMessage().startswith("captured")]
    assert rec.args[2] == {"name": ""}
    assert "Jay" not in rec.getMessage()


def test_is_documented_uses_exact_key():
    reg = _registry()
    assert is_documented(reg, "GET", "/users")
    assert not is_documented(reg, "get", "/users")
    assert not is_documented(reg, "GET", "/users/")
