from __future__ import annotations

import threading
from typing import Iterable, Optional

from docsgen.domain.models import Endpoint, Response


class EndpointRegistry:
    """In-memory store of endpoints keyed by ``"METHOD path"``.

    Shared between the annotation parser (static inserts) and the capture
    middleware (response appends). One lock guards every read-modify-write,
    so concurrent appends to the same endpoint never lose samples.

    Re-registering an existing key replaces the static fields and keeps the
    responses collected so far.
    """

    def __init__(self, endpoints: Iterable[Endpoint] = ()) -> None:
        self._lock = threading.Lock()
        self._endpoints: dict[str, Endpoint] = {}
        self.load(endpoints)

    def load(self, endpoints: Iterable[Endpoint]) -> None:
        for e in endpoints:
            self.upsert_static(e)

    def upsert_static(self, endpoint: Endpoint) -> None:
        key = endpoint.key
        with self._lock:
            prev = self._endpoints.get(key)
            kept = list(prev.responses) if prev is not None else []
            self._endpoints[key] = endpoint.model_copy(
                update={"responses": kept + list(endpoint.responses)}, deep=True
            )

    def get(self, key: str) -> Optional[Endpoint]:
        with self._lock:
            e = self._endpoints.get(key)
            return e.model_copy(deep=True) if e is not None else None

    def append_response(self, key: str, response: Response) -> bool:
        with self._lock:
            e = self._endpoints.get(key)
            if e is None:
                return False
            # write back a new record; earlier snapshots stay untouched
            self._endpoints[key] = e.model_copy(update={"responses": [*e.responses, response]})
            return True

    def snapshot(self) -> dict[str, Endpoint]:
        with self._lock:
            return {k: e.model_copy(deep=True) for k, e in self._endpoints.items()}

    def keys(self) -> list[str]:
        with self._lock:
            return list(self._endpoints)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._endpoints

    def __len__(self) -> int:
        with self._lock:
            return len(self._endpoints)
