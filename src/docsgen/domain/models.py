from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


def endpoint_key(method: str, path: str) -> str:
    # exact case, no normalization: "GET /users"
    return f"{method} {path}"


class Parameter(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    required: bool = False


class Response(BaseModel):
    """One observed, value-redacted sample of an endpoint's output."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    body: Any = None
    status_code: int = Field(200, alias="statusCode")


class Endpoint(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    description: str = ""
    handler: str = ""
    method: str = ""
    path: str = ""
    response_type_name: str = Field("", alias="response")

    parameters: list[Parameter] = Field(default_factory=list)
    responses: list[Response] = Field(default_factory=list)

    @property
    def key(self) -> str:
        return endpoint_key(self.method, self.path)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
