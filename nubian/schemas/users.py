"""Session introspection schemas."""

from typing import Literal

from pydantic import BaseModel


class MeResponse(BaseModel):
    """Principal behind the bearer token of the request."""

    id: str
    kind: Literal["user", "admin"]
    email: str | None = None
    name: str | None = None
