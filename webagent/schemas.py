"""Request and response value types for the web user agent."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

CREDENTIAL_FIELDS = ("location", "realm", "user", "password")


class Credentials(BaseModel):
    """Challenge credentials; only usable when all four fields are set."""

    model_config = ConfigDict(populate_by_name=True, frozen=True, coerce_numbers_to_str=True)

    location: Optional[str] = Field(None, alias="Location", description="host:port")
    realm: Optional[str] = Field(None, alias="Realm")
    user: Optional[str] = Field(None, alias="User")
    password: Optional[str] = Field(None, alias="Password")

    @property
    def is_complete(self) -> bool:
        return all(getattr(self, name) is not None for name in CREDENTIAL_FIELDS)


class RequestSpec(BaseModel):
    """Everything one outbound request needs.

    Field aliases accept the capitalized parameter names (``URL``, ``Type``,
    ``Data``, ``Header``, ``Credentials``, ``Proxy``, ``Return``, ``NoLog``)
    so callers can validate a plain mapping.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    url: str = Field(..., alias="URL")
    method: str = Field("GET", alias="Type")
    data: Any = Field(None, alias="Data")
    headers: Optional[Dict[str, Any]] = Field(None, alias="Header")
    credentials: Optional[Credentials] = Field(None, alias="Credentials")
    proxy: Optional[str] = Field(None, alias="Proxy")
    return_mode: Optional[str] = Field(None, alias="Return")
    no_log: bool = Field(False, alias="NoLog")

    @field_validator("method", mode="before")
    @classmethod
    def _default_method(cls, value: Any) -> Any:
        return value or "GET"

    @field_validator("credentials")
    @classmethod
    def _drop_incomplete_credentials(
        cls, value: Optional[Credentials]
    ) -> Optional[Credentials]:
        if value is not None and not value.is_complete:
            missing = [name for name in CREDENTIAL_FIELDS if getattr(value, name) is None]
            logger.debug("Ignoring credentials without %s", ", ".join(missing))
            return None
        return value


class ResponseResult(BaseModel):
    """Outcome of a request.

    ``status`` is the HTTP status line, or the integer ``0`` when the request
    was rejected locally before reaching the network. ``content`` is only set
    on success.
    """

    model_config = ConfigDict(frozen=True)

    status: Union[str, int]
    content: Optional[str] = None

    @property
    def ok(self) -> bool:
        return isinstance(self.status, str) and self.status.startswith("2")

    def as_dict(self) -> Dict[str, Any]:
        """Return the ``{"Status": ..., "Content": ...}`` shape."""

        result: Dict[str, Any] = {"Status": self.status}
        if self.content is not None:
            result["Content"] = self.content
        return result


__all__ = ["Credentials", "RequestSpec", "ResponseResult"]
