"""Type definitions for the Siteline SDK."""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


def _to_camel(name: str) -> str:
    parts = name.split("_")
    return parts[0] + "".join(p.capitalize() for p in parts[1:])


class PageviewData(BaseModel):
    """A single observed page request, as supplied by the caller.

    Values are taken as-is; bounding happens in :func:`siteline.sanitize.sanitize`.
    Both ``user_agent`` and the wire spelling ``userAgent`` are accepted.
    """

    model_config = ConfigDict(alias_generator=_to_camel, populate_by_name=True)

    url: str
    method: str
    status: Union[int, float]
    duration: Union[int, float]  # milliseconds

    user_agent: Optional[str] = None
    ref: Optional[str] = None
    ip: Optional[str] = None


class PageviewPayload(BaseModel):
    """A bounded pageview record, ready to be sent to the intake endpoint."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    url: str
    method: str
    status: int
    duration: Union[int, float]
    user_agent: Optional[str] = Field(None, alias="userAgent")
    ref: Optional[str] = None
    ip: Optional[str] = None

    # SDK identity
    sdk: str
    sdk_version: str
    integration_type: str

    def to_wire(self) -> dict:
        """Return the JSON body sent to the intake endpoint (nulls kept)."""
        return self.model_dump(by_alias=True)
