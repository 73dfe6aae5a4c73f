"""Request bodies for the gateway."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from genuniqueid.privacy import PROXY_IDP_KEY


class RequestState(BaseModel):
    """One subject's state as the identity host holds it.

    Keys other than the ones below are kept and handed back untouched.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    attributes: dict[str, list[str]] = Field(alias="Attributes")
    source: dict[str, Any] | None = Field(default=None, alias="Source")
    upstream_idp: str | None = Field(default=None, alias=PROXY_IDP_KEY)

    def to_state(self) -> dict[str, Any]:
        """Plain dict in the host's own key spelling, for the filter."""
        state = dict(self.model_extra or {})
        state["Attributes"] = self.attributes
        if self.source is not None:
            state["Source"] = self.source
        if self.upstream_idp is not None:
            state[PROXY_IDP_KEY] = self.upstream_idp
        return state
