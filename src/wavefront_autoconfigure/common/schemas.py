"""Wire models exchanged with the Wavefront account provisioning API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AccountInfo(BaseModel):
    """Account negotiated for the running application.

    Only the token outlives the process (it is written to the local token
    file). The login URL is a one-time link relative to the cluster URI.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    api_token: Optional[str] = Field(default=None, alias="token")
    login_url: Optional[str] = Field(default=None, alias="url")
