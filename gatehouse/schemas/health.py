"""Response schema for GET /health."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Liveness of the site and whether the users/sessions database answers."""

    status: Literal["ok"] = Field(default="ok", description="Always 'ok' when the app can respond")
    environment: Literal["dev", "prod"] = Field(description="APP_ENV the site runs under")
    database: Literal["connected", "disconnected"] = Field(
        description="Result of a SELECT 1 against DATABASE_URL",
    )
