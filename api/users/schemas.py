"""
Users API schemas (request models).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class UserPayload(BaseModel):
    # Any JSON value is accepted; the service only checks that each field is truthy.
    model_config = ConfigDict(extra="ignore")

    name: Any = None
    email: Any = None
