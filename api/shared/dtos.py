"""Shared DTOs for the Assistant API."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel


class BaseDTO(BaseModel):
    """Base DTO: reads ORM attributes, ISO timestamps on the wire."""

    class Config:
        from_attributes = True
        json_encoders = {
            datetime: lambda v: v.isoformat(),
            UUID: lambda v: str(v),
        }
