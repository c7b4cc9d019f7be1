"""
Models for entries returned by the remote list service.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Student(BaseModel):
    """One entry of the remote list. Assigned and owned by the remote service."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: Union[int, str] = Field(description="Opaque identifier assigned by the remote service")
    name: str = Field(default="", description="Display name; null is read as empty")
    username: Optional[str] = Field(default=None, description="Handle, present in the two-field variant")

    @field_validator("name", mode="before")
    @classmethod
    def null_name_is_empty(cls, v):
        return "" if v is None else v
