"""
HSR Tools - Shared schema configuration.

Every response and request body uses camelCase field names on the wire
(``releaseOrder``, ``refreshToken``) and snake_case attributes in Python.
"""

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema with camelCase aliases, readable from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class MessageResponse(CamelModel):
    """Plain acknowledgement body."""

    message: str
