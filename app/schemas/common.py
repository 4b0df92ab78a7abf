"""
Shared pydantic configuration for the JSON API.

The API speaks camelCase; Python code uses snake_case attributes and dumps
with by_alias=True before handing data to the CRUD layer.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Response model: camelCase on the wire."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class ApiRequest(ApiModel):
    """Request body: camelCase on the wire, unknown keys rejected."""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        extra = "forbid"

    def to_data(self) -> dict:
        """Fields the client actually sent, keyed by their API names."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class DeletedResponse(BaseModel):
    deleted: str
