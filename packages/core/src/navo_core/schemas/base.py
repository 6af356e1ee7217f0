"""Base model for payloads exchanged with the web client."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Snake-case attributes, camelCase on the wire.

    Accepts either spelling on input so cached payloads and Python callers
    can both build instances.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_wire(self) -> dict:
        """Serialise with camelCase keys, dropping absent optionals."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
