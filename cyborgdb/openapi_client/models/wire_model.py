"""Base class shared by every request/response model of the REST API."""

import json
import pprint
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict


class WireModel(BaseModel):
    """
    Pydantic model with the openapi-generator helper surface.

    Python attribute names are snake_case. Each model declares the wire name
    of a field with ``Field(alias=...)``; the aliases are the only place the
    field-name to wire-name mapping lives. ``populate_by_name`` lets the
    legacy snake_case wire keys populate the same fields when deserializing.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        protected_namespaces=(),
    )

    def to_str(self) -> str:
        """Returns the string representation of the model using alias"""
        return pprint.pformat(self.model_dump(by_alias=True))

    def to_json(self) -> str:
        """Returns the JSON representation of the model using alias"""
        return json.dumps(self.to_dict())

    def to_dict(self) -> Dict[str, Any]:
        """Return the wire dictionary; unset optional fields are omitted."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_json(cls, json_str: str) -> Optional["WireModel"]:
        """Create an instance of the model from a JSON string"""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def from_dict(cls, obj: Optional[Dict[str, Any]]) -> Optional["WireModel"]:
        """Create an instance of the model from a wire dictionary"""
        if obj is None:
            return None
        return cls.model_validate(obj)
