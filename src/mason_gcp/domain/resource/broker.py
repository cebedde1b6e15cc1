"""Broker-side records: leased resources and their user data."""

from __future__ import annotations

from typing import Any, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class UserData(dict):
    """Key to YAML-encoded value map attached to a broker resource.

    Values are stored serialized so the whole map can be persisted by the
    broker as plain strings; ``extract`` reverses ``set``.
    """

    def set(self, key: str, value: Any) -> None:
        if hasattr(value, "to_dict"):
            value = value.to_dict()
        elif isinstance(value, BaseModel):
            value = value.model_dump(mode="json")
        self[key] = yaml.safe_dump(value, default_flow_style=False)

    def extract(self, key: str) -> Any:
        if key not in self:
            raise KeyError(f"user data has no key {key}")
        return yaml.safe_load(self[key])

    def update_from(self, other: Optional[dict[str, str]]) -> None:
        """Merge another user data map; empty values delete the key."""
        for key, value in (other or {}).items():
            if value:
                self[key] = value
            else:
                self.pop(key, None)


class Resource(BaseModel):
    """A resource tracked by the broker; for this engine, a GCP project."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    name: str
    type: str
    state: str = "free"
    owner: str = ""
    user_data: UserData = Field(default_factory=UserData)

    @field_validator("user_data", mode="before")
    @classmethod
    def _wrap_user_data(cls, value: Any) -> UserData:
        if value is None:
            return UserData()
        if isinstance(value, UserData):
            return value
        return UserData(value)


TypeToResources = dict[str, list[Resource]]
