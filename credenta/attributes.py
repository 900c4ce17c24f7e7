"""Named, typed attributes that users and groups can carry."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any


class AttributeError_(Exception):
    """Raised when an attribute is missing or already present."""


@dataclass
class Attribute:
    """A single attribute: a name, a type label and a string value."""

    name: str
    value_type: str
    value_string: str
    seq: int = 0

    def __str__(self) -> str:
        return f"{self.name} = {self.value_string}({self.value_type})"

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form; ``seq`` is left out when it is zero."""
        data: dict[str, Any] = {"name": self.name}
        if self.seq:
            data["seq"] = self.seq
        data["valueType"] = self.value_type
        data["valueString"] = self.value_string
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Attribute:
        """Build an attribute from its JSON form; missing fields take empty values."""
        return cls(
            name=data.get("name", ""),
            value_type=data.get("valueType", ""),
            value_string=data.get("valueString", ""),
            seq=int(data.get("seq", 0) or 0),
        )


class Attributable(ABC):
    """Interface for objects that hold a set of attributes."""

    @abstractmethod
    def attribute_names(self) -> list[str]:
        """Return the names of the attributes held."""

    @abstractmethod
    def has_attribute(self, name: str) -> bool:
        """Tell whether an attribute with this name is held."""

    @abstractmethod
    def remove_attribute(self, name: str) -> None:
        """Remove the attribute with this name, if any."""

    @abstractmethod
    def remove_all_attributes(self) -> None:
        """Remove every attribute."""

    @abstractmethod
    def get_attribute(self, name: str) -> tuple[str, str]:
        """Return ``(value_type, value_string)``; raise AttributeError_ if missing."""

    @abstractmethod
    def set_attribute(self, name: str, value_type: str, value_string: str) -> None:
        """Store an attribute with the given name, type and string value."""