"""Users persisted as JSON files."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, TypeVar

from .attributes import Attributable, Attribute, AttributeError_
from .bits import is_bit_on, role_position, set_bit_off, set_bit_on
from .group import _ZERO_TIME, _dump_json, _format_time, _now, _parse_time, _read_json
from .hashing import VerificationMethod


class IdType(str, Enum):
    """The kind of identifier a user logs in with."""

    USER_ID = "USERID"
    EMAIL = "EMAIL"
    PHONE_NO = "PHONENO"


_E = TypeVar("_E", bound=Enum)


def _enum_or_raw(enum_cls: type[_E], value: str) -> _E | str:
    try:
        return enum_cls(value)
    except ValueError:
        return value


def _text(value: Enum | str) -> str:
    return value.value if isinstance(value, Enum) else value


@dataclass
class User(Attributable):
    """A user in a realm, with credentials, group memberships, role masks and attributes."""

    realm: str = ""
    user_id: str = ""
    id_type: IdType | str = ""
    groups: list[str] = field(default_factory=list)
    attributes: dict[str, Attribute] = field(default_factory=dict)
    role_masks: list[int] = field(default_factory=list)
    verification_method: VerificationMethod | str = ""
    verification_hash: str = ""
    enable: bool = False
    active: bool = False
    created_at: datetime = _ZERO_TIME
    created_by: str = ""
    updated_at: datetime = _ZERO_TIME
    updated_by: str = ""
    file_path: str = ""

    def __str__(self) -> str:
        return _dump_json(self.to_dict())

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form; empty groups are left out."""
        data: dict[str, Any] = {
            "realm": self.realm,
            "id": self.user_id,
            "idType": _text(self.id_type),
        }
        if self.groups:
            data["groups"] = list(self.groups)
        data["attributes"] = {key: self.attributes[key].to_dict() for key in sorted(self.attributes)}
        data["roleMasks"] = list(self.role_masks)
        data["method"] = _text(self.verification_method)
        data["hash"] = self.verification_hash
        data["enable"] = self.enable
        data["active"] = self.active
        data["createdAt"] = _format_time(self.created_at)
        data["createdBy"] = self.created_by
        data["updatedAt"] = _format_time(self.updated_at)
        data["updatedBy"] = self.updated_by
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], file_path: str = "") -> User:
        """Build a user from its JSON form."""
        return cls(
            realm=data.get("realm") or "",
            user_id=data.get("id") or "",
            id_type=_enum_or_raw(IdType, data.get("idType") or ""),
            groups=list(data.get("groups") or []),
            attributes={
                key: Attribute.from_dict(value)
                for key, value in (data.get("attributes") or {}).items()
            },
            role_masks=[int(mask) for mask in data.get("roleMasks") or []],
            verification_method=_enum_or_raw(VerificationMethod, data.get("method") or ""),
            verification_hash=data.get("hash") or "",
            enable=bool(data.get("enable", False)),
            active=bool(data.get("active", False)),
            created_at=_parse_time(data.get("createdAt")),
            created_by=data.get("createdBy") or "",
            updated_at=_parse_time(data.get("updatedAt")),
            updated_by=data.get("updatedBy") or "",
            file_path=file_path,
        )

    def save(self, actor: str) -> None:
        """Stamp the update by ``actor`` and write the user to its file."""
        self.updated_by = actor
        self.updated_at = _now()
        Path(self.file_path).write_text(str(self), encoding="utf-8")

    def reload(self) -> None:
        """Replace every field except the file path with what the file holds."""
        loaded = User.from_dict(_read_json(self.file_path), self.file_path)
        for item in fields(self):
            setattr(self, item.name, getattr(loaded, item.name))

    def delete_file(self) -> None:
        """Remove the user's file."""
        Path(self.file_path).unlink()

    def add_role(self, role_id: int) -> None:
        word, bit = role_position(role_id)
        self.role_masks[word] = set_bit_on(self.role_masks[word], bit)

    def remove_role(self, role_id: int) -> None:
        word, bit = role_position(role_id)
        self.role_masks[word] = set_bit_off(self.role_masks[word], bit)

    def has_role(self, role_id: int) -> bool:
        word, bit = role_position(role_id)
        return is_bit_on(self.role_masks[word], bit)

    def clear_roles(self) -> None:
        self.role_masks = [0] * len(self.role_masks)

    def sorted_attribute_keys(self) -> list[str]:
        """Return the attribute names in alphabetical order."""
        return sorted(self.attributes)

    def attribute_names(self) -> list[str]:
        return list(self.attributes)

    def has_attribute(self, name: str) -> bool:
        return name in self.attributes

    def remove_attribute(self, name: str) -> None:
        self.attributes.pop(name, None)

    def remove_all_attributes(self) -> None:
        self.attributes = {}

    def get_attribute(self, name: str) -> tuple[str, str]:
        try:
            attr = self.attributes[name]
        except KeyError:
            raise AttributeError_("attribute not found") from None
        return attr.value_type, attr.value_string

    def set_attribute(self, name: str, value_type: str, value_string: str) -> None:
        """Add an attribute; an existing attribute with this name is left unchanged."""
        if name not in self.attributes:
            self.attributes[name] = Attribute(
                name=name,
                value_type=value_type,
                value_string=value_string,
                seq=len(self.attributes),
            )