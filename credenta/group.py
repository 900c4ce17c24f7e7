"""User groups persisted as JSON files."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from .attributes import Attributable, Attribute, AttributeError_
from .bits import is_bit_on, role_position, set_bit_off, set_bit_on

_ZERO_TIME = datetime(1, 1, 1, tzinfo=timezone.utc)

_TIME_RE = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})(?:\.(\d+))?(Z|[+-]\d{2}:\d{2})"
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _format_time(moment: datetime) -> str:
    """Render a timestamp in RFC 3339 form with trailing fraction zeros trimmed."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    text = (
        f"{moment.year:04d}-{moment.month:02d}-{moment.day:02d}"
        f"T{moment.hour:02d}:{moment.minute:02d}:{moment.second:02d}"
    )
    if moment.microsecond:
        text += "." + f"{moment.microsecond:06d}".rstrip("0")
    offset = moment.utcoffset() or timedelta(0)
    if not offset:
        return text + "Z"
    minutes = int(offset.total_seconds()) // 60
    sign = "+" if minutes >= 0 else "-"
    hours, mins = divmod(abs(minutes), 60)
    return f"{text}{sign}{hours:02d}:{mins:02d}"


def _parse_time(text: str | None) -> datetime:
    """Parse an RFC 3339 timestamp; a missing value gives the zero time."""
    if text is None:
        return _ZERO_TIME
    match = _TIME_RE.fullmatch(text)
    if match is None:
        raise ValueError(f"invalid timestamp: {text!r}")
    year, month, day, hour, minute, second = (int(part) for part in match.groups()[:6])
    fraction = (match.group(7) or "").ljust(6, "0")[:6]
    zone = match.group(8)
    if zone == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        delta = timedelta(hours=int(zone[1:3]), minutes=int(zone[4:6]))
        tz = timezone(sign * delta)
    return datetime(year, month, day, hour, minute, second, int(fraction), tzinfo=tz)


def _dump_json(data: Mapping[str, Any]) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def _read_json(path: str) -> dict[str, Any]:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"expected a JSON object in {path}")
    return data


@dataclass
class Group(Attributable):
    """A named group inside a realm, with role masks, attributes and parent groups."""

    realm: str = ""
    name: str = ""
    parent_groups: list[str] = field(default_factory=list)
    attributes: list[Attribute] = field(default_factory=list)
    role_masks: list[int] = field(default_factory=list)
    created_at: datetime = _ZERO_TIME
    created_by: str = ""
    updated_at: datetime = _ZERO_TIME
    updated_by: str = ""
    file_path: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form; empty parent groups, attributes and role masks are left out."""
        data: dict[str, Any] = {"realm": self.realm, "name": self.name}
        if self.parent_groups:
            data["parentGroups"] = list(self.parent_groups)
        if self.attributes:
            data["attributes"] = [attr.to_dict() for attr in self.attributes]
        if self.role_masks:
            data["roleMasks"] = list(self.role_masks)
        data["createdAt"] = _format_time(self.created_at)
        data["createdBy"] = self.created_by
        data["updatedAt"] = _format_time(self.updated_at)
        data["updatedBy"] = self.updated_by
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], file_path: str = "") -> Group:
        """Build a group from its JSON form."""
        return cls(
            realm=data.get("realm") or "",
            name=data.get("name") or "",
            parent_groups=list(data.get("parentGroups") or []),
            attributes=[Attribute.from_dict(item) for item in data.get("attributes") or []],
            role_masks=[int(mask) for mask in data.get("roleMasks") or []],
            created_at=_parse_time(data.get("createdAt")),
            created_by=data.get("createdBy") or "",
            updated_at=_parse_time(data.get("updatedAt")),
            updated_by=data.get("updatedBy") or "",
            file_path=file_path,
        )

    def save(self, actor: str) -> None:
        """Stamp the update by ``actor`` and write the group to its file."""
        self.updated_by = actor
        self.updated_at = _now()
        Path(self.file_path).write_text(_dump_json(self.to_dict()), encoding="utf-8")

    def reload(self) -> None:
        """Replace every field except the file path with what the file holds."""
        loaded = Group.from_dict(_read_json(self.file_path), self.file_path)
        for item in fields(self):
            setattr(self, item.name, getattr(loaded, item.name))

    def delete_file(self) -> None:
        """Remove the group's file."""
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

    def attribute_names(self) -> list[str]:
        """Return attribute names ordered by sequence number."""
        return [attr.name for attr in self.sorted_attributes()]

    def has_attribute(self, name: str) -> bool:
        key = name.casefold()
        return any(attr.name.casefold() == key for attr in self.attributes)

    def remove_attribute(self, name: str) -> None:
        """Remove attributes matching ``name`` case-insensitively and renumber the rest."""
        key = name.casefold()
        self.attributes = [attr for attr in self.attributes if attr.name.casefold() != key]
        for seq, attr in enumerate(self.sorted_attributes()):
            attr.seq = seq

    def remove_all_attributes(self) -> None:
        self.attributes = []

    def get_attribute(self, name: str) -> tuple[str, str]:
        key = name.casefold()
        for attr in self.attributes:
            if attr.name.casefold() == key:
                return attr.value_type, attr.value_string
        raise AttributeError_("attribute not found")

    def set_attribute(self, name: str, value_type: str, value_string: str) -> None:
        """Add a new attribute; raise AttributeError_ if one with this name exists."""
        if self.has_attribute(name):
            raise AttributeError_("attribute already exists")
        self.attributes.append(
            Attribute(
                name=name,
                value_type=value_type,
                value_string=value_string,
                seq=len(self.attributes),
            )
        )

    def sorted_attributes(self) -> list[Attribute]:
        """Order the attributes by sequence number and return them."""
        self.attributes.sort(key=lambda attr: attr.seq)
        return list(self.attributes)