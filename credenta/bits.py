"""Role bit masks: roles are numbered bits spread over a list of 64-bit words."""

from __future__ import annotations

from collections.abc import Sequence

WORD_BITS = 64
_WORD_MASK = (1 << WORD_BITS) - 1


def role_position(role_id: int) -> tuple[int, int]:
    """Return ``(word_index, bit_index)`` locating ``role_id`` in a role mask list."""
    if role_id < 0:
        raise ValueError(f"role id must not be negative: {role_id}")
    return divmod(role_id, WORD_BITS)


def _check_bit(bit: int) -> None:
    if not 0 <= bit < WORD_BITS:
        raise ValueError(f"bit index out of range 0..{WORD_BITS - 1}: {bit}")


def is_bit_on(bits: int, bit: int) -> bool:
    """Tell whether bit number ``bit`` of the 64-bit word ``bits`` is set."""
    _check_bit(bit)
    flag = 1 << bit
    return bits & flag == flag


def set_bit_on(bits: int, bit: int) -> int:
    """Return ``bits`` with bit number ``bit`` set."""
    _check_bit(bit)
    return (bits | (1 << bit)) & _WORD_MASK


def set_bit_off(bits: int, bit: int) -> int:
    """Return ``bits`` with bit number ``bit`` cleared."""
    _check_bit(bit)
    return bits & ~(1 << bit) & _WORD_MASK


def has_role(roles: Sequence[int], role_id: int) -> bool:
    """Tell whether the role masks ``roles`` grant ``role_id``."""
    word, bit = role_position(role_id)
    return is_bit_on(roles[word], bit)


def _locate(roles: Sequence[int], role_id: int) -> tuple[int, int]:
    word, bit = role_position(role_id)
    if word >= len(roles):
        raise ValueError("role number out of bounds. role not large enough")
    return word, bit


def add_role(roles: Sequence[int], role_id: int) -> list[int]:
    """Return a copy of ``roles`` that also grants ``role_id``."""
    word, bit = _locate(roles, role_id)
    result = list(roles)
    result[word] = set_bit_on(result[word], bit)
    return result


def remove_role(roles: Sequence[int], role_id: int) -> list[int]:
    """Return a copy of ``roles`` that no longer grants ``role_id``."""
    word, bit = _locate(roles, role_id)
    result = list(roles)
    result[word] = set_bit_off(result[word], bit)
    return result