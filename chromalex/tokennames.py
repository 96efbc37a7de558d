"""Lookup between token types and their textual names."""

from __future__ import annotations

from .tokentype import TokenType

_VALUES: tuple[TokenType, ...] = tuple(
    sorted({member for member in TokenType}, key=int)
)
_NAMES: tuple[str, ...] = tuple(str(member) for member in _VALUES)
_BY_VALUE: dict[int, str] = {int(member): str(member) for member in _VALUES}
_BY_NAME: dict[str, TokenType] = {}
for _member in _VALUES:
    _BY_NAME[str(_member)] = _member
    _BY_NAME[str(_member).lower()] = _member
del _member


def token_type_from_string(name: str) -> TokenType:
    """Look up a token type by its name, falling back to a lower-case match.

    Raises ValueError if the name does not belong to any token type.
    """
    found = _BY_NAME.get(name)
    if found is None:
        found = _BY_NAME.get(name.lower())
    if found is None:
        raise ValueError(f"{name} does not belong to TokenType values")
    return found


def token_type_values() -> list[TokenType]:
    """All token types, ordered by value."""
    return list(_VALUES)


def token_type_strings() -> list[str]:
    """The names of all token types, ordered by value."""
    return list(_NAMES)


def is_token_type(value: int) -> bool:
    """Whether ``value`` is one of the defined token types."""
    return int(value) in _BY_VALUE


def token_type_name(value: int) -> str:
    """The name of a token type, or ``TokenType(<n>)`` for unknown values."""
    name = _BY_VALUE.get(int(value))
    if name is None:
        return f"TokenType({int(value)})"
    return name