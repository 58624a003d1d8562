"""Entity key codec.

Every rendered element needs one string id that is unique across people and
transactions.  The backend reuses integer ids between the two labels, so the
key is the lower-cased first letter of the backend type name followed by the
numeric id: user 7 is ``"u7"`` and transaction 7 is ``"t7"``.
"""

from __future__ import annotations

from enum import Enum

from txgraph.errors import InvalidKind


class EntityKind(str, Enum):
    """The two entity kinds the backend returns."""

    PERSON = "User"
    EVENT = "Transaction"

    @property
    def prefix(self) -> str:
        return self.value[0].lower()


_ALIASES: dict[str, EntityKind] = {
    "user": EntityKind.PERSON,
    "person": EntityKind.PERSON,
    "transaction": EntityKind.EVENT,
    "event": EntityKind.EVENT,
}


def parse_kind(type_name: object) -> EntityKind:
    """Map a backend type name (``"User"``, ``"Transaction"``) to an ``EntityKind``.

    Matching is case-insensitive.  ``Person``/``Event`` are accepted as
    aliases.

    Raises:
        InvalidKind: If *type_name* is not a recognised kind.
    """
    if isinstance(type_name, EntityKind):
        return type_name
    if isinstance(type_name, str):
        kind = _ALIASES.get(type_name.strip().lower())
        if kind is not None:
            return kind
    raise InvalidKind(type_name)


def entity_key(kind: EntityKind | str, entity_id: int) -> str:
    """Derive the stable element key for ``(kind, entity_id)``.

    Raises:
        InvalidKind: If *kind* is not a recognised kind.
    """
    return f"{parse_kind(kind).prefix}{entity_id}"
