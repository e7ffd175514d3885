"""
Vocabulary Enumerations

Base for enumerations whose members serialize to fixed strings. The member
value is the serialized form; every enumeration has a NONE member ("") that
stands for "unset".
"""

from enum import Enum
from typing import Optional


class VocabularyEnum(Enum):
    """Enumeration with case-insensitive lookup of its serialized forms."""

    @classmethod
    def as_string(cls, member: "VocabularyEnum") -> str:
        """Serialized form of a member; NONE gives the empty string."""
        if not isinstance(member, cls):
            raise TypeError(f"{member!r} is not a {cls.__name__}")
        return member.value

    @classmethod
    def by_name(cls, name: Optional[str]) -> Optional["VocabularyEnum"]:
        """
        Look up a member by its serialized form or member name.

        Returns:
            The member, or None if the name is empty or unknown
        """
        if not name or not name.strip():
            return None
        key = name.strip().casefold()
        for member in cls:
            if not member.value:
                continue
            if member.value.casefold() == key or member.name.casefold() == key:
                return member
        return None

    def __str__(self):
        return self.value
