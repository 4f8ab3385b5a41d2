"""Identifiers as written in source, and symbols that resolve them."""

from __future__ import annotations

from dataclasses import dataclass

_U32_LIMIT = 2**32


@dataclass(frozen=True, order=True)
class Name:
    """An identifier exactly as it appears in the source text."""

    text: str

    def is_camel_case(self) -> bool:
        """Whether the identifier starts with an upper-case letter."""
        return self.text[:1].isupper()

    def __str__(self) -> str:
        return self.text

    def __repr__(self) -> str:
        return self.text


@dataclass(frozen=True, order=True)
class Sym:
    """A name paired with a unique id; id 0 means not yet resolved."""

    name: Name
    id: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.id < _U32_LIMIT:
            raise ValueError(f"symbol id out of range: {self.id}")

    @classmethod
    def named(cls, text: str) -> Sym:
        """Build an unresolved symbol from a plain string."""
        return cls(Name(text))

    def __str__(self) -> str:
        return self.name.text

    def __repr__(self) -> str:
        return f"{self.name.text}${self.id}"