"""Command-line arguments of the checker."""

from __future__ import annotations

import argparse
import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Optional, Sequence


class DebugSection(enum.Enum):
    """A compiler stage whose intermediate output can be printed."""

    LEX = "lex"
    PARSE = "parse"
    NAME = "name"
    TYPE = "type"
    CALL_GRAPH = "call-graph"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, text: str) -> DebugSection:
        try:
            return cls(text)
        except ValueError:
            available = ", ".join(str(section) for section in cls)
            raise ValueError(
                f"unknown debug section '{text}', available: {available}"
            ) from None


@dataclass(frozen=True)
class DebugSections:
    """The set of debug sections that are switched on."""

    sections: frozenset[DebugSection] = field(default_factory=frozenset)

    @classmethod
    def parse(cls, text: str) -> DebugSections:
        """Parse a comma-separated list of section names."""
        return cls(frozenset(DebugSection.parse(part) for part in text.split(",")))

    def contains(self, section: DebugSection) -> bool:
        return section in self.sections

    def __contains__(self, section: object) -> bool:
        return section in self.sections

    def __iter__(self) -> Iterator[DebugSection]:
        return (section for section in DebugSection if section in self.sections)


@dataclass(frozen=True)
class Cli:
    file: Path
    debug: DebugSections


def _debug_sections(text: str) -> DebugSections:
    try:
        return DebugSections.parse(text)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="selfie", description="Check a source file through every compiler stage."
    )
    parser.add_argument("file", type=Path)
    parser.add_argument("-d", "--debug", type=_debug_sections, required=True)
    return parser


def parse_args(argv: Optional[Sequence[str]] = None) -> Cli:
    """Parse command-line arguments; exit with a usage message on error."""
    ns = _build_parser().parse_args(argv)
    return Cli(file=ns.file, debug=ns.debug)