"""
Validation Rules and Output Modes
=================================

The tagged variants a catalog entry uses to describe what a conversion
produces and how its output must be checked.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Union


class OutputMode(str, Enum):
    """Shape of a conversion result."""
    TREE = "tree"
    TEXT = "text"


@dataclass(frozen=True)
class NoValidation:
    """The output is returned without structural checks."""

    def describe(self) -> str:
        return "none"


@dataclass(frozen=True)
class LocalGrammar:
    """
    Validate against the DTD referenced by the document's own doctype,
    after checking the doctype public identifier.
    """
    expected_doctype_id: str

    def describe(self) -> str:
        return f"DTD ({self.expected_doctype_id})"


@dataclass(frozen=True)
class NamedSchema:
    """Validate against an XML Schema identified by its location."""
    schema_location: str

    def describe(self) -> str:
        return f"XSD ({self.schema_location})"


ValidationRule = Union[NoValidation, LocalGrammar, NamedSchema]
