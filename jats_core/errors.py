"""
Error Taxonomy
==============

Exceptions raised by the conversion and validation pipeline. Nothing here is
recovered internally: every error propagates to the immediate caller.
"""

import json
from typing import Any, Dict, List, Optional, Sequence

from jats_core.diagnostics import Diagnostic


class ConversionError(Exception):
    """Base class for all pipeline errors."""


class TransformationLoadError(ConversionError):
    """A transformation ruleset could not be found or read."""

    def __init__(self, ruleset_id: str, reason: str):
        self.ruleset_id = ruleset_id
        self.reason = reason
        super().__init__(f"Cannot load ruleset '{ruleset_id}': {reason}")


class TransformationExecutionError(ConversionError):
    """The XSLT engine failed while applying a loaded ruleset."""

    def __init__(self, ruleset_id: str, reason: str,
                 diagnostics: Optional[Sequence[Diagnostic]] = None):
        self.ruleset_id = ruleset_id
        self.reason = reason
        self.diagnostics: List[Diagnostic] = list(diagnostics or [])
        super().__init__(f"Transformation '{ruleset_id}' failed: {reason}")


class DoctypeMismatchError(ConversionError):
    """The document declares a different doctype than the one expected."""

    def __init__(self, expected: str, actual: Optional[str]):
        self.expected = expected
        self.actual = actual
        super().__init__(f"Incorrect doctype: {actual!r} (expected {expected!r})")


class GrammarLoadError(ConversionError):
    """A DTD or XML Schema could not be resolved or parsed."""

    def __init__(self, location: str, reason: str):
        self.location = location
        self.reason = reason
        super().__init__(f"Cannot load grammar '{location}': {reason}")


class ValidationError(ConversionError):
    """
    Structural validation failed.

    Carries every diagnostic found, in the order the validating engine
    produced them.
    """

    def __init__(self, diagnostics: Sequence[Diagnostic], target: str = ""):
        self.diagnostics: List[Diagnostic] = list(diagnostics)
        self.target = target
        super().__init__(f"Invalid XML: {self.to_json()}")

    def to_dict(self) -> List[Dict[str, Any]]:
        return [d.to_dict() for d in self.diagnostics]

    def to_json(self, indent: Optional[int] = None) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class UnknownConversionError(ConversionError, KeyError):
    """No catalog entry exists under the requested conversion name."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown conversion: {name}")

    def __str__(self) -> str:
        return f"Unknown conversion: {self.name}"
