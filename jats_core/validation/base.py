"""
Base Validation Classes
=======================

Result container and abstract base class for validators. Concrete
validators wrap a compiled grammar (DTD, XML Schema) and run it inside a
diagnostic collection window.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
import logging

from jats_core.diagnostics import Diagnostic, SEVERITY_ERROR, SEVERITY_WARNING
from jats_core.errors import ValidationError
from jats_core.validation.collector import DiagnosticCollector
from jats_core.xml.utils import as_document

logger = logging.getLogger(__name__)


@dataclass
class ValidationResult:
    """
    Container for validation results.

    Attributes:
        is_valid: Whether validation passed
        diagnostics: Every finding, in the order the engine produced them
        target: What was validated against (DTD public id, schema location)
        metadata: Additional validation metadata
    """
    is_valid: bool = True
    diagnostics: List[Diagnostic] = field(default_factory=list)
    target: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.is_error)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == SEVERITY_WARNING)

    def add_diagnostic(self, message: str, severity: str = SEVERITY_ERROR,
                       line: Optional[int] = None) -> None:
        """Add a finding; any error-level finding marks the result invalid."""
        diagnostic = Diagnostic(severity=severity, message=message, line=line)
        self.diagnostics.append(diagnostic)
        if diagnostic.is_error:
            self.is_valid = False

    def raise_for_errors(self) -> None:
        """
        Raises:
            ValidationError: If the result is not valid
        """
        if not self.is_valid:
            raise ValidationError(self.diagnostics, target=self.target)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_valid': self.is_valid,
            'target': self.target,
            'diagnostics': [d.to_dict() for d in self.diagnostics],
        }

    def summary(self) -> str:
        """Generate a text summary of validation results."""
        if self.is_valid:
            return "Validation PASSED - No errors found"

        lines = [f"Validation FAILED - {self.error_count} error(s), {self.warning_count} warning(s)"]
        for diagnostic in self.diagnostics:
            location = f"line {diagnostic.line}: " if diagnostic.line else ""
            lines.append(f"  [{diagnostic.severity}] {location}{diagnostic.message}")
        return "\n".join(lines)


class BaseValidator(ABC):
    """
    Abstract base class for grammar validators.

    Subclasses wrap a compiled lxml validator and expose it through
    ``_validator``; the base class runs it inside a collection window.
    """

    def __init__(self, location: str):
        self._location = location

    @property
    @abstractmethod
    def _validator(self) -> Any:
        """The lxml validator object (``etree.DTD``, ``etree.XMLSchema``)."""

    @property
    def schema_type(self) -> str:
        """Return the type of grammar this validator uses (e.g., 'DTD', 'XSD')."""
        return "Unknown"

    @property
    def location(self) -> str:
        return self._location

    def check_document(self, doc: Any) -> ValidationResult:
        """
        Validate a document and return every diagnostic found.

        Never raises for invalid content; see ``validate_document``.
        """
        tree = as_document(doc)
        validator = self._validator
        result = ValidationResult(target=self._location)

        with DiagnosticCollector() as collector:
            valid = validator.validate(tree)
            collector.drain(validator.error_log)

        if valid:
            for diagnostic in collector.diagnostics:
                logger.warning(f"{self.schema_type} {self._location}: {diagnostic.message}")
            return result

        result.is_valid = False
        result.diagnostics = collector.diagnostics
        if not result.diagnostics:
            result.add_diagnostic(f"Document is not valid against {self._location}")

        logger.info(f"{self.schema_type} validation found {len(result.diagnostics)} problem(s)")
        return result

    def validate_document(self, doc: Any) -> None:
        """
        Raises:
            ValidationError: With the full diagnostic list if the document is invalid
        """
        self.check_document(doc).raise_for_errors()
