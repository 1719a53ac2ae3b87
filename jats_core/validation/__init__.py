"""
Validation Framework
====================

Validation of produced documents against DTDs and XML Schemas.

Components:
- Validator: Applies catalog validation rules (local grammar, named schema)
- BaseValidator: Abstract base class for grammar validators
- ValidationResult: Container for validation results
- DTDValidator / SchemaValidator: Grammar-specific implementations
- GrammarResolver: Catalog-backed DTD and schema lookup
- DiagnosticCollector: Serialized diagnostic collection window
"""

from jats_core.validation.base import (
    BaseValidator,
    ValidationResult,
)

from jats_core.validation.collector import (
    DiagnosticCollector,
    is_collecting,
)

from jats_core.validation.dtd_validator import DTDValidator
from jats_core.validation.schema_validator import SchemaValidator
from jats_core.validation.resolver import GrammarResolver
from jats_core.validation.validator import Validator

__all__ = [
    "BaseValidator",
    "ValidationResult",
    "DiagnosticCollector",
    "is_collecting",
    "DTDValidator",
    "SchemaValidator",
    "GrammarResolver",
    "Validator",
]
