"""
Validator
=========

Confirms that a produced document conforms to its structural contract.

Two strategies are available:

- local grammar: the doctype public identifier must match the expected one,
  then the document is validated against the DTD its own doctype refers to
- named schema: the document is validated against a registered XML Schema

Both collect every diagnostic the engine reports. ``validate_*`` methods
raise ``ValidationError`` on failure; ``check_*`` methods return a
``ValidationResult`` instead.
"""

from typing import Any, Optional
import logging

from jats_core.catalog.rules import LocalGrammar, NamedSchema, NoValidation, ValidationRule
from jats_core.config.settings import PipelineConfig
from jats_core.errors import DoctypeMismatchError
from jats_core.validation.base import ValidationResult
from jats_core.validation.resolver import GrammarResolver
from jats_core.xml.utils import as_document, doctype_public_id

logger = logging.getLogger(__name__)


class Validator:
    """
    Applies validation rules to documents.

    Example:
        validator = Validator(GrammarResolver(schema_catalog={...}))
        validator.validate_named_schema(deposit, REGISTRATION_SCHEMA)
    """

    def __init__(self, resolver: Optional[GrammarResolver] = None,
                 config: Optional[PipelineConfig] = None):
        if resolver is None:
            resolver = GrammarResolver.from_config(config or PipelineConfig())
        self.resolver = resolver

    def validate_doctype(self, doc: Any, expected_doctype_id: str) -> None:
        """
        Check the doctype public identifier.

        Raises:
            DoctypeMismatchError: If the document declares another (or no) doctype
        """
        actual = doctype_public_id(doc)
        if actual != expected_doctype_id:
            logger.error(f"Incorrect doctype: {actual!r}, expected {expected_doctype_id!r}")
            raise DoctypeMismatchError(expected_doctype_id, actual)

    def check_local_grammar(self, doc: Any, expected_doctype_id: str) -> ValidationResult:
        """
        Validate against the DTD referenced by the document's doctype.

        Raises:
            DoctypeMismatchError: Before any structural check, on a doctype mismatch
            GrammarLoadError: If the referenced DTD cannot be loaded
        """
        tree = as_document(doc)
        self.validate_doctype(tree, expected_doctype_id)

        docinfo = tree.docinfo
        dtd = self.resolver.dtd_for(docinfo.public_id, docinfo.system_url, docinfo.URL)
        return dtd.check_document(tree)

    def validate_local_grammar(self, doc: Any, expected_doctype_id: str) -> None:
        """
        Raises:
            DoctypeMismatchError: On a doctype mismatch
            ValidationError: With every DTD diagnostic if the document is invalid
        """
        self.check_local_grammar(doc, expected_doctype_id).raise_for_errors()

    def check_named_schema(self, doc: Any, schema_location: str) -> ValidationResult:
        """
        Validate against the XML Schema registered under ``schema_location``.

        Raises:
            GrammarLoadError: If the schema cannot be resolved
        """
        schema = self.resolver.schema_for(schema_location)
        return schema.check_document(as_document(doc))

    def validate_named_schema(self, doc: Any, schema_location: str) -> None:
        """
        Raises:
            ValidationError: With every schema diagnostic if the document is invalid
        """
        self.check_named_schema(doc, schema_location).raise_for_errors()

    def check(self, doc: Any, rule: ValidationRule) -> ValidationResult:
        """Apply a catalog validation rule and return the result."""
        if isinstance(rule, NoValidation):
            return ValidationResult(target=rule.describe())
        if isinstance(rule, LocalGrammar):
            return self.check_local_grammar(doc, rule.expected_doctype_id)
        if isinstance(rule, NamedSchema):
            return self.check_named_schema(doc, rule.schema_location)
        raise TypeError(f"Unsupported validation rule: {rule!r}")

    def validate(self, doc: Any, rule: ValidationRule) -> None:
        """Apply a catalog validation rule, raising on failure."""
        self.check(doc, rule).raise_for_errors()
