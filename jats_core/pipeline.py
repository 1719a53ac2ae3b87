"""
Conversion Pipeline
===================

Named conversions: look up the catalog entry, run its ruleset through the
ConversionEngine, then apply the validation rule bound to it.

    pipeline = Pipeline.from_config(load_config(Path("jats_core.yaml")))
    deposit = pipeline.run(
        "generate-registration-deposit",
        article,
        {"depositorName": "Acme", "depositorEmail": "a@example.org"},
    )
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Optional
import logging

from jats_core.catalog.registry import ConversionSpec, get_conversion
from jats_core.catalog.rules import NoValidation
from jats_core.config.settings import PipelineConfig
from jats_core.diagnostics import Diagnostic
from jats_core.errors import (
    ConversionError,
    TransformationExecutionError,
    ValidationError,
)
from jats_core.transform.engine import ConversionEngine, ConversionResult
from jats_core.validation.validator import Validator
from jats_core.xml.utils import Document

logger = logging.getLogger(__name__)


class OutcomeStatus(str, Enum):
    SUCCESS = "success"
    INVALID = "invalid"
    FAILED = "failed"


@dataclass
class ConversionOutcome:
    """
    Result of ``Pipeline.attempt``.

    Attributes:
        status: SUCCESS, INVALID (structural diagnostics) or FAILED (hard error)
        result: The converted document or text; only set on SUCCESS
        diagnostics: Validation or transformation diagnostics
        error: The error that ended the conversion, if any
    """
    status: OutcomeStatus
    result: Optional[ConversionResult] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)
    error: Optional[ConversionError] = None

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS


class Pipeline:
    """Runs catalog conversions: convert, then validate per the entry's rule."""

    def __init__(self,
                 engine: Optional[ConversionEngine] = None,
                 validator: Optional[Validator] = None):
        self.engine = engine or ConversionEngine()
        self.validator = validator or Validator()

    @classmethod
    def from_config(cls, config: PipelineConfig) -> 'Pipeline':
        return cls(ConversionEngine(config=config), Validator(config=config))

    def run(self,
            name: str,
            document: Any,
            params: Optional[Mapping[str, str]] = None,
            validate: bool = True) -> ConversionResult:
        """
        Run a named conversion.

        Args:
            name: Catalog conversion name
            document: Input document tree
            params: Caller parameters (derived parameters take precedence)
            validate: Apply the entry's validation rule; ignored for entries
                whose validation is mandatory

        Raises:
            UnknownConversionError: If ``name`` is not in the catalog
            TransformationLoadError, TransformationExecutionError: On conversion failure
            DoctypeMismatchError, ValidationError, GrammarLoadError: On validation failure
        """
        spec = get_conversion(name)
        logger.info(f"Running conversion {spec.name} (ruleset {spec.ruleset_id})")

        output = self.engine.convert_spec(spec, document, params)

        if self._should_validate(spec, validate):
            logger.info(f"Validating {spec.name} output: {spec.validation.describe()}")
            self.validator.validate(output, spec.validation)

        return output

    def attempt(self,
                name: str,
                document: Any,
                params: Optional[Mapping[str, str]] = None,
                validate: bool = True) -> ConversionOutcome:
        """Like ``run``, but report pipeline errors as a ``ConversionOutcome``."""
        try:
            output = self.run(name, document, params, validate)
        except ValidationError as e:
            return ConversionOutcome(OutcomeStatus.INVALID, diagnostics=e.diagnostics, error=e)
        except TransformationExecutionError as e:
            return ConversionOutcome(OutcomeStatus.FAILED, diagnostics=e.diagnostics, error=e)
        except ConversionError as e:
            return ConversionOutcome(OutcomeStatus.FAILED, error=e)
        return ConversionOutcome(OutcomeStatus.SUCCESS, result=output)

    @staticmethod
    def _should_validate(spec: ConversionSpec, validate: bool) -> bool:
        if isinstance(spec.validation, NoValidation):
            return False
        return validate or spec.validation_required

    def to_presentation_html(self, document: Any, params: Optional[Mapping[str, str]] = None) -> Document:
        return self.run("to-presentation-html", document, params)

    def generate_correction_record(self, document: Any, params: Optional[Mapping[str, str]] = None) -> Document:
        return self.run("generate-correction-record", document, params)

    def generate_registration_deposit(self, document: Any,
                                      params: Optional[Mapping[str, str]] = None,
                                      validate: bool = True) -> Document:
        return self.run("generate-registration-deposit", document, params, validate)

    def generate_repository_deposit(self, document: Any, params: Optional[Mapping[str, str]] = None) -> Document:
        return self.run("generate-repository-deposit", document, params)

    def generate_directory_listing_record(self, document: Any) -> Document:
        return self.run("generate-directory-listing-record", document)

    def generate_citation_metadata(self, document: Any,
                                   params: Optional[Mapping[str, str]] = None,
                                   as_text: bool = False) -> ConversionResult:
        name = "generate-citation-metadata-text" if as_text else "generate-citation-metadata"
        return self.run(name, document, params)

    def generate_bibliography_entry(self, document: Any) -> str:
        return self.run("generate-bibliography-entry", document)

    def from_presentation_html(self, document: Any) -> Document:
        return self.run("from-presentation-html", document)
