"""
Conversion Catalog
==================

Fixed mapping from conversion name to ``ConversionSpec``. Adding a target
format means adding an entry here plus its ruleset under ``data/xsl``.

The catalog is built once at import time and exposed read-only.
"""

from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional
import logging

from jats_core.catalog.rules import (
    LocalGrammar,
    NamedSchema,
    NoValidation,
    OutputMode,
    ValidationRule,
)
from jats_core.config.settings import (
    DIRECTORY_SCHEMA,
    JATS_PUBLISHING_PUBLIC_ID,
    REGISTRATION_SCHEMA,
    REPOSITORY_SCHEMA,
)
from jats_core.errors import UnknownConversionError

logger = logging.getLogger(__name__)

ParameterSet = Dict[str, str]

TIMESTAMP_PARAM = "timestamp"
TIMESTAMP_FORMAT = "%Y%m%d%H%M%S"


def registration_timestamp(now: Optional[datetime] = None) -> str:
    """Submission timestamp for registration deposits: 14 digits, YYYYMMDDHHMMSS."""
    return (now or datetime.now()).strftime(TIMESTAMP_FORMAT)


def no_derived_params(params: ParameterSet) -> ParameterSet:
    return dict(params)


def with_timestamp(params: ParameterSet) -> ParameterSet:
    """Inject the submission timestamp, replacing any caller-supplied value."""
    derived = dict(params)
    if TIMESTAMP_PARAM in derived:
        logger.debug(f"Overriding caller-supplied '{TIMESTAMP_PARAM}' parameter")
    derived[TIMESTAMP_PARAM] = registration_timestamp()
    return derived


@dataclass(frozen=True)
class ConversionSpec:
    """
    A catalog entry.

    Attributes:
        name: Conversion identifier used by callers
        ruleset_id: Transformation ruleset the conversion runs
        output_mode: Whether the result is a document tree or text
        validation: Structural contract applied to the output
        validation_required: Apply ``validation`` even when the caller opts out
        derive_params: Computes the final parameters from the merged ones;
            derived values win over caller values
        default_params: Values used when the caller does not supply the key
        recognized_params: Parameter names the ruleset understands
        description: Short human readable summary
    """
    name: str
    ruleset_id: str
    output_mode: OutputMode = OutputMode.TREE
    validation: ValidationRule = field(default_factory=NoValidation)
    validation_required: bool = False
    derive_params: Callable[[ParameterSet], ParameterSet] = no_derived_params
    default_params: Mapping[str, str] = field(default_factory=dict)
    recognized_params: FrozenSet[str] = frozenset()
    description: str = ""


_ENTRIES = [
    ConversionSpec(
        name="to-presentation-html",
        ruleset_id="to-html",
        recognized_params=frozenset({
            "static-root", "search-root", "download-prefix",
            "publication-type", "public-reviews", "self-uri",
        }),
        description="Article as presentation HTML",
    ),
    ConversionSpec(
        name="generate-correction-record",
        ruleset_id="to-correction",
        validation=LocalGrammar(JATS_PUBLISHING_PUBLIC_ID),
        validation_required=True,
        description="JATS correction article pointing at the corrected article",
    ),
    ConversionSpec(
        name="generate-registration-deposit",
        ruleset_id="to-registration-deposit",
        validation=NamedSchema(REGISTRATION_SCHEMA),
        derive_params=with_timestamp,
        recognized_params=frozenset({"depositorName", "depositorEmail", TIMESTAMP_PARAM}),
        description="CrossRef deposit record",
    ),
    ConversionSpec(
        name="generate-repository-deposit",
        ruleset_id="to-repository-deposit",
        validation=NamedSchema(REPOSITORY_SCHEMA),
        validation_required=True,
        recognized_params=frozenset({"itemVersion"}),
        description="DataCite metadata record",
    ),
    ConversionSpec(
        name="generate-directory-listing-record",
        ruleset_id="to-directory-record",
        validation=NamedSchema(DIRECTORY_SCHEMA),
        validation_required=True,
        description="DOAJ article record",
    ),
    ConversionSpec(
        name="generate-citation-metadata",
        ruleset_id="to-citation",
        default_params=MappingProxyType({"format": "rdf"}),
        recognized_params=frozenset({"homepage", "format"}),
        description="Citation metadata as an RDF tree",
    ),
    ConversionSpec(
        name="generate-citation-metadata-text",
        ruleset_id="to-citation",
        output_mode=OutputMode.TEXT,
        recognized_params=frozenset({"homepage", "format"}),
        description="Citation metadata as RIS text",
    ),
    ConversionSpec(
        name="generate-bibliography-entry",
        ruleset_id="to-bibliography-entry",
        output_mode=OutputMode.TEXT,
        description="BibTeX entry",
    ),
    ConversionSpec(
        name="from-presentation-html",
        ruleset_id="from-html",
        description="Presentation HTML back to JATS",
    ),
]

CATALOG: Mapping[str, ConversionSpec] = MappingProxyType({spec.name: spec for spec in _ENTRIES})


def get_conversion(name: str) -> ConversionSpec:
    """
    Look up a catalog entry.

    Raises:
        UnknownConversionError: If no entry is registered under ``name``
    """
    try:
        return CATALOG[name]
    except KeyError:
        logger.error(f"Unknown conversion requested: {name}")
        raise UnknownConversionError(name) from None


def list_conversions() -> List[str]:
    return sorted(CATALOG)
