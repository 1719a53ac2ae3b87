"""
Conversion Catalog
==================

Read-only registry of named conversions and the rules bound to them.
"""

from jats_core.catalog.rules import (
    OutputMode,
    ValidationRule,
    NoValidation,
    LocalGrammar,
    NamedSchema,
)

from jats_core.catalog.registry import (
    CATALOG,
    ConversionSpec,
    ParameterSet,
    TIMESTAMP_PARAM,
    get_conversion,
    list_conversions,
    registration_timestamp,
    with_timestamp,
)

__all__ = [
    "OutputMode",
    "ValidationRule",
    "NoValidation",
    "LocalGrammar",
    "NamedSchema",
    "CATALOG",
    "ConversionSpec",
    "ParameterSet",
    "TIMESTAMP_PARAM",
    "get_conversion",
    "list_conversions",
    "registration_timestamp",
    "with_timestamp",
]
