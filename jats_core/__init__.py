"""
JATS Core Library
=================

Conversion and validation pipeline for JATS scholarly-article documents:

- XSLT-backed conversions addressed by name (HTML, deposit records,
  citation formats)
- DTD validation through the document's own doctype
- XML Schema validation against registered schemas
- Full diagnostic aggregation with serialized collection windows

Architecture
------------

    jats_core/
    ├── catalog/       - Conversion catalog (ConversionSpec, validation rules)
    ├── transform/     - Ruleset loading and the ConversionEngine
    ├── validation/    - Validator, DTD/XSD validators, grammar resolution
    ├── xml/           - Parsing and serialization helpers
    ├── config/        - Configuration management
    ├── data/xsl/      - Bundled transformation rulesets
    └── pipeline.py    - Named conversions (convert then validate)

Usage
-----

    from jats_core import Pipeline, parse_document

    pipeline = Pipeline()
    article = parse_document(Path("article.xml"))
    html = pipeline.run("to-presentation-html", article, {"static-root": "/static/"})
    bibtex = pipeline.run("generate-bibliography-entry", article)

"""

__version__ = "1.0.0"

from jats_core.errors import (
    ConversionError,
    TransformationLoadError,
    TransformationExecutionError,
    DoctypeMismatchError,
    GrammarLoadError,
    ValidationError,
    UnknownConversionError,
)

from jats_core.diagnostics import Diagnostic

from jats_core.catalog import (
    CATALOG,
    ConversionSpec,
    OutputMode,
    NoValidation,
    LocalGrammar,
    NamedSchema,
    get_conversion,
    list_conversions,
)

from jats_core.config import (
    PipelineConfig,
    load_config,
    save_config,
)

from jats_core.xml import (
    parse_document,
    parse_html,
    serialize,
)

from jats_core.transform import ConversionEngine

from jats_core.validation import (
    Validator,
    ValidationResult,
    GrammarResolver,
)

from jats_core.pipeline import (
    Pipeline,
    ConversionOutcome,
    OutcomeStatus,
)

__all__ = [
    # Version
    "__version__",
    # Errors
    "ConversionError",
    "TransformationLoadError",
    "TransformationExecutionError",
    "DoctypeMismatchError",
    "GrammarLoadError",
    "ValidationError",
    "UnknownConversionError",
    "Diagnostic",
    # Catalog
    "CATALOG",
    "ConversionSpec",
    "OutputMode",
    "NoValidation",
    "LocalGrammar",
    "NamedSchema",
    "get_conversion",
    "list_conversions",
    # Config
    "PipelineConfig",
    "load_config",
    "save_config",
    # Documents
    "parse_document",
    "parse_html",
    "serialize",
    # Engine and validation
    "ConversionEngine",
    "Validator",
    "ValidationResult",
    "GrammarResolver",
    # Pipeline
    "Pipeline",
    "ConversionOutcome",
    "OutcomeStatus",
]
