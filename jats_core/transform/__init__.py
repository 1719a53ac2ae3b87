"""
Transformation Framework
========================

Loads XSLT rulesets and applies them to documents.

Components:
- ConversionEngine: Ruleset execution with tree or text results
- RulesetLoader: Identifier to compiled stylesheet resolution
- merge_params: Deterministic parameter merging for catalog entries
"""

from jats_core.transform.xslt import (
    FUNCTIONS_NS,
    RulesetLoader,
    load_xslt_transform,
    rawurlencode,
)

from jats_core.transform.engine import (
    ConversionEngine,
    ConversionResult,
    merge_params,
)

__all__ = [
    "FUNCTIONS_NS",
    "RulesetLoader",
    "load_xslt_transform",
    "rawurlencode",
    "ConversionEngine",
    "ConversionResult",
    "merge_params",
]
