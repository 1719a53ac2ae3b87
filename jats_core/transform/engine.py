"""
Conversion Engine
=================

Runs a transformation ruleset against an input document and returns the
result either as a new document tree or as serialized text.
"""

import logging
from pathlib import Path
from typing import Any, List, Mapping, Optional, Union

from lxml import etree

from jats_core.catalog.registry import ConversionSpec, ParameterSet
from jats_core.catalog.rules import OutputMode
from jats_core.config.settings import PipelineConfig
from jats_core.diagnostics import diagnostics_from_log
from jats_core.errors import TransformationExecutionError
from jats_core.transform.xslt import RulesetLoader
from jats_core.xml.utils import Document, as_document, reformat

logger = logging.getLogger(__name__)

ConversionResult = Union[Document, str]


def merge_params(spec: ConversionSpec, params: Optional[Mapping[str, str]] = None) -> ParameterSet:
    """
    Build the final parameter set for a catalog entry.

    Precedence, lowest first: the entry's defaults, the caller's values,
    the entry's derived values.
    """
    merged: ParameterSet = dict(spec.default_params)
    merged.update(params or {})

    unrecognized = set(params or {}) - spec.recognized_params
    if spec.recognized_params and unrecognized:
        logger.debug(f"{spec.name}: passing through unrecognized parameters {sorted(unrecognized)}")

    return spec.derive_params(merged)


class ConversionEngine:
    """
    Executes named transformation rulesets.

    The engine keeps no shared mutable state: compiled stylesheets are
    cached per thread by the ruleset loader.

    Example:
        engine = ConversionEngine()
        html = engine.convert("to-html", parse_document(Path("article.xml")))
        ris = engine.convert("to-citation", doc, output_mode=OutputMode.TEXT)
    """

    def __init__(self, ruleset_dir: Optional[Path] = None,
                 config: Optional[PipelineConfig] = None):
        self.config = config or PipelineConfig()
        transform_config = self.config.transform

        self.loader = RulesetLoader(
            Path(ruleset_dir or transform_config.ruleset_dir),
            suffix=transform_config.ruleset_suffix,
            cache=transform_config.cache_stylesheets,
        )

    def convert(self,
                name: str,
                document: Any,
                params: Optional[Mapping[str, str]] = None,
                output_mode: OutputMode = OutputMode.TREE) -> ConversionResult:
        """
        Apply the ruleset ``name`` to a document.

        Args:
            name: Ruleset identifier
            document: Input lxml tree or element
            params: String parameters passed to the ruleset
            output_mode: TREE for a new document, TEXT for serialized output

        Returns:
            A new document tree, or the serialized output as a string

        Raises:
            TypeError: If ``document`` is not an lxml tree or element
            TransformationLoadError: If the ruleset cannot be found or read
            TransformationExecutionError: If the transformation fails
        """
        input_doc = as_document(document)
        transform = self.loader.load(name)

        xslt_params = {k: etree.XSLT.strparam(str(v)) for k, v in (params or {}).items()}

        logger.info(f"Applying XSLT transformation: {name}")
        try:
            result = transform(input_doc, **xslt_params)
        except etree.XSLTApplyError as e:
            diagnostics = diagnostics_from_log(transform.error_log)
            logger.error(f"XSLT transformation {name} failed: {e}")
            raise TransformationExecutionError(name, str(e), diagnostics) from e
        except etree.LxmlError as e:
            logger.error(f"XSLT transformation {name} failed: {e}")
            raise TransformationExecutionError(name, str(e)) from e

        # libxslt can report errors without failing the call; the output is partial then
        errors = [entry for entry in transform.error_log if entry.level >= etree.ErrorLevels.ERROR]
        if errors:
            logger.error(f"XSLT transformation {name} reported {len(errors)} error(s): {errors[0].message}")
            raise TransformationExecutionError(
                name,
                f"engine reported errors: {errors[0].message}",
                diagnostics_from_log(transform.error_log),
            )

        if transform.error_log:
            logger.warning(f"XSLT transformation {name} completed with messages:")
            for entry in transform.error_log:
                logger.warning(f"  {entry.message}")

        if output_mode == OutputMode.TEXT:
            return str(result)

        if result.getroot() is None:
            logger.error(f"XSLT transformation {name} produced no document element")
            raise TransformationExecutionError(name, "transformation produced no document element")

        try:
            return reformat(result)
        except etree.XMLSyntaxError as e:
            raise TransformationExecutionError(name, f"output is not well-formed XML: {e}") from e

    def convert_spec(self,
                     spec: ConversionSpec,
                     document: Any,
                     params: Optional[Mapping[str, str]] = None) -> ConversionResult:
        """Run a catalog entry: merge its parameters and convert in its output mode."""
        final_params = merge_params(spec, params)
        return self.convert(spec.ruleset_id, document, final_params, spec.output_mode)

    def available_rulesets(self) -> List[str]:
        return self.loader.available()
