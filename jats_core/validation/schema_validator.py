"""
XML Schema Validator
====================

Validation against a W3C XML Schema.
"""

from pathlib import Path
from typing import Any, Union
import logging

from lxml import etree

from jats_core.errors import GrammarLoadError
from jats_core.validation.base import BaseValidator

logger = logging.getLogger(__name__)


class SchemaValidator(BaseValidator):
    """XSD validator for in-memory documents."""

    def __init__(self, schema: 'etree.XMLSchema', location: str):
        super().__init__(location)
        self._schema = schema

    @classmethod
    def from_file(cls, schema_path: Union[Path, str], location: str = "") -> 'SchemaValidator':
        """
        Compile a schema from a local path or URL.

        Args:
            schema_path: Where to read the schema from
            location: Name the schema is registered under (defaults to ``schema_path``)

        Raises:
            GrammarLoadError: If the schema cannot be read or compiled
        """
        location = location or str(schema_path)
        logger.info(f"Loading XML Schema: {schema_path}")
        try:
            schema_doc = etree.parse(str(schema_path))
            schema = etree.XMLSchema(schema_doc)
        except (OSError, etree.XMLSyntaxError, etree.XMLSchemaParseError) as e:
            logger.error(f"Failed to load XML Schema {schema_path}: {e}")
            raise GrammarLoadError(location, str(e)) from e
        return cls(schema, location)

    @property
    def _validator(self) -> Any:
        return self._schema

    @property
    def schema_type(self) -> str:
        return "XSD"
