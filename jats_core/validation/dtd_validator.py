"""
DTD Validator
=============

Validation against a document type definition.
"""

from pathlib import Path
from typing import Any, Union
import logging

from lxml import etree

from jats_core.errors import GrammarLoadError
from jats_core.validation.base import BaseValidator

logger = logging.getLogger(__name__)


class DTDValidator(BaseValidator):
    """
    DTD validator for in-memory documents.

    Example:
        validator = DTDValidator.from_file(Path("JATS-journalpublishing1.dtd"))
        result = validator.check_document(doc)
        if not result.is_valid:
            print(result.summary())
    """

    def __init__(self, dtd: 'etree.DTD', location: str):
        super().__init__(location)
        self._dtd = dtd

    @classmethod
    def from_file(cls, dtd_path: Union[Path, str]) -> 'DTDValidator':
        """
        Load a DTD from a local path or URL.

        Raises:
            GrammarLoadError: If the DTD cannot be read or parsed
        """
        location = str(dtd_path)
        logger.info(f"Loading DTD: {location}")
        try:
            dtd = etree.DTD(location)
        except (OSError, etree.DTDParseError) as e:
            logger.error(f"Failed to load DTD {location}: {e}")
            raise GrammarLoadError(location, str(e)) from e
        return cls(dtd, location)

    @property
    def _validator(self) -> Any:
        return self._dtd

    @property
    def schema_type(self) -> str:
        return "DTD"
