"""
Grammar Resolution
==================

Maps doctype public identifiers and schema locations to loaded validators.
Catalog entries point at local copies; anything not in a catalog is loaded
from its own location, and remote locations only when the network is
allowed.
"""

from pathlib import Path
from typing import Dict, Mapping, Optional
from urllib.parse import urljoin, urlparse
from urllib.request import url2pathname
import logging
import threading

from jats_core.config.settings import PipelineConfig
from jats_core.errors import GrammarLoadError
from jats_core.validation.dtd_validator import DTDValidator
from jats_core.validation.schema_validator import SchemaValidator

logger = logging.getLogger(__name__)


def is_remote(location: str) -> bool:
    return urlparse(location).scheme in ("http", "https", "ftp")


def as_local(location: str) -> str:
    """Turn a file: URL into a plain path; other locations are returned unchanged."""
    parsed = urlparse(location)
    if parsed.scheme == "file":
        return url2pathname(parsed.path)
    return location


class GrammarResolver:
    """
    Resolves and caches DTD and XML Schema validators.

    Example:
        resolver = GrammarResolver(
            schema_catalog={REGISTRATION_SCHEMA: "schemas/crossref4.3.3.xsd"},
        )
        validator = resolver.schema_for(REGISTRATION_SCHEMA)
    """

    def __init__(self,
                 dtd_catalog: Optional[Mapping[str, str]] = None,
                 schema_catalog: Optional[Mapping[str, str]] = None,
                 allow_network: bool = False):
        self.dtd_catalog: Dict[str, str] = dict(dtd_catalog or {})
        self.schema_catalog: Dict[str, str] = dict(schema_catalog or {})
        self.allow_network = allow_network

        self._lock = threading.Lock()
        self._dtds: Dict[str, DTDValidator] = {}
        self._schemas: Dict[str, SchemaValidator] = {}

    @classmethod
    def from_config(cls, config: PipelineConfig) -> 'GrammarResolver':
        validation = config.validation
        return cls(
            dtd_catalog=validation.dtd_catalog,
            schema_catalog=validation.schema_catalog,
            allow_network=validation.allow_network,
        )

    def _check_reachable(self, location: str) -> None:
        if is_remote(location) and not self.allow_network:
            logger.error(f"Refusing to fetch remote grammar: {location}")
            raise GrammarLoadError(location, "remote grammar and network access is disabled")

    def dtd_for(self,
                public_id: Optional[str],
                system_url: Optional[str] = None,
                base_url: Optional[str] = None) -> DTDValidator:
        """
        Resolve the DTD a doctype declaration refers to.

        The public identifier is looked up in the DTD catalog first; otherwise
        the system identifier is used, relative to ``base_url`` when given.

        Raises:
            GrammarLoadError: If no DTD can be located or loaded
        """
        if public_id and public_id in self.dtd_catalog:
            location = self.dtd_catalog[public_id]
        elif system_url:
            location = urljoin(base_url, system_url) if base_url else system_url
        elif public_id:
            raise GrammarLoadError(public_id, "public identifier not in catalog and no system identifier")
        else:
            raise GrammarLoadError("", "document has no doctype declaration")

        location = as_local(location)

        with self._lock:
            if location in self._dtds:
                return self._dtds[location]

            self._check_reachable(location)
            if not is_remote(location) and not Path(location).is_file():
                raise GrammarLoadError(location, "DTD file not found")

            validator = DTDValidator.from_file(location)
            self._dtds[location] = validator
            return validator

    def schema_for(self, schema_location: str) -> SchemaValidator:
        """
        Resolve a named schema.

        Raises:
            GrammarLoadError: If the schema cannot be located or compiled
        """
        with self._lock:
            if schema_location in self._schemas:
                return self._schemas[schema_location]

            source = as_local(self.schema_catalog.get(schema_location, schema_location))
            self._check_reachable(source)
            if not is_remote(source) and not Path(source).is_file():
                raise GrammarLoadError(schema_location, f"schema file not found: {source}")

            validator = SchemaValidator.from_file(source, location=schema_location)
            self._schemas[schema_location] = validator
            return validator
