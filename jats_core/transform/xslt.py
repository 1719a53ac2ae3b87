"""
XSLT Ruleset Loading
====================

Locates transformation rulesets by identifier and compiles them with lxml.
A ruleset ``<id>`` lives at ``<ruleset_dir>/<id>.xsl``.
"""

import logging
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from lxml import etree

from jats_core.errors import TransformationLoadError

logger = logging.getLogger(__name__)

# Namespace for extension functions available to rulesets
FUNCTIONS_NS = "http://jats-core.org/xslt/functions"


def _string_value(value: Any) -> str:
    """XPath string-value of an extension function argument."""
    if isinstance(value, list):
        if not value:
            return ""
        value = value[0]
    if isinstance(value, etree._Element):
        return "".join(value.itertext())
    return str(value)


def rawurlencode(context: Any, value: Any) -> str:
    """Percent-encode per RFC 3986, leaving only unreserved characters."""
    return quote(_string_value(value), safe="")


EXTENSIONS = {
    (FUNCTIONS_NS, "rawurlencode"): rawurlencode,
}


def load_xslt_transform(xslt_path: Path, ruleset_id: Optional[str] = None) -> 'etree.XSLT':
    """
    Load an XSLT stylesheet from file.

    Args:
        xslt_path: Path to the XSLT stylesheet file
        ruleset_id: Identifier used in error messages (defaults to the file stem)

    Returns:
        Compiled XSLT transform

    Raises:
        TransformationLoadError: If the file is missing, unreadable or not a
            valid stylesheet
    """
    ruleset_id = ruleset_id or xslt_path.stem

    if not xslt_path.is_file():
        logger.error(f"XSLT stylesheet not found: {xslt_path}")
        raise TransformationLoadError(ruleset_id, f"stylesheet not found: {xslt_path}")

    logger.info(f"Loading XSLT stylesheet: {xslt_path}")
    try:
        parser = etree.XMLParser(resolve_entities=False, no_network=True)
        xslt_doc = etree.parse(str(xslt_path), parser)
        transform = etree.XSLT(
            xslt_doc,
            extensions=EXTENSIONS,
            access_control=etree.XSLTAccessControl.DENY_WRITE,
        )
    except (OSError, etree.XMLSyntaxError, etree.XSLTParseError) as e:
        logger.error(f"Failed to load XSLT stylesheet {xslt_path}: {e}")
        raise TransformationLoadError(ruleset_id, str(e)) from e

    logger.info("XSLT stylesheet loaded successfully")
    return transform


class RulesetLoader:
    """
    Resolves ruleset identifiers to compiled stylesheets.

    Compiled stylesheets are cached per thread; an ``etree.XSLT`` object is
    never shared between threads.

    Example:
        loader = RulesetLoader(Path("data/xsl"))
        transform = loader.load("to-html")
    """

    def __init__(self, ruleset_dir: Path, suffix: str = ".xsl", cache: bool = True):
        self.ruleset_dir = Path(ruleset_dir)
        self.suffix = suffix
        self.cache = cache
        self._local = threading.local()

    def path_for(self, ruleset_id: str) -> Path:
        """
        Return the stylesheet path for an identifier.

        Raises:
            TransformationLoadError: If the identifier is not a plain name
        """
        if not ruleset_id or "/" in ruleset_id or "\\" in ruleset_id or ruleset_id.startswith("."):
            raise TransformationLoadError(ruleset_id, "invalid ruleset identifier")
        return self.ruleset_dir / f"{ruleset_id}{self.suffix}"

    def _cache(self) -> Dict[str, 'etree.XSLT']:
        transforms = getattr(self._local, "transforms", None)
        if transforms is None:
            transforms = self._local.transforms = {}
        return transforms

    def load(self, ruleset_id: str) -> 'etree.XSLT':
        """Load (or fetch from this thread's cache) a compiled ruleset."""
        if self.cache:
            transforms = self._cache()
            if ruleset_id in transforms:
                return transforms[ruleset_id]

        transform = load_xslt_transform(self.path_for(ruleset_id), ruleset_id)

        if self.cache:
            self._cache()[ruleset_id] = transform
        return transform

    def clear(self) -> None:
        """Drop this thread's compiled stylesheets."""
        self._cache().clear()

    def available(self) -> List[str]:
        """Identifiers of all rulesets found in the ruleset directory."""
        if not self.ruleset_dir.is_dir():
            return []
        return sorted(p.stem for p in self.ruleset_dir.glob(f"*{self.suffix}"))
