"""
Shared fixtures for the jats_core test suite.

Remote grammar locations are mapped to the trimmed-down copies under
tests/fixtures, so no test touches the network.
"""

from pathlib import Path

import pytest

from jats_core import ConversionEngine, Pipeline, Validator, parse_document
from jats_core.config import (
    DIRECTORY_SCHEMA,
    JATS_PUBLISHING_PUBLIC_ID,
    REGISTRATION_SCHEMA,
    REPOSITORY_SCHEMA,
    PipelineConfig,
)
from jats_core.validation import GrammarResolver

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    return FIXTURES


@pytest.fixture
def config():
    """Pipeline config whose catalogs point at the local fixture grammars."""
    config = PipelineConfig()
    config.validation.dtd_catalog = {
        JATS_PUBLISHING_PUBLIC_ID: str(FIXTURES / "jats-correction.dtd"),
    }
    config.validation.schema_catalog = {
        REGISTRATION_SCHEMA: str(FIXTURES / "crossref-deposit.xsd"),
        REPOSITORY_SCHEMA: str(FIXTURES / "datacite-metadata.xsd"),
        DIRECTORY_SCHEMA: str(FIXTURES / "doaj-articles.xsd"),
    }
    return config


@pytest.fixture
def resolver(config):
    return GrammarResolver.from_config(config)


@pytest.fixture
def validator(resolver):
    return Validator(resolver)


@pytest.fixture
def engine(config):
    return ConversionEngine(config=config)


@pytest.fixture
def pipeline(engine, validator):
    return Pipeline(engine, validator)


@pytest.fixture
def article():
    """Complete research article with a DOI."""
    return parse_document(FIXTURES / "article.xml")


@pytest.fixture
def article_no_doi():
    """The same article without an article-id."""
    return parse_document(FIXTURES / "article-no-doi.xml")


@pytest.fixture
def depositor():
    return {"depositorName": "PeerJ Inc.", "depositorEmail": "deposits@example.org"}
