"""
Pipeline Tests

End-to-end named conversions: convert, then validate per catalog entry.

Run with: pytest tests/test_pipeline.py -v
"""

import inspect
import re
from typing import get_type_hints

import pytest
from lxml import etree

from jats_core import (
    ConversionEngine,
    ConversionOutcome,
    DoctypeMismatchError,
    GrammarLoadError,
    OutcomeStatus,
    Pipeline,
    TransformationExecutionError,
    UnknownConversionError,
    ValidationError,
    parse_html,
)
from jats_core.catalog import TIMESTAMP_PARAM
from jats_core.xml import Document

CROSSREF_NS = "http://www.crossref.org/schema/4.3.3"
DATACITE_NS = "http://datacite.org/schema/kernel-2.2"
RDF_NS = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"


def crossref(tag):
    return f"{{{CROSSREF_NS}}}{tag}"


class TestPresentationHtml:
    """Tests for to-presentation-html and from-presentation-html."""

    def test_to_html(self, pipeline, article):
        html = pipeline.to_presentation_html(article, {"publication-type": "article"})
        assert html.getroot().find(".//article").get("class") == "article"

    def test_round_trip(self, pipeline, article):
        """HTML converted back should keep title, DOI, authors and references."""
        html = pipeline.to_presentation_html(article)
        restored = pipeline.from_presentation_html(html).getroot()

        meta = restored.find("front/article-meta")
        assert meta.findtext("article-id[@pub-id-type='doi']") == "10.7717/peerj.1"
        assert meta.findtext("title-group/article-title").strip() == "Sea otters and the recovery of kelp forests"
        assert [s.text for s in meta.findall("contrib-group/contrib/name/surname")] == ["Smith", "Doe"]

        xref = restored.find("body/sec/p/xref")
        assert xref.get("rid") == "ref-1"
        assert xref.get("ref-type") == "bibr"
        assert restored.find("back/ref-list/ref").get("id") == "ref-1"

    def test_from_parsed_html(self, pipeline):
        """Lenient HTML input should convert too."""
        page = parse_html(
            "<html><head><title>t</title></head><body>"
            "<header><h1>Kelp</h1></header><main><section><h2>Intro</h2><p>Text</p></section></main>"
            "</body></html>"
        )
        restored = pipeline.from_presentation_html(page).getroot()
        assert restored.findtext("front/article-meta/title-group/article-title").strip() == "Kelp"
        assert restored.findtext("body/sec/title") == "Intro"


class TestCorrectionRecord:
    """Tests for generate-correction-record."""

    def test_valid_record(self, pipeline, article):
        correction = pipeline.generate_correction_record(article, {"correction-text": "Figure 2 was mislabelled."})
        root = correction.getroot()

        assert root.get("article-type") == "correction"
        assert root.findtext("body/p").strip() == "Figure 2 was mislabelled."
        related = root.find("front/article-meta/related-article")
        assert related.get("{http://www.w3.org/1999/xlink}href") == "10.7717/peerj.1"

    def test_invalid_record(self, pipeline, article_no_doi):
        """Correction without a DOI should fail DTD validation."""
        with pytest.raises(ValidationError) as exc_info:
            pipeline.generate_correction_record(article_no_doi)
        assert any("related-article" in d.message for d in exc_info.value.diagnostics)

    def test_validation_cannot_be_skipped(self, pipeline, article_no_doi):
        """Mandatory validation should run even when the caller opts out."""
        with pytest.raises(ValidationError):
            pipeline.run("generate-correction-record", article_no_doi, validate=False)

    def test_wrong_doctype(self, pipeline, tmp_path, article):
        """A ruleset declaring another doctype should fail the doctype check."""
        (tmp_path / "to-correction.xsl").write_text(
            '<xsl:stylesheet version="1.0" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">'
            '<xsl:output doctype-public="-//OASIS//DTD DocBook XML V4.5//EN" doctype-system="docbookx.dtd"/>'
            "<xsl:template match='/'><article/></xsl:template>"
            "</xsl:stylesheet>",
            encoding="utf-8",
        )
        custom = Pipeline(ConversionEngine(ruleset_dir=tmp_path), pipeline.validator)

        with pytest.raises(DoctypeMismatchError):
            custom.generate_correction_record(article)


class TestRegistrationDeposit:
    """Tests for generate-registration-deposit."""

    def test_valid_deposit(self, pipeline, article, depositor):
        deposit = pipeline.generate_registration_deposit(article, depositor).getroot()

        assert deposit.tag == crossref("doi_batch")
        assert deposit.findtext(f"{crossref('head')}/{crossref('depositor')}/{crossref('name')}") == "PeerJ Inc."
        doi = deposit.find(f".//{crossref('doi_data')}/{crossref('doi')}")
        assert doi.text == "10.7717/peerj.1"

    def test_timestamp_injected(self, pipeline, article, depositor):
        """Caller timestamp should be replaced by the submission time."""
        params = dict(depositor, **{TIMESTAMP_PARAM: "19990101000000"})
        deposit = pipeline.generate_registration_deposit(article, params).getroot()

        timestamp = deposit.findtext(f"{crossref('head')}/{crossref('timestamp')}")
        assert re.fullmatch(r"[0-9]{14}", timestamp)
        assert timestamp != "19990101000000"
        assert params[TIMESTAMP_PARAM] == "19990101000000"

    def test_missing_doi(self, pipeline, article_no_doi, depositor):
        """Deposit without a DOI should fail schema validation."""
        with pytest.raises(ValidationError) as exc_info:
            pipeline.generate_registration_deposit(article_no_doi, depositor)
        assert exc_info.value.diagnostics

    def test_validation_opt_out(self, pipeline, article_no_doi, depositor):
        """Opting out of validation should return the unvalidated tree."""
        deposit = pipeline.generate_registration_deposit(article_no_doi, depositor, validate=False)
        assert deposit.getroot().find(f".//{crossref('doi')}") is None

    def test_without_schema_catalog(self, engine, article, depositor):
        """Remote schema with network disabled should raise GrammarLoadError."""
        with pytest.raises(GrammarLoadError):
            Pipeline(engine).generate_registration_deposit(article, depositor)


class TestRepositoryAndDirectory:
    """Tests for DataCite and DOAJ records."""

    def test_repository_deposit(self, pipeline, article):
        record = pipeline.generate_repository_deposit(article, {"itemVersion": "2"}).getroot()

        assert record.tag == f"{{{DATACITE_NS}}}resource"
        assert record.findtext(f"{{{DATACITE_NS}}}identifier") == "10.7717/peerj.1"
        assert record.findtext(f"{{{DATACITE_NS}}}version") == "2"

    def test_repository_deposit_without_doi(self, pipeline, article_no_doi):
        with pytest.raises(ValidationError):
            pipeline.generate_repository_deposit(article_no_doi)

    def test_repository_validation_cannot_be_skipped(self, pipeline, article_no_doi):
        """DataCite records should be validated even when the caller opts out."""
        with pytest.raises(ValidationError):
            pipeline.run("generate-repository-deposit", article_no_doi, validate=False)

    def test_directory_validation_cannot_be_skipped(self, pipeline, tmp_path, article):
        """DOAJ records should be validated even when the caller opts out."""
        (tmp_path / "to-directory-record.xsl").write_text(
            '<xsl:stylesheet version="1.0" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">'
            "<xsl:template match='/'><records><record><title/></record></records></xsl:template>"
            "</xsl:stylesheet>",
            encoding="utf-8",
        )
        custom = Pipeline(ConversionEngine(ruleset_dir=tmp_path), pipeline.validator)

        with pytest.raises(ValidationError):
            custom.run("generate-directory-listing-record", article, validate=False)

    def test_directory_record(self, pipeline, article):
        record = pipeline.generate_directory_listing_record(article).getroot()

        assert record.tag == "records"
        assert record.findtext("record/publicationDate") == "2013-02-12"
        assert [a.text for a in record.findall("record/authors/author/name")] == ["Jane Smith", "John Doe"]


class TestCitationAndBibliography:
    """Tests for citation metadata and bibliography entries."""

    def test_citation_tree(self, pipeline, article):
        """Tree citation metadata should be RDF."""
        citation = pipeline.generate_citation_metadata(article)
        assert citation.getroot().tag == f"{{{RDF_NS}}}RDF"

    def test_citation_text(self, pipeline, article):
        """Text citation metadata should be RIS."""
        citation = pipeline.generate_citation_metadata(article, as_text=True)
        assert isinstance(citation, str)
        assert citation.startswith("TY  - JOUR")

    def test_bibliography_entry(self, pipeline, article):
        bibtex = pipeline.generate_bibliography_entry(article)
        assert bibtex.startswith("@article{Smith2013,")


class TestAttempt:
    """Tests for outcome reporting without exceptions."""

    def test_success(self, pipeline, article):
        outcome = pipeline.attempt("generate-bibliography-entry", article)

        assert isinstance(outcome, ConversionOutcome)
        assert outcome.ok
        assert outcome.status == OutcomeStatus.SUCCESS
        assert outcome.result.startswith("@article")
        assert outcome.diagnostics == []

    def test_invalid(self, pipeline, article_no_doi):
        """Validation failures should be INVALID with their diagnostics."""
        outcome = pipeline.attempt("generate-correction-record", article_no_doi)

        assert outcome.status == OutcomeStatus.INVALID
        assert outcome.result is None
        assert outcome.diagnostics
        assert isinstance(outcome.error, ValidationError)

    def test_failed_transformation(self, tmp_path, pipeline, article):
        """Execution errors should be FAILED with their diagnostics."""
        (tmp_path / "to-html.xsl").write_text(
            '<xsl:stylesheet version="1.0" xmlns:xsl="http://www.w3.org/1999/XSL/Transform">'
            "<xsl:template match='/'><xsl:message terminate='yes'>stop</xsl:message></xsl:template>"
            "</xsl:stylesheet>",
            encoding="utf-8",
        )
        custom = Pipeline(ConversionEngine(ruleset_dir=tmp_path), pipeline.validator)

        outcome = custom.attempt("to-presentation-html", article)
        assert outcome.status == OutcomeStatus.FAILED
        assert isinstance(outcome.error, TransformationExecutionError)

    def test_unknown_conversion(self, pipeline, article):
        outcome = pipeline.attempt("to-pdf", article)
        assert outcome.status == OutcomeStatus.FAILED
        assert isinstance(outcome.error, UnknownConversionError)

    def test_run_raises_unknown(self, pipeline, article):
        with pytest.raises(UnknownConversionError):
            pipeline.run("to-pdf", article)


class TestFromConfig:
    """Tests for building a pipeline from configuration."""

    def test_from_config(self, config, article, depositor):
        pipeline = Pipeline.from_config(config)
        deposit = pipeline.generate_registration_deposit(article, depositor)
        assert isinstance(deposit, etree._ElementTree)


class TestWrapperSignatures:
    """Tests for the named convenience methods."""

    @pytest.mark.parametrize("method, expected", [
        ("to_presentation_html", Document),
        ("generate_correction_record", Document),
        ("generate_registration_deposit", Document),
        ("generate_repository_deposit", Document),
        ("generate_directory_listing_record", Document),
        ("generate_bibliography_entry", str),
        ("from_presentation_html", Document),
    ])
    def test_return_annotations(self, method, expected):
        """Each wrapper should declare the shape of what it returns."""
        assert get_type_hints(getattr(Pipeline, method))["return"] is expected

    def test_directory_and_html_take_no_params(self):
        """DOAJ records and HTML import should accept only the document."""
        for method in ("generate_directory_listing_record", "from_presentation_html"):
            assert list(inspect.signature(getattr(Pipeline, method)).parameters) == ["self", "document"]
