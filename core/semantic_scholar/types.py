"""Identifier and field vocabularies of the Semantic Scholar Graph API."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable


@dataclass(frozen=True)
class PaperId:
    """A paper identifier in any of the schemes the API accepts.

    ``str(paper_id)`` gives the wire form, e.g. ``DOI:10.18653/v1/N18-3011``.
    A plain Semantic Scholar id has no prefix.
    """

    value: str
    prefix: str = ""

    def __str__(self) -> str:
        return f"{self.prefix}:{self.value}" if self.prefix else self.value

    @classmethod
    def s2(cls, paper_id: str) -> "PaperId":
        """Semantic Scholar id, e.g. 649def34f8be52c8b66281af98ae884c09aef38b"""
        return cls(paper_id)

    @classmethod
    def corpus(cls, corpus_id: int) -> "PaperId":
        return cls(str(corpus_id), "CorpusId")

    @classmethod
    def doi(cls, doi: str) -> "PaperId":
        return cls(doi, "DOI")

    @classmethod
    def arxiv(cls, arxiv_id: str) -> "PaperId":
        return cls(arxiv_id, "ARXIV")

    @classmethod
    def mag(cls, mag_id: int) -> "PaperId":
        """Microsoft Academic Graph id."""
        return cls(str(mag_id), "MAG")

    @classmethod
    def acl(cls, acl_id: str) -> "PaperId":
        """ACL Anthology id, e.g. W12-3903"""
        return cls(acl_id, "ACL")

    @classmethod
    def pubmed(cls, pmid: int) -> "PaperId":
        return cls(str(pmid), "PMID")

    @classmethod
    def pubmed_central(cls, pmcid: int) -> "PaperId":
        return cls(str(pmcid), "PMCID")

    @classmethod
    def url(cls, url: str) -> "PaperId":
        """URL of the paper on a site the API recognises (arxiv.org, aclweb.org, ...)."""
        return cls(url, "URL")


class PaperField(str, Enum):
    """Paper fields that can be requested with ``fields=``."""

    CORPUS_ID = "corpusId"
    EXTERNAL_IDS = "externalIds"
    URL = "url"
    TITLE = "title"
    ABSTRACT = "abstract"
    VENUE = "venue"
    PUBLICATION_VENUE = "publicationVenue"
    YEAR = "year"
    REFERENCE_COUNT = "referenceCount"
    CITATION_COUNT = "citationCount"
    INFLUENTIAL_CITATION_COUNT = "influentialCitationCount"
    IS_OPEN_ACCESS = "isOpenAccess"
    OPEN_ACCESS_PDF = "openAccessPdf"
    FIELDS_OF_STUDY = "fieldsOfStudy"
    S2_FIELDS_OF_STUDY = "s2FieldsOfStudy"
    PUBLICATION_TYPES = "publicationTypes"
    PUBLICATION_DATE = "publicationDate"
    JOURNAL = "journal"
    CITATION_STYLES = "citationStyles"
    AUTHORS = "authors"
    CITATIONS = "citations"
    REFERENCES = "references"
    EMBEDDING = "embedding"
    TLDR = "tldr"


# Nested data the bulk endpoint cannot return
BULK_UNSUPPORTED_FIELDS = frozenset(
    {PaperField.CITATIONS, PaperField.REFERENCES, PaperField.EMBEDDING, PaperField.TLDR}
)


class FieldOfStudy(str, Enum):
    COMPUTER_SCIENCE = "Computer Science"
    MEDICINE = "Medicine"
    CHEMISTRY = "Chemistry"
    BIOLOGY = "Biology"
    MATERIALS_SCIENCE = "Materials Science"
    PHYSICS = "Physics"
    GEOLOGY = "Geology"
    PSYCHOLOGY = "Psychology"
    ART = "Art"
    HISTORY = "History"
    GEOGRAPHY = "Geography"
    SOCIOLOGY = "Sociology"
    BUSINESS = "Business"
    POLITICAL_SCIENCE = "Political Science"
    ECONOMICS = "Economics"
    PHILOSOPHY = "Philosophy"
    MATHEMATICS = "Mathematics"
    ENGINEERING = "Engineering"
    ENVIRONMENTAL_SCIENCE = "Environmental Science"
    AGRICULTURAL_AND_FOOD_SCIENCES = "Agricultural and Food Sciences"
    EDUCATION = "Education"
    LAW = "Law"
    LINGUISTICS = "Linguistics"


class PublicationType(str, Enum):
    REVIEW = "Review"
    JOURNAL_ARTICLE = "JournalArticle"
    CASE_REPORT = "CaseReport"
    CLINICAL_TRIAL = "ClinicalTrial"
    CONFERENCE = "Conference"
    DATASET = "Dataset"
    EDITORIAL = "Editorial"
    LETTERS_AND_COMMENTS = "LettersAndComments"
    META_ANALYSIS = "MetaAnalysis"
    NEWS = "News"
    STUDY = "Study"
    BOOK = "Book"
    BOOK_SECTION = "BookSection"


def join_values(values: Iterable[str | Enum]) -> str:
    """Comma-join wire values, dropping repeats but keeping first-seen order."""
    seen: dict[str, None] = {}
    for value in values:
        seen.setdefault(value.value if isinstance(value, Enum) else str(value), None)
    return ",".join(seen)
