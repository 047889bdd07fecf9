"""Pydantic models for Semantic Scholar Graph API responses.

Only the fields asked for with ``fields=`` are present in a response, so
everything except ``paperId`` is optional.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class S2Model(BaseModel):
    """Base for API models: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ExternalIds(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    corpus_id: Optional[int] = Field(default=None, alias="CorpusId")
    arxiv: Optional[str] = Field(default=None, alias="ArXiv")
    mag: Optional[str] = Field(default=None, alias="MAG")
    acl: Optional[str] = Field(default=None, alias="ACL")
    pubmed: Optional[str] = Field(default=None, alias="PubMed")
    pubmed_central: Optional[str] = Field(default=None, alias="PubMedCentral")
    dblp: Optional[str] = Field(default=None, alias="DBLP")
    doi: Optional[str] = Field(default=None, alias="DOI")
    medline: Optional[str] = Field(default=None, alias="Medline")


class AuthorExternalIds(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    orcid: Optional[str] = Field(default=None, alias="ORCID")
    dblp: Optional[list[str] | str] = Field(default=None, alias="DBLP")


class Author(S2Model):
    author_id: Optional[str] = None
    external_ids: Optional[AuthorExternalIds] = None
    url: Optional[str] = None
    name: Optional[str] = None
    affiliations: Optional[list[str]] = None
    homepage: Optional[str] = None
    paper_count: Optional[int] = None
    citation_count: Optional[int] = None
    h_index: Optional[int] = None


class Journal(S2Model):
    name: Optional[str] = None
    volume: Optional[str] = None
    pages: Optional[str] = None


class PublicationVenue(S2Model):
    id: Optional[str] = None
    name: Optional[str] = None
    type: Optional[str] = None
    alternate_names: Optional[list[str]] = None
    url: Optional[str] = None


class OpenAccessPdf(S2Model):
    url: Optional[str] = None
    status: Optional[str] = None
    license: Optional[str] = None
    disclaimer: Optional[str] = None


class S2FieldOfStudy(S2Model):
    category: Optional[str] = None
    source: Optional[str] = None


class CitationStyles(S2Model):
    bibtex: Optional[str] = None


class Embedding(S2Model):
    model: Optional[str] = None
    vector: Optional[list[float]] = None


class Tldr(S2Model):
    model: Optional[str] = None
    text: Optional[str] = None


class Paper(S2Model):
    """A paper record. Nested citations and references use the same shape."""

    # None for references the API could not resolve
    paper_id: Optional[str] = None
    corpus_id: Optional[int] = None
    external_ids: Optional[ExternalIds] = None
    url: Optional[str] = None
    title: Optional[str] = None
    abstract: Optional[str] = None
    venue: Optional[str] = None
    publication_venue: Optional[PublicationVenue] = None
    year: Optional[int] = None
    reference_count: Optional[int] = None
    citation_count: Optional[int] = None
    influential_citation_count: Optional[int] = None
    is_open_access: Optional[bool] = None
    open_access_pdf: Optional[OpenAccessPdf] = None
    # Plain strings so a newly added category does not break parsing
    fields_of_study: Optional[list[str]] = None
    s2_fields_of_study: Optional[list[S2FieldOfStudy]] = Field(
        default=None, alias="s2FieldsOfStudy"
    )
    publication_types: Optional[list[str]] = None
    publication_date: Optional[str] = None
    journal: Optional[Journal] = None
    citation_styles: Optional[CitationStyles] = None
    authors: Optional[list[Author]] = None
    citations: Optional[list["Paper"]] = None
    references: Optional[list["Paper"]] = None
    embedding: Optional[Embedding] = None
    tldr: Optional[Tldr] = None
    text_availability: Optional[str] = None

    @property
    def author_names(self) -> list[str]:
        return [a.name for a in self.authors or [] if a.name]


class AutocompletePaper(S2Model):
    """Minimal match returned by query completion."""

    id: str
    title: str
    # e.g. "Ammar et al., 2018"
    authors_year: str = ""

    @property
    def authors(self) -> str:
        return self.authors_year.split(",")[0].strip()

    @property
    def year(self) -> Optional[int]:
        parts = self.authors_year.split(",")
        if len(parts) < 2:
            return None
        try:
            return int(parts[1].strip())
        except ValueError:
            return None


class PaperSearchResponse(S2Model):
    """One page of relevance-ranked search results."""

    total: int = 0
    offset: int = 0
    next: Optional[int] = None
    data: list[Paper] = Field(default_factory=list)


class PaperBulkSearchResponse(S2Model):
    """One batch of bulk search results; pass ``token`` back for the next."""

    total: int = 0
    token: Optional[str] = None
    data: list[Paper] = Field(default_factory=list)


class MatchedPaper(S2Model):
    """Closest title match and its score."""

    score: float
    paper: Paper
