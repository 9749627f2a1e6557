"""
This module defines the data structures (pydantic models) passed between the scraping
stages, from the seed record of a degree down to the description of a single teaching.
"""
from enum import Enum

from pydantic import BaseModel, Field

from coursedesc.errors import ScraperError


class DegreeLevel(str, Enum):
    """
    The level of a degree, valued with the path segment corsi.unibo.it uses for it
    """
    BACHELOR = "laurea"
    MASTER = "magistrale"


class SeedRecord(BaseModel):
    """
    A degree as listed in the seed file. Fields may be empty here, empty records
    are rejected before any network activity happens.
    """
    # Kebab-case name used internally to refer to the degree, also used in output file names
    id: str
    # Human-readable name of the degree
    name: str
    # Code used by the university for the degree, usually in the format 1234/567
    code: str


class ResolvedDegree(BaseModel):
    """
    The degree metadata needed for scraping. Part of it changes yearly, so it is
    computed on every run and never stored.
    """
    name: str
    slug: str
    level: DegreeLevel
    site_slug: str
    # Key is the calendar year in which the academic year opened, value is the structure page URL.
    # Years that could not be discovered are simply missing.
    year_urls: dict[int, str] = Field(default_factory=dict)
    # Why each missing year could not be discovered
    discovery_failures: list["StageFailure"] = Field(default_factory=list)


class CourseEntry(BaseModel):
    """
    One row of a structure page.
    """
    name: str
    link: str | None
    degree_slug: str
    year: int


class TeachingDescription(BaseModel):
    """
    The part of an English teaching page that ends up in the generated documents.
    """
    title: str
    url: str
    paragraphs: list[str]
    degree_slug: str
    year: int

    @property
    def body(self) -> str:
        return "\n\n".join(self.paragraphs)


class FailureReason(str, Enum):
    MISSING_LINK = "missing_link"
    NETWORK = "network"
    HTTP_STATUS = "http_status"
    PARSE = "parse"
    LANGUAGE_LINK = "language_link"


class StageFailure(BaseModel):
    """
    A course (or year) that was skipped, with the reason it was skipped.
    """
    reason: FailureReason
    message: str
    degree_slug: str
    year: int | None = None
    course: str | None = None

    @classmethod
    def from_error(cls, error: ScraperError, degree_slug: str, year: int | None = None, course: str | None = None) -> "StageFailure":
        return cls(
            reason=FailureReason(error.reason),
            message=str(error),
            degree_slug=degree_slug,
            year=year,
            course=course,
        )


class YearReport(BaseModel):
    """
    Everything collected for one (degree, year) pair whose structure page could be read.
    """
    year: int
    structure_url: str
    descriptions: list[TeachingDescription] = Field(default_factory=list)
    failures: list[StageFailure] = Field(default_factory=list)


# ResolvedDegree refers to StageFailure, defined after it
ResolvedDegree.model_rebuild()
