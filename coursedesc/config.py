"""
Immutable configuration for a scraping run.

Every lookup table the pipeline depends on (slug exceptions, end markers, missing
translations, CSS selectors) lives here as data, so that supporting a new irregular
degree or teaching page is a change to these tables only.
"""
from collections.abc import Iterable
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

WILDCARD = "*"


class FrozenModel(BaseModel):
    model_config = ConfigDict(frozen=True)


class SlugRules(FrozenModel):
    """
    How a degree name becomes the slug corsi.unibo.it uses in its URLs.
    """
    # Connectors and level words dropped from the degree name
    removed_pattern: str = r"( (e|per il|in) )|Magistrale|Master"
    # Words in a degree name that make it a Master's degree
    master_keywords: tuple[str, ...] = ("Magistrale", "Master")
    # Degree codes whose slug keeps the original casing (CS Engineering is PascalCase)
    keep_case_codes: frozenset[str] = frozenset({"9254/000"})
    # Degree codes whose slug is kebab-case (AI)
    kebab_case_codes: frozenset[str] = frozenset({"9063/000"})


class MarkerTable(FrozenModel):
    """
    Ordered (title substring, end marker) pairs. The WILDCARD pattern holds the
    marker used when no other pattern occurs in the teaching title.
    """
    entries: tuple[tuple[str, str], ...] = (
        ("Numerical Computing", "Teaching"),
        ("History of Informatics", "Office"),
        (WILDCARD, "Readings"),
    )

    @property
    def wildcard(self) -> str | None:
        return next((marker for pattern, marker in self.entries if pattern == WILDCARD), None)


class TranslationRule(FrozenModel):
    match: str
    replacement: str


class TranslationTable(FrozenModel):
    """
    Replacements applied in order, each one to the output of the previous one.
    Teachings whose name is not translated on their English page are fixed here,
    together with the section labels that become subheadings.
    """
    rules: tuple[TranslationRule, ...] = (
        TranslationRule(match="BASI DI DATI", replacement="DATABASES"),
        TranslationRule(
            match="INTRODUZIONE ALL'APPRENDIMENTO AUTOMATICO",
            replacement="Introduction to machine learning",
        ),
        TranslationRule(match="FONDAMENTI DI", replacement=""),
        TranslationRule(match="Learning outcomes", replacement="=== Learning outcomes"),
        TranslationRule(match="Teaching contents", replacement="=== Teaching contents"),
    )

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> "TranslationTable":
        return cls(rules=tuple(TranslationRule(match=m, replacement=r) for m, r in pairs))


class Selectors(FrozenModel):
    """
    CSS selectors for the pages of the catalog. They must match the live site exactly.
    """
    # Title cells of the course table on a structure page
    course_title: str = "td.title"
    # First link of the list on the probe page, pointing at the structure page
    first_link: str = ".no-bullet > li:first-child > a"
    # Language selector entry of a teaching page
    english_version: str = "li.language-en"
    teaching_title: str = "div#u-content-intro > h1"
    teaching_description: str = "div.description-text"


class Settings(FrozenModel):
    base_url: str = "https://corsi.unibo.it"
    seed_path: Path = Path("config/degrees.json")
    output_dir: Path = Path("output")
    # Number of enrollment years scraped for each degree
    years_per_degree: int = Field(default=3, ge=1)
    # None leaves timeouts to requests, which waits indefinitely
    timeout: float | None = Field(default=None, gt=0)
    index_title: str = "Unified Course Descriptions for Some UNIBO Degrees"
    documentation_url: str = (
        "https://cartabinaria.students.cs.unibo.it/en/wiki/web-scraper/course-description-merged/"
    )
    slug_rules: SlugRules = Field(default_factory=SlugRules)
    markers: MarkerTable = Field(default_factory=MarkerTable)
    translations: TranslationTable = Field(default_factory=TranslationTable)
    selectors: Selectors = Field(default_factory=Selectors)
