# The ScraperEngine class is the main orchestrator of the scraping process.
# It walks degrees, years and courses in order and hands the results to the writer.
import logging
from pathlib import Path

from rich.progress import Progress, MofNCompleteColumn

from coursedesc.assembler import assemble_degree
from coursedesc.config import WILDCARD
from coursedesc.errors import (
    ConfigurationError,
    HTTPStatusError,
    MissingLinkError,
    NetworkError,
    ParseError,
    ValidationError,
)
from coursedesc.logging_setup import console
from coursedesc.models import (
    CourseEntry,
    ResolvedDegree,
    SeedRecord,
    StageFailure,
    TeachingDescription,
    YearReport,
)
from coursedesc.providers.base_provider import BaseProvider
from coursedesc.translations import translate_description
from coursedesc.writer import DocumentWriter

logger = logging.getLogger(__name__)

# Errors that skip a single course or year; anything else stops the run
SOFT_ERRORS = (MissingLinkError, NetworkError, HTTPStatusError, ParseError)


class ScraperEngine:
    """
    The ScraperEngine is responsible for orchestrating the scraping process.
    It takes a provider and a writer: the provider knows the catalog, the writer the output directory.
    """
    def __init__(self, provider: BaseProvider, writer: DocumentWriter, show_progress: bool = True):
        self.provider = provider
        self.writer = writer
        self.show_progress = show_progress
        # Every skipped course or year of the run, in the order it happened
        self.failures: list[StageFailure] = []

    def check_configuration(self) -> None:
        if self.provider.settings.markers.wildcard is None:
            raise ConfigurationError(f"Marker table has no '{WILDCARD}' entry")

    def run(self, seeds: list[SeedRecord]) -> Path:
        """
        The main method of the engine.
        1. It resolves each seed into a degree, discovering its yearly structure pages.
        2. It scrapes every course of every year and renders one document per year.
        3. It writes the documents as it goes, and the index once all degrees are done.
        """
        self.check_configuration()
        self.writer.prepare()

        with Progress(*Progress.get_default_columns(), MofNCompleteColumn(), console=console, disable=not self.show_progress) as progress:
            task = progress.add_task("[green]Scraping degrees...", total=len(seeds))
            for seed in seeds:
                degree = self.resolve(seed)
                if degree is not None:
                    reports = self.analyze_degree(degree)
                    self.writer.write_degree(degree, assemble_degree(degree, reports))
                progress.update(task, advance=1)

        if self.failures:
            logger.warning("%d courses or years were skipped", len(self.failures))
        return self.writer.write_index()

    def resolve(self, seed: SeedRecord) -> ResolvedDegree | None:
        try:
            degree = self.provider.resolve_degree(seed)
        except ValidationError as error:
            logger.warning("Skipping degree: %s", error)
            return None
        self.failures.extend(degree.discovery_failures)
        return degree

    def analyze_degree(self, degree: ResolvedDegree) -> dict[int, YearReport]:
        """
        Scrapes every discovered year of a degree. Years whose structure page cannot be
        read are left out of the result.
        """
        reports: dict[int, YearReport] = {}
        for year in sorted(degree.year_urls):
            url = degree.year_urls[year]
            try:
                reports[year] = self.analyze_year(degree, year, url)
            except SOFT_ERRORS as error:
                logger.error("Cannot analyse %s (%s) at %s: %s", degree.slug, year, url, error)
                self.failures.append(StageFailure.from_error(error, degree.slug, year))
        return reports

    def analyze_year(self, degree: ResolvedDegree, year: int, url: str) -> YearReport:
        logger.info("Analysing %s link: %s", year, url)
        entries = self.provider.fetch_course_entries(degree, year, url)

        report = YearReport(year=year, structure_url=url)
        for entry in entries:
            outcome = self.process_course(entry)
            if isinstance(outcome, StageFailure):
                report.failures.append(outcome)
                self.failures.append(outcome)
            else:
                report.descriptions.append(outcome)
        return report

    def process_course(self, entry: CourseEntry) -> TeachingDescription | StageFailure:
        logger.info("Visiting %s", entry.name)
        try:
            english_url = self.provider.resolve_english_url(entry)
            description = self.provider.fetch_description(entry, english_url)
        except SOFT_ERRORS as error:
            logger.warning("Cannot get description of '%s' (%s, %s): %s", entry.name, entry.degree_slug, entry.year, error)
            return StageFailure.from_error(error, entry.degree_slug, entry.year, entry.name)
        return translate_description(description, self.provider.settings.translations)
