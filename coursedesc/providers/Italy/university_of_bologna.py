from coursedesc.providers.base_provider import BaseProvider
from coursedesc.models import CourseEntry, DegreeLevel, ResolvedDegree, SeedRecord, StageFailure, TeachingDescription
from coursedesc.errors import NetworkError, HTTPStatusError, ParseError, LanguageLinkError, MissingLinkError
from coursedesc.extraction import select_end_marker, slice_description, normalize_paragraphs
from coursedesc.slugs import validate_seed, degree_level, site_slug
from coursedesc.years import current_academic_year, scraping_window
from urllib.parse import urljoin
import html
import logging

logger = logging.getLogger(__name__)

# * Structure pages and teaching pages are served by two different sites (corsi.unibo.it and www.unibo.it),
# * detail links are taken as they are and only joined against the page they come from
# ! Everything here depends on the current markup of the catalog, selectors live in Settings.selectors


class UniversityOfBolognaProvider(BaseProvider):
    catalog_name = "university_of_bologna"

    def probe_url(self, level: DegreeLevel, slug: str, year: int) -> str:
        return f"{self.settings.base_url}/{level.value}/{slug}/insegnamenti?year={year}"

    def resolve_degree(self, seed: SeedRecord, current_year: int | None = None) -> ResolvedDegree:
        validate_seed(seed)
        rules = self.settings.slug_rules
        level = degree_level(seed.name, rules)
        slug = site_slug(seed.name, seed.code, rules)
        year_urls, failures = self.discover_year_urls(level, slug, current_year, degree_slug=seed.id)
        return ResolvedDegree(
            name=seed.name,
            slug=seed.id,
            level=level,
            site_slug=slug,
            year_urls=year_urls,
            discovery_failures=failures,
        )

    def discover_year_urls(self, level: DegreeLevel, slug: str, current_year: int | None = None, degree_slug: str | None = None) -> tuple[dict[int, str], list[StageFailure]]:
        """
        Returns the structure page URL of every year in the scraping window. A year whose
        URL cannot be collected is left out and reported in the returned failures, the
        other years are still probed.
        """
        if current_year is None:
            current_year = current_academic_year()

        year_urls: dict[int, str] = {}
        failures: list[StageFailure] = []
        for year in scraping_window(current_year, self.settings.years_per_degree):
            url = self.probe_url(level, slug, year)
            logger.info("Visiting: %s", url)
            try:
                response = self._get(url)
                href = self.parse_year_link(response.text, url)
            except (NetworkError, HTTPStatusError, ParseError) as error:
                logger.warning("No structure page for %s (%s): %s", slug, year, error)
                failures.append(StageFailure.from_error(error, degree_slug or slug, year))
                continue
            logger.info("Got link: %s", href)
            year_urls[year] = href
        return year_urls, failures

    def parse_year_link(self, html_content: str, page_url: str) -> str:
        soup = self._soup(html_content)
        link = soup.select_one(self.settings.selectors.first_link)
        href = link.get("href") if link is not None else None
        if not href:
            raise ParseError(f"No structure page link found on {page_url}")
        return urljoin(page_url, str(href))

    def fetch_course_entries(self, degree: ResolvedDegree, year: int, url: str) -> list[CourseEntry]:
        response = self._get(url)
        return self.parse_structure_page(response.text, url, degree.slug, year)

    def parse_structure_page(self, html_content: str, page_url: str, degree_slug: str, year: int) -> list[CourseEntry]:
        """
        Returns one entry per title cell of the course table, in page order.
        Cells without a link are kept, the missing link is reported when the course is visited.
        """
        soup = self._soup(html_content)
        entries: list[CourseEntry] = []
        for cell in soup.select(self.settings.selectors.course_title):
            anchor = cell.find("a", recursive=False)
            href = anchor.get("href") if anchor is not None else None
            entries.append(CourseEntry(
                name=cell.get_text().strip(),
                link=urljoin(page_url, str(href)) if href else None,
                degree_slug=degree_slug,
                year=year,
            ))
        return entries

    def resolve_english_url(self, entry: CourseEntry) -> str:
        if not entry.link:
            raise MissingLinkError(f"Missing link: {entry.name}")
        response = self._get(entry.link)
        return self.parse_english_url(response.text)

    def parse_english_url(self, html_content: str) -> str:
        """
        The English link only appears inside the markup of the language selector, so the
        URL is cut from the first "http" up to the closing quote of the attribute.
        """
        soup = self._soup(html_content)
        language_item = soup.select_one(self.settings.selectors.english_version)
        if language_item is None:
            raise LanguageLinkError("Cannot get english url")

        fragment = language_item.decode_contents()
        start = fragment.find("http")
        if start == -1:
            raise LanguageLinkError(f"No URL in english language selector: {fragment!r}")
        tail = fragment[start:]
        end = tail.find('"')
        if end == -1:
            raise LanguageLinkError(f"Unterminated URL in english language selector: {fragment!r}")
        return html.unescape(tail[:end])

    def fetch_description(self, entry: CourseEntry, url: str) -> TeachingDescription:
        response = self._get(url)
        return self.parse_description(response.text, url, entry.degree_slug, entry.year)

    def parse_description(self, html_content: str, url: str, degree_slug: str, year: int) -> TeachingDescription:
        soup = self._soup(html_content)
        selectors = self.settings.selectors

        title_el = soup.select_one(selectors.teaching_title)
        if title_el is None:
            raise ParseError(f"Cannot parse teaching title on {url}")
        description_el = soup.select_one(selectors.teaching_description)
        if description_el is None:
            raise ParseError(f"Cannot parse teaching description on {url}")

        title = title_el.get_text()
        end_marker = select_end_marker(self.settings.markers, title)
        raw = slice_description(description_el.get_text(), end_marker)
        return TeachingDescription(
            title=title.strip(),
            url=url,
            paragraphs=normalize_paragraphs(raw),
            degree_slug=degree_slug,
            year=year,
        )
