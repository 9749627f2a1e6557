import unittest

import requests

from coursedesc.config import MarkerTable, Settings
from coursedesc.errors import (
    ConfigurationError,
    HTTPStatusError,
    LanguageLinkError,
    MissingLinkError,
    NetworkError,
    ParseError,
    ValidationError,
)
from coursedesc.models import CourseEntry, DegreeLevel, FailureReason, SeedRecord
from coursedesc.providers import get_provider_class
from coursedesc.providers.Italy.university_of_bologna import UniversityOfBolognaProvider
from fakes import FakeSession, detail_page, probe_page, structure_page, teaching_page

BASE = "https://corsi.unibo.it"


class TestRegistry(unittest.TestCase):
    def test_provider_is_registered(self) -> None:
        self.assertIs(get_provider_class("university_of_bologna"), UniversityOfBolognaProvider)
        self.assertIsNone(get_provider_class("unknown_university"))


class TestYearDiscovery(unittest.TestCase):
    def test_probe_url(self) -> None:
        provider = UniversityOfBolognaProvider(session=FakeSession({}))
        self.assertEqual(
            provider.probe_url(DegreeLevel.MASTER, "informatica", 2022),
            f"{BASE}/magistrale/informatica/insegnamenti?year=2022",
        )

    def test_failed_years_are_left_out(self) -> None:
        session = FakeSession({
            f"{BASE}/laurea/informatica/insegnamenti?year=2022": probe_page(f"{BASE}/laurea/informatica/piano/2022"),
            f"{BASE}/laurea/informatica/insegnamenti?year=2023": requests.exceptions.ConnectionError("down"),
            f"{BASE}/laurea/informatica/insegnamenti?year=2024": "<html><body><p>No list here</p></body></html>",
        })
        provider = UniversityOfBolognaProvider(session=session)

        urls, failures = provider.discover_year_urls(DegreeLevel.BACHELOR, "informatica", current_year=2026)

        self.assertEqual(urls, {2022: f"{BASE}/laurea/informatica/piano/2022"})
        self.assertEqual(len(session.requested), 3)
        # A failed fetch and a page without the link are told apart
        self.assertEqual([(f.year, f.reason) for f in failures], [(2023, FailureReason.NETWORK), (2024, FailureReason.PARSE)])
        self.assertTrue(all(f.degree_slug == "informatica" and f.course is None for f in failures))

    def test_http_error_skips_year(self) -> None:
        session = FakeSession({f"{BASE}/laurea/informatica/insegnamenti?year=2024": 500})
        provider = UniversityOfBolognaProvider(Settings(years_per_degree=1), session=session)
        urls, failures = provider.discover_year_urls(DegreeLevel.BACHELOR, "informatica", current_year=2026)
        self.assertEqual(urls, {})
        self.assertEqual([f.reason for f in failures], [FailureReason.HTTP_STATUS])

    def test_resolved_degree_carries_discovery_failures(self) -> None:
        session = FakeSession({f"{BASE}/magistrale/informatica/insegnamenti?year=2024": probe_page(f"{BASE}/magistrale/informatica/piano/2024")})
        provider = UniversityOfBolognaProvider(session=session)

        degree = provider.resolve_degree(SeedRecord(id="informatica-magistrale", name="Informatica Magistrale", code="8028/000"), current_year=2026)

        self.assertEqual(degree.year_urls, {2024: f"{BASE}/magistrale/informatica/piano/2024"})
        self.assertEqual([(f.year, f.reason) for f in degree.discovery_failures], [(2022, FailureReason.HTTP_STATUS), (2023, FailureReason.HTTP_STATUS)])
        self.assertTrue(all(f.degree_slug == "informatica-magistrale" for f in degree.discovery_failures))

    def test_invalid_seed_does_not_touch_network(self) -> None:
        session = FakeSession({})
        provider = UniversityOfBolognaProvider(session=session)
        with self.assertRaises(ValidationError):
            provider.resolve_degree(SeedRecord(id="informatica", name="Informatica", code=""), current_year=2026)
        self.assertEqual(session.requested, [])


class TestRequestErrors(unittest.TestCase):
    def test_errors_are_mapped(self) -> None:
        session = FakeSession({
            "https://a.example": requests.exceptions.Timeout(),
            "https://b.example": requests.exceptions.ConnectionError(),
            "https://c.example": 503,
        })
        provider = UniversityOfBolognaProvider(session=session)
        with self.assertRaises(NetworkError):
            provider._get("https://a.example")
        with self.assertRaises(NetworkError):
            provider._get("https://b.example")
        with self.assertRaises(HTTPStatusError) as ctx:
            provider._get("https://c.example")
        self.assertEqual(ctx.exception.status_code, 503)
        self.assertEqual(ctx.exception.url, "https://c.example")


class TestStructurePage(unittest.TestCase):
    def test_cells_in_page_order(self) -> None:
        provider = UniversityOfBolognaProvider(session=FakeSession({}))
        html = structure_page([
            ("ALGORITMI E STRUTTURE DI DATI", "https://www.unibo.it/it/didattica/insegnamenti/insegnamento/2023/1"),
            ("PROVA FINALE", None),
            ("BASI DI DATI", "/it/didattica/insegnamenti/insegnamento/2023/3"),
        ])

        entries = provider.parse_structure_page(html, "https://www.unibo.it/piano", "informatica", 2023)

        self.assertEqual([e.name for e in entries], ["ALGORITMI E STRUTTURE DI DATI", "PROVA FINALE", "BASI DI DATI"])
        self.assertEqual(entries[0].link, "https://www.unibo.it/it/didattica/insegnamenti/insegnamento/2023/1")
        self.assertIsNone(entries[1].link)
        self.assertEqual(entries[2].link, "https://www.unibo.it/it/didattica/insegnamenti/insegnamento/2023/3")
        self.assertTrue(all(e.degree_slug == "informatica" and e.year == 2023 for e in entries))


class TestEnglishUrl(unittest.TestCase):
    def setUp(self) -> None:
        self.provider = UniversityOfBolognaProvider(session=FakeSession({}))

    def test_url_is_cut_from_language_selector(self) -> None:
        url = "https://www.unibo.it/en/study/course-unit/2023/1"
        self.assertEqual(self.provider.parse_english_url(detail_page(url)), url)

    def test_escaped_ampersand_is_decoded(self) -> None:
        html = '<ul><li class="language-en"><a href="https://www.unibo.it/en?a=1&amp;b=2">English</a></li></ul>'
        self.assertEqual(self.provider.parse_english_url(html), "https://www.unibo.it/en?a=1&b=2")

    def test_missing_selector(self) -> None:
        with self.assertRaises(LanguageLinkError):
            self.provider.parse_english_url("<ul><li class='language-it'>Italiano</li></ul>")

    def test_selector_without_url(self) -> None:
        with self.assertRaises(LanguageLinkError):
            self.provider.parse_english_url('<ul><li class="language-en"><a href="/en/page">English</a></li></ul>')

    def test_missing_link_fails_before_network(self) -> None:
        session = FakeSession({})
        provider = UniversityOfBolognaProvider(session=session)
        entry = CourseEntry(name="PROVA FINALE", link=None, degree_slug="informatica", year=2023)
        with self.assertRaises(MissingLinkError):
            provider.resolve_english_url(entry)
        self.assertEqual(session.requested, [])


class TestDescription(unittest.TestCase):
    def setUp(self) -> None:
        self.provider = UniversityOfBolognaProvider(session=FakeSession({}))
        self.url = "https://www.unibo.it/en/study/course-unit/2023/1"

    def test_description_is_sliced_with_wildcard_marker(self) -> None:
        html = teaching_page(
            "Algorithms and Data Structures",
            "\nAcademic Year 2023/2024\nLearning outcomes\n  At the end of the course...\n\nTeaching contents\nSorting.\n\nReadings\nCormen.",
        )

        description = self.provider.parse_description(html, self.url, "informatica", 2023)

        self.assertEqual(description.title, "Algorithms and Data Structures")
        self.assertEqual(description.url, self.url)
        self.assertEqual(
            description.paragraphs,
            ["Learning outcomes", "At the end of the course...", "Teaching contents", "Sorting."],
        )

    def test_title_pattern_selects_its_marker(self) -> None:
        html = teaching_page(
            "History of Informatics and Computer Science",
            "Learning outcomes\nHistory.\n\nOffice hours\nMonday.\n\nReadings\nBooks.",
        )
        description = self.provider.parse_description(html, self.url, "informatica", 2023)
        self.assertEqual(description.paragraphs, ["Learning outcomes", "History."])

    def test_missing_title(self) -> None:
        html = '<html><body><div class="description-text">Learning outcomes</div></body></html>'
        with self.assertRaises(ParseError):
            self.provider.parse_description(html, self.url, "informatica", 2023)

    def test_missing_description(self) -> None:
        html = '<html><body><div id="u-content-intro"><h1>Title</h1></div></body></html>'
        with self.assertRaises(ParseError):
            self.provider.parse_description(html, self.url, "informatica", 2023)

    def test_marker_table_without_wildcard(self) -> None:
        settings = Settings(markers=MarkerTable(entries=(("Numerical Computing", "Teaching"),)))
        provider = UniversityOfBolognaProvider(settings, session=FakeSession({}))
        with self.assertRaises(ConfigurationError):
            provider.parse_description(teaching_page("Algorithms", "Learning outcomes\nx"), self.url, "informatica", 2023)


if __name__ == "__main__":
    unittest.main()
