from coursedesc.config import Settings
from coursedesc.models import CourseEntry, ResolvedDegree, SeedRecord, TeachingDescription
from coursedesc.errors import NetworkError, HTTPStatusError
from abc import ABC, abstractmethod
import logging
import requests
from bs4 import BeautifulSoup
from bs4.builder import ParserRejectedMarkup

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """
        Every course catalog !! MUST !! follow this 'standard'.
        The engine only talks to a catalog through these methods, each of the
        fetch_* methods downloads a page and hands it to the matching parse_*
        method, which exists on its own so that parsing can be tested offline.
    """

    """
        Name specific to this catalog, used as key in the provider registry.
        Current standard is the full university name with underscores in place of spaces, fully lowercase
    """
    catalog_name: str | None = None

    def __init__(self, settings: Settings | None = None, session: requests.Session | None = None) -> None:
        self.settings = settings or Settings()
        # No retry adapter is mounted: a failed request is reported once and the item is skipped
        self.session = session or requests.Session()

    def __init_subclass__(cls, **kwargs) -> None:
        """
        This is called whenever a child class is defined and checks whether we have
        a catalog_name defined for identification or not
        """
        super().__init_subclass__(**kwargs)

        if not cls.catalog_name:
            raise TypeError(
                f"Class '{cls.__name__}' cannot be defined without a 'catalog_name'. "
                f"Please set a unique string name for use within the program (e.g., catalog_name = 'university_of_bologna')."
            )

    def _request(self, method: str, url: str, *, allow_redirects: bool = True, **kwargs) -> requests.Response:
        """
        Internal helper to make HTTP requests with consistent error handling.
        Providers should prefer using `_get` due to its consistent error handling.
        """
        try:
            response = self.session.request(method=method, url=url, timeout=self.settings.timeout, allow_redirects=allow_redirects, **kwargs)
            response.raise_for_status()
            return response
        except requests.exceptions.Timeout as error:
            raise NetworkError(f"Timeout during {method.upper()} {url}") from error
        except requests.exceptions.ConnectionError as error:
            raise NetworkError(f"Connection error during {method.upper()} {url}") from error
        except requests.exceptions.HTTPError as error:
            status = getattr(error.response, "status_code", None)
            raise HTTPStatusError(status_code=status, url=url) from error
        except requests.exceptions.RequestException as error:
            raise NetworkError(f"Request failed during {method.upper()} {url}: {error}") from error

    def _get(self, url: str, *, params: dict | None = None, headers: dict | None = None) -> requests.Response:
        logger.debug("GET %s", url)
        return self._request("GET", url, params=params, headers=headers)

    @staticmethod
    def _soup(html_content: str) -> BeautifulSoup:
        try:
            return BeautifulSoup(html_content, 'lxml')
        # This should never happen, but just in case lxml fails for some reason
        except ParserRejectedMarkup:
            return BeautifulSoup(html_content, 'html.parser')

    @abstractmethod
    def resolve_degree(self, seed: SeedRecord) -> ResolvedDegree:
        """
            Validates a seed record, infers the degree level and slug and discovers
            the structure page URL of every scraped year.
        """
        raise NotImplementedError

    @abstractmethod
    def fetch_course_entries(self, degree: ResolvedDegree, year: int, url: str) -> list[CourseEntry]:
        """
            Downloads a structure page and returns its course rows in page order.
        """
        raise NotImplementedError

    @abstractmethod
    def resolve_english_url(self, entry: CourseEntry) -> str:
        """
            Follows the detail link of a course and returns the URL of its English page.
        """
        raise NotImplementedError

    @abstractmethod
    def fetch_description(self, entry: CourseEntry, url: str) -> TeachingDescription:
        """
            Downloads an English teaching page and extracts its description.
        """
        raise NotImplementedError
