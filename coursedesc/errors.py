class ScraperError(Exception):
    """Base exception for all scraper-related errors."""
    # Tag used when a per-course or per-year failure is recorded instead of raised
    reason: str = "scraper"


class ValidationError(ScraperError):
    """Raised when a seed record has an empty field."""
    reason = "validation"


class NetworkError(ScraperError):
    """Raised for connectivity and timeout issues when making HTTP requests."""
    reason = "network"


class HTTPStatusError(ScraperError):
    """Raised when an HTTP request returns an unexpected status code."""
    reason = "http_status"

    def __init__(self, status_code: int | None, url: str, message: str | None = None):
        self.status_code = status_code
        self.url = url
        super().__init__(message or f"HTTP error {status_code} for URL: {url}")


class ParseError(ScraperError):
    """Raised when an expected HTML element is missing from a catalog page."""
    reason = "parse"


class LanguageLinkError(ParseError):
    """Raised when the English version of a teaching page cannot be located."""
    reason = "language_link"


class MissingLinkError(ScraperError):
    """Raised when a course row on a structure page carries no detail link."""
    reason = "missing_link"


class ConfigurationError(ScraperError):
    """Raised when a configuration table is unusable, e.g. a marker table without wildcard."""
    reason = "configuration"


class SeedError(ScraperError):
    """Raised when the seed file cannot be read or does not hold a list of degrees."""
    reason = "seed"


class OutputError(ScraperError):
    """Raised when a generated document or the output directory cannot be written."""
    reason = "output"


# Failures that end the whole run instead of skipping a course or a year
FATAL_ERRORS = (ConfigurationError, SeedError, OutputError)
