import argparse
import logging
from pathlib import Path

import questionary

from coursedesc.config import Settings
from coursedesc.engine import ScraperEngine
from coursedesc.errors import FATAL_ERRORS, ScraperError
from coursedesc.logging_setup import console, setup_logging
from coursedesc.models import SeedRecord
from coursedesc.providers import get_provider_class
from coursedesc.seeds import load_seeds
from coursedesc.writer import DocumentWriter

logger = logging.getLogger("coursedesc")

DEFAULT_CATALOG = "university_of_bologna"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be a positive integer, got {value}")
    return number


def positive_float(value: str) -> float:
    number = float(value)
    if not number > 0:
        raise argparse.ArgumentTypeError(f"must be a positive number of seconds, got {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    defaults = Settings()
    p = argparse.ArgumentParser(prog="coursedesc", description="Merge the course descriptions of some UNIBO degrees into AsciiDoc documents")
    p.add_argument("--seeds", type=Path, default=defaults.seed_path, help="JSON file listing the degrees to scrape")
    p.add_argument("--output", "-o", type=Path, default=defaults.output_dir, help="Directory receiving the generated documents")
    p.add_argument("--years", type=positive_int, default=defaults.years_per_degree, help="Number of enrollment years scraped per degree")
    p.add_argument("--timeout", type=positive_float, default=None, help="Seconds before a request is given up (default: no timeout)")
    p.add_argument("--catalog", default=DEFAULT_CATALOG, help="Catalog provider to scrape")
    p.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=None, help="Logging level (default: $COURSEDESC_LOG or INFO)")
    p.add_argument("--pick", action="store_true", help="Choose the degrees to scrape interactively")
    p.add_argument("--no-progress", action="store_true", help="Hide the progress bar")
    return p


def pick_seeds(seeds: list[SeedRecord]) -> list[SeedRecord]:
    choices = [questionary.Choice(title=seed.name or seed.id, value=seed, checked=True) for seed in seeds]
    picked = questionary.checkbox("Select the degrees to scrape", choices=choices).ask()
    # None when the prompt is cancelled
    return picked or []


def run(args: argparse.Namespace) -> Path:
    settings = Settings(
        seed_path=args.seeds,
        output_dir=args.output,
        years_per_degree=args.years,
        timeout=args.timeout,
    )

    ProviderClass = get_provider_class(args.catalog)
    if not ProviderClass:
        raise ScraperError(f"Provider {args.catalog} not found.")

    seeds = load_seeds(settings.seed_path)
    if args.pick:
        seeds = pick_seeds(seeds)
    logger.info("Scraping %d degrees", len(seeds))

    writer = DocumentWriter(settings.output_dir, settings.index_title, settings.documentation_url)
    engine = ScraperEngine(ProviderClass(settings), writer, show_progress=not args.no_progress)
    return engine.run(seeds)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        index = run(args)
    # Seed file, configuration or output directory problems
    except FATAL_ERRORS as error:
        console.print(f"Fatal error: {error}", style="bold red")
        raise SystemExit(1)
    except ScraperError as error:
        console.print(f"Scraper error: {error}", style="bold red")
        raise SystemExit(1)

    console.print(f"Index written to {index}", style="green")


if __name__ == "__main__":
    main()
