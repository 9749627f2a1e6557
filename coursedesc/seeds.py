"""
Loads the degrees to scrape from the seed file, a JSON list of {"id", "name", "code"} objects.
"""
from pathlib import Path

import orjson
import pydantic

from coursedesc.errors import SeedError
from coursedesc.models import SeedRecord


def load_seeds(path: Path) -> list[SeedRecord]:
    try:
        raw = Path(path).read_bytes()
    except OSError as error:
        raise SeedError(f"Cannot read seed file {path}: {error}") from error

    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError as error:
        raise SeedError(f"Seed file {path} is not valid JSON: {error}") from error

    if not isinstance(data, list):
        raise SeedError(f"Seed file {path} must contain a list of degrees")

    try:
        return [SeedRecord.model_validate(item) for item in data]
    except pydantic.ValidationError as error:
        raise SeedError(f"Malformed degree in seed file {path}: {error}") from error
