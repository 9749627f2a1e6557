"""
Turns a seed record into the level and slug used by corsi.unibo.it for the degree.

The site offers no lookup from degree code to URL, so the slug is inferred from the
degree name. Degrees that do not follow the usual naming are listed in SlugRules.
"""
import re

from coursedesc.config import SlugRules
from coursedesc.errors import ValidationError
from coursedesc.models import DegreeLevel, SeedRecord


def validate_seed(seed: SeedRecord) -> SeedRecord:
    """
    Rejects a seed record with any empty field.
    """
    empty = [field for field in ("id", "name", "code") if not getattr(seed, field)]
    if empty:
        raise ValidationError(f"Seed record {seed.model_dump()} has empty field(s): {', '.join(empty)}")
    return seed


def degree_level(name: str, rules: SlugRules) -> DegreeLevel:
    if any(keyword in name for keyword in rules.master_keywords):
        return DegreeLevel.MASTER
    return DegreeLevel.BACHELOR


def site_slug(name: str, code: str, rules: SlugRules) -> str:
    slug = re.sub(rules.removed_pattern, "", name)
    if code not in rules.keep_case_codes:
        slug = slug.lower()
    return slug.replace(" ", "-" if code in rules.kebab_case_codes else "")
