from functools import reduce

from coursedesc.config import TranslationRule, TranslationTable
from coursedesc.models import TeachingDescription

PARAGRAPH_SEPARATOR = "\n\n"


def _replace(text: str, rule: TranslationRule) -> str:
    return text.replace(rule.match, rule.replacement)


def apply_translations(text: str, table: TranslationTable) -> str:
    # Order matters: every rule sees the output of the rules before it
    return reduce(_replace, table.rules, text)


def translate_description(description: TeachingDescription, table: TranslationTable) -> TeachingDescription:
    """
    Fixes both the title and the body of a teaching description. The body is folded
    as one text, so a rule may span a paragraph break.
    """
    body = apply_translations(description.body, table)
    return description.model_copy(update={
        "title": apply_translations(description.title, table),
        "paragraphs": [p for p in body.split(PARAGRAPH_SEPARATOR) if p],
    })
