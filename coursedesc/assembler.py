"""
Renders scraped teaching descriptions as AsciiDoc, one document per degree and year.
"""
from coursedesc.models import ResolvedDegree, TeachingDescription, YearReport


def document_key(degree_slug: str, year: int) -> str:
    return f"degree-{degree_slug}-{year}"


def link_footer(key: str) -> str:
    return f"xref:{key}.adoc[web] | link:{key}.pdf[PDF] | link:{key}.adoc[Asciidoc]"


def render_course(description: TeachingDescription) -> str:
    key = document_key(description.degree_slug, description.year)
    return (
        f"\n\n== {description.url}[{description.title}]\n\n"
        f"{link_footer(key)}\n\n"
        f"{description.body}"
    )


def render_year(degree_name: str, report: YearReport) -> str:
    heading = f"= {degree_name} ({report.year})"
    return heading + "".join(render_course(d) for d in report.descriptions) + "\n"


def assemble_degree(degree: ResolvedDegree, reports: dict[int, YearReport]) -> dict[int, str]:
    """
    Returns the rendered document of every reported year, in ascending year order.
    """
    return {year: render_year(degree.name, reports[year]) for year in sorted(reports)}
