"""
Writes the generated documents and the index to the output directory.

Any failure here is fatal: a partially written output directory is not worth publishing.
"""
import logging
from pathlib import Path

from coursedesc.assembler import document_key, link_footer
from coursedesc.errors import OutputError
from coursedesc.models import ResolvedDegree

logger = logging.getLogger(__name__)

INDEX_FILE = "index.adoc"


class DocumentWriter:
    def __init__(self, output_dir: Path, title: str, documentation_url: str) -> None:
        self.output_dir = Path(output_dir)
        self.title = title
        self.documentation_url = documentation_url
        # (degree name, degree slug, year) for every written document, in writing order
        self.entries: list[tuple[str, str, int]] = []

    def prepare(self) -> None:
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise OutputError(f"Output dir creation: {error}") from error

    def _write(self, path: Path, content: str) -> None:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as error:
            raise OutputError(f"Could not write {path}: {error}") from error
        logger.debug("Wrote %s", path)

    def write_degree(self, degree: ResolvedDegree, documents: dict[int, str]) -> list[Path]:
        written: list[Path] = []
        for year, content in documents.items():
            path = self.output_dir / f"{document_key(degree.slug, year)}.adoc"
            self._write(path, content)
            self.entries.append((degree.name, degree.slug, year))
            written.append(path)
        return written

    def render_index(self) -> str:
        lines = [f"= {self.title}", "", f"{self.documentation_url}[Documentation]"]
        for name, slug, year in self.entries:
            lines += ["", f"== {name} ({year})", "", link_footer(document_key(slug, year))]
        return "\n".join(lines) + "\n"

    def write_index(self) -> Path:
        path = self.output_dir / INDEX_FILE
        self._write(path, self.render_index())
        logger.info("Wrote index with %d documents to %s", len(self.entries), path)
        return path
