"""Copyright date detection and regeneration of the licensing files."""

from __future__ import annotations

from pathlib import Path
import re
from typing import Dict, List, Optional, Tuple

from jinja2 import Environment, FileSystemLoader

from .constants import COPYRIGHT_FILENAME, LICENSE_FILENAME
from .identity import RepositoryIdentity
from .logging import get_logger

_YEAR_RANGE = re.compile(r"(?<![\w/.-])(\d{4})(?:\s*[-–]\s*(\d{4}))?(?!\w)")

DateRange = Tuple[Optional[int], Optional[int]]


def detect_date_range(text: str) -> DateRange:
    """Return the first ``YYYY`` or ``YYYY-YYYY`` found in ``text``.

    A single year yields ``(year, year)``; text without a year yields
    ``(None, None)``.
    """
    match = _YEAR_RANGE.search(text)
    if match is None:
        return None, None
    first_year = int(match.group(1))
    last_year = int(match.group(2)) if match.group(2) else first_year
    return first_year, last_year


def format_years(first_year: int, last_year: Optional[int] = None) -> str:
    if last_year is None or last_year == first_year:
        return str(first_year)
    return f"{first_year}-{last_year}"


class LicenseFiles:
    """Renders COPYRIGHT.md and LICENSE.md for a project from Jinja templates."""

    FILENAMES = (COPYRIGHT_FILENAME, LICENSE_FILENAME)

    def __init__(
        self,
        root: Path,
        repository: RepositoryIdentity,
        *,
        holder: str | None = None,
        templates_dir: Path | None = None,
    ) -> None:
        self.root = root
        self.repository = repository
        self.holder = holder or repository.owner
        self.logger = get_logger("licensing")
        self._env = self._create_env(templates_dir)

    def render(self, first_year: int, last_year: Optional[int] = None) -> Dict[str, str]:
        context = {
            "years": format_years(first_year, last_year),
            "first_year": first_year,
            "last_year": last_year if last_year is not None else first_year,
            "holder": self.holder,
            "repository": self.repository.slug,
        }
        return {
            name: self._env.get_template(f"{name}.j2").render(**context)
            for name in self.FILENAMES
        }

    def build(self, first_year: int, last_year: Optional[int] = None) -> List[Path]:
        """Write the rendered licensing files into the project root."""
        written: List[Path] = []
        for name, text in self.render(first_year, last_year).items():
            target = self.root / name
            target.write_text(text, encoding="utf-8")
            written.append(target)
        self.logger.info(
            "Regenerated %s for %s (%s)",
            ", ".join(path.name for path in written),
            self.repository,
            format_years(first_year, last_year),
        )
        return written

    @staticmethod
    def _create_env(templates_dir: Path | None) -> Environment:
        directories = []
        if templates_dir:
            directories.append(str(templates_dir))
        directories.append(str(Path(__file__).with_name("templates")))
        loader = FileSystemLoader(directories)
        return Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )


__all__ = ["DateRange", "LicenseFiles", "detect_date_range", "format_years"]
