"""Repository identity used to template expected header content."""

from __future__ import annotations

from dataclasses import dataclass
import json
from pathlib import Path
import re
from typing import Optional

from .constants import COMPOSER_FILENAME

_SLUG_PATTERN = re.compile(r"^([A-Za-z0-9][A-Za-z0-9_.-]*)/([A-Za-z0-9][A-Za-z0-9_.-]*)$")


class IdentityError(RuntimeError):
    """Raised when the repository identity cannot be resolved."""


@dataclass(frozen=True)
class RepositoryIdentity:
    """The ``owner/name`` pair identifying the checked project."""

    owner: str
    name: str

    @classmethod
    def parse(cls, value: str) -> "RepositoryIdentity":
        match = _SLUG_PATTERN.match(value.strip())
        if match is None:
            raise IdentityError(f"Repository must look like 'owner/name', got {value!r}")
        return cls(owner=match.group(1), name=match.group(2))

    @property
    def slug(self) -> str:
        return f"{self.owner}/{self.name}"

    def __str__(self) -> str:
        return self.slug


def resolve_repository(root: Path, override: Optional[str] = None) -> RepositoryIdentity:
    """Resolve the identity from an explicit override or the project's composer.json."""
    if override:
        return RepositoryIdentity.parse(override)

    composer_file = root / COMPOSER_FILENAME
    if not composer_file.exists():
        raise IdentityError(f"Cannot determine repository: {composer_file} not found")
    try:
        data = json.loads(composer_file.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise IdentityError(f"Failed to read {composer_file}: {exc}") from exc

    name = data.get("name") if isinstance(data, dict) else None
    if not isinstance(name, str) or not name.strip():
        raise IdentityError(f"{composer_file} does not declare a package name")
    return RepositoryIdentity.parse(name)


__all__ = ["IdentityError", "RepositoryIdentity", "resolve_repository"]
