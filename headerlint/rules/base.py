"""Base classes for header rule plugins."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Sequence, Tuple

from ..constants import DEFAULT_SKIP_FILES
from ..models import TokenKind

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from ..files import SourceFile
    from ..identity import RepositoryIdentity


@dataclass(frozen=True)
class RuleContext:
    """Run-wide, read-only inputs shared by every rule instance."""

    repository: "RepositoryIdentity"
    skip_files: Tuple[str, ...] = DEFAULT_SKIP_FILES


class Rule(ABC):
    """Contract for rules that inspect a file's token stream."""

    name: str = ""

    @abstractmethod
    def register(self) -> Sequence[TokenKind]:
        """Return the token kinds this rule wants to be called for."""

    @abstractmethod
    def process(self, file: "SourceFile", ptr: int) -> Optional[int]:
        """Inspect the file at ``ptr``.

        The returned index, when given, suppresses further calls for this file
        until that token is reached; anything past the last token ends the
        rule's work on the file.
        """
