"""Token-level text patching for fixable diagnostics."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence

from .logging import get_logger
from .models import Edit, EditMode, Token


class FixerError(RuntimeError):
    """Raised when repeated fix passes fail to converge."""


class Fixer:
    """Collects edits for one pass over a token stream.

    When disabled the fixer only answers ``False`` to every request, which is
    how report-only runs compute the same diagnostics as fixing runs. Each
    token can be changed at most once per pass; a request touching an already
    changed token is rejected as a whole and left for the next pass.
    """

    def __init__(self, *, enabled: bool = False) -> None:
        self.enabled = enabled
        self._tokens: Sequence[Token] = ()
        self._changes: Dict[int, str] = {}
        self._applied = 0
        self.logger = get_logger("fixer")

    def start(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        self._changes = {}
        self._applied = 0

    @property
    def applied(self) -> int:
        return self._applied

    @property
    def changed(self) -> bool:
        return bool(self._changes)

    def apply(self, edits: Iterable[Edit]) -> bool:
        if not self.enabled:
            return False
        pending: List[Edit] = list(edits)
        if not pending:
            return False
        conflicts = [edit.token for edit in pending if edit.token in self._changes]
        if conflicts:
            self.logger.debug("Deferring edits on already changed tokens %s", conflicts)
            return False
        for edit in pending:
            current = self._tokens[edit.token].content
            if edit.mode is EditMode.APPEND:
                self._changes[edit.token] = current + edit.text
            else:
                self._changes[edit.token] = edit.text
        self._applied += 1
        return True

    def get_contents(self) -> str:
        return "".join(
            self._changes.get(index, token.content) for index, token in enumerate(self._tokens)
        )


__all__ = ["Fixer", "FixerError"]
