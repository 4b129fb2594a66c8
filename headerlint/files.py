"""Checked-file wrapper exposing the token stream and the reporting sink."""

from __future__ import annotations

from typing import Collection, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from .fixer import Fixer
from .models import Diagnostic, Edit, HeaderStatus, Severity, Token, TokenKind
from .tokenizer import tokenize

KindFilter = Union[TokenKind, Collection[TokenKind]]


class SourceFile:
    """One file under check: tokens, diagnostics, metrics, and its fixer."""

    def __init__(self, path: str, content: str, *, fixer: Fixer | None = None) -> None:
        self.path = path
        self.content = content
        self.tokens: List[Token] = tokenize(content)
        self.fixer = fixer or Fixer()
        self.fixer.start(self.tokens)
        self.diagnostics: List[Diagnostic] = []
        self.metrics: Dict[str, str] = {}
        self.eol_char = _detect_eol(content)
        self.header_status: Optional[HeaderStatus] = None
        self.active_rule: Optional[str] = None
        self.license_years: Optional[Tuple[int, int]] = None

    @property
    def num_tokens(self) -> int:
        return len(self.tokens)

    def find_next(
        self,
        kinds: KindFilter,
        start: int,
        end: Optional[int] = None,
        *,
        exclude: bool = False,
    ) -> Optional[int]:
        """Return the first index in ``[start, end)`` matching ``kinds``.

        With ``exclude`` the search returns the first token whose kind is *not*
        in ``kinds``.
        """
        wanted = {kinds} if isinstance(kinds, TokenKind) else set(kinds)
        stop = self.num_tokens if end is None else min(end, self.num_tokens)
        for index in range(max(start, 0), stop):
            if (self.tokens[index].kind in wanted) != exclude:
                return index
        return None

    def add_error(
        self, message: str, ptr: int, code: str, data: Sequence[object] = ()
    ) -> Diagnostic:
        return self._add(Severity.ERROR, message, ptr, code, data)

    def add_warning(
        self, message: str, ptr: int, code: str, data: Sequence[object] = ()
    ) -> Diagnostic:
        return self._add(Severity.WARNING, message, ptr, code, data)

    def add_fixable_error(
        self,
        message: str,
        ptr: int,
        code: str,
        data: Sequence[object] = (),
        *,
        edits: Iterable[Edit],
    ) -> bool:
        """Report a fixable error; return True when the fixer applied its edits."""
        diagnostic = self._add(
            Severity.ERROR, message, ptr, code, data, fixable=True, edits=tuple(edits)
        )
        diagnostic.fixed = self.fixer.apply(diagnostic.edits)
        return diagnostic.fixed

    def record_metric(self, ptr: int, name: str, value: str) -> None:
        self.metrics[name] = value

    def request_license_files(self, first_year: int, last_year: int) -> None:
        """Ask the runner to regenerate the licensing files once the fix is kept."""
        self.license_years = (first_year, last_year)

    def _add(
        self,
        severity: Severity,
        message: str,
        ptr: int,
        code: str,
        data: Sequence[object],
        *,
        fixable: bool = False,
        edits: tuple[Edit, ...] = (),
    ) -> Diagnostic:
        token = self.tokens[ptr]
        diagnostic = Diagnostic(
            severity=severity,
            message=message % tuple(data) if data else message,
            code=f"{self.active_rule}.{code}" if self.active_rule else code,
            token=ptr,
            line=token.line,
            column=token.column,
            fixable=fixable,
            edits=edits,
        )
        self.diagnostics.append(diagnostic)
        return diagnostic


def _detect_eol(content: str) -> str:
    """Line ending of the first line; files without one default to ``\\n``."""
    newline = content.find("\n")
    if newline > 0 and content[newline - 1] == "\r":
        return "\r\n"
    return "\n"


__all__ = ["SourceFile"]
