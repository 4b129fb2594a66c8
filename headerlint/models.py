"""Core data models shared across headerlint components."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple


class TokenKind(str, Enum):
    """Lexical categories produced by the tokenizer."""

    INLINE_HTML = "inline_html"
    OPEN_TAG = "open_tag"
    CLOSE_TAG = "close_tag"
    WHITESPACE = "whitespace"
    COMMENT = "comment"
    DOC_COMMENT_OPEN_TAG = "doc_comment_open_tag"
    DOC_COMMENT_CLOSE_TAG = "doc_comment_close_tag"
    DOC_COMMENT_STAR = "doc_comment_star"
    DOC_COMMENT_WHITESPACE = "doc_comment_whitespace"
    DOC_COMMENT_TAG = "doc_comment_tag"
    DOC_COMMENT_STRING = "doc_comment_string"
    CLASS = "class"
    INTERFACE = "interface"
    TRAIT = "trait"
    FUNCTION = "function"
    CLOSURE = "closure"
    PUBLIC = "public"
    PRIVATE = "private"
    PROTECTED = "protected"
    FINAL = "final"
    STATIC = "static"
    ABSTRACT = "abstract"
    CONST = "const"
    VAR = "var"
    INCLUDE = "include"
    INCLUDE_ONCE = "include_once"
    REQUIRE = "require"
    REQUIRE_ONCE = "require_once"
    NAMESPACE = "namespace"
    USE = "use"
    DECLARE = "declare"
    STRING = "string"
    CONSTANT_STRING = "constant_string"
    VARIABLE = "variable"
    NUMBER = "number"
    OTHER = "other"


@dataclass(frozen=True)
class Token:
    """Single lexical unit; doc comment openers carry their block index."""

    kind: TokenKind
    content: str
    line: int
    column: int
    comment_closer: Optional[int] = None
    comment_tags: Tuple[int, ...] = ()


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"


class EditMode(str, Enum):
    REPLACE = "replace"
    APPEND = "append"


@dataclass(frozen=True)
class Edit:
    """Proposed text change anchored to exactly one token."""

    token: int
    text: str
    mode: EditMode = EditMode.REPLACE

    @classmethod
    def replace(cls, token: int, text: str) -> "Edit":
        return cls(token=token, text=text, mode=EditMode.REPLACE)

    @classmethod
    def newline_after(cls, token: int, eol: str = "\n") -> "Edit":
        return cls(token=token, text=eol, mode=EditMode.APPEND)


@dataclass
class Diagnostic:
    """Problem reported by a rule against a token of the checked file."""

    severity: Severity
    message: str
    code: str
    token: int
    line: int
    column: int
    fixable: bool = False
    edits: Tuple[Edit, ...] = ()
    fixed: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            "severity": self.severity.value,
            "message": self.message,
            "code": self.code,
            "line": self.line,
            "column": self.column,
            "fixable": self.fixable,
            "fixed": self.fixed,
        }


class HeaderStatus(str, Enum):
    """Outcome of locating the file-level header block."""

    SKIPPED = "skipped"
    WRONG_STYLE = "wrong_style"
    MISSING = "missing"
    VALID = "valid"


@dataclass
class FileReport:
    """Aggregated result of checking (and optionally fixing) one file."""

    path: str
    status: Optional[HeaderStatus] = None
    diagnostics: List[Diagnostic] = field(default_factory=list)
    metrics: Dict[str, str] = field(default_factory=dict)
    original: str = ""
    fixed: Optional[str] = None
    diff: str = ""
    fix_count: int = 0
    skipped: bool = False
    # Copyright years whose licensing files a fix asked to regenerate.
    license_years: Optional[Tuple[int, int]] = None

    @property
    def errors(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.ERROR]

    @property
    def warnings(self) -> List[Diagnostic]:
        return [d for d in self.diagnostics if d.severity is Severity.WARNING]

    @property
    def changed(self) -> bool:
        return self.fixed is not None and self.fixed != self.original

    def to_dict(self) -> Dict[str, object]:
        return {
            "path": self.path,
            "status": self.status.value if self.status else None,
            "skipped": self.skipped,
            "errors": len(self.errors),
            "warnings": len(self.warnings),
            "metrics": dict(self.metrics),
            "diagnostics": [d.to_dict() for d in self.diagnostics],
            "changed": self.changed,
            "fix_count": self.fix_count,
        }
