"""Tokenizer producing the token stream rules operate on.

Only the parts of the PHP grammar that header checks depend on are modelled:
open/close tags, whitespace, comments, the internals of ``/** */`` doc
comments, and the keywords that introduce declarations. Everything else is
split into coarse tokens so that the concatenated token contents always
reproduce the source exactly.
"""

from __future__ import annotations

from dataclasses import replace
import re
from typing import Dict, List, Optional

from .models import Token, TokenKind

_OPEN_TAG = re.compile(r"<\?php(?:\r\n|[ \t\n\r])?", re.IGNORECASE)
_CLOSE_TAG = re.compile(r"\?>(?:\r\n|\n)?")
_WHITESPACE = re.compile(r"[ \t\r\n\f\v]+")
_LINE_COMMENT = re.compile(r"(?://|#(?!\[))[^\r\n?]*(?:\?(?!>)[^\r\n?]*)*")
_BLOCK_COMMENT = re.compile(r"/\*.*?(?:\*/|\Z)", re.DOTALL)
_SINGLE_QUOTED = re.compile(r"'(?:[^'\\]|\\.)*(?:'|\Z)", re.DOTALL)
_DOUBLE_QUOTED = re.compile(r'"(?:[^"\\]|\\.)*(?:"|\Z)', re.DOTALL)
_VARIABLE = re.compile(r"\$[A-Za-z_\x80-\uffff][A-Za-z0-9_\x80-\uffff]*")
_NUMBER = re.compile(r"\d[\w.]*")
_IDENTIFIER = re.compile(r"[A-Za-z_\x80-\uffff][A-Za-z0-9_\x80-\uffff]*")
_DOC_INDENT = re.compile(r"[ \t]*")
_DOC_TAG = re.compile(r"@[A-Za-z][\w\\-]*")

_KEYWORDS: Dict[str, TokenKind] = {
    "class": TokenKind.CLASS,
    "interface": TokenKind.INTERFACE,
    "trait": TokenKind.TRAIT,
    "function": TokenKind.FUNCTION,
    "public": TokenKind.PUBLIC,
    "private": TokenKind.PRIVATE,
    "protected": TokenKind.PROTECTED,
    "final": TokenKind.FINAL,
    "static": TokenKind.STATIC,
    "abstract": TokenKind.ABSTRACT,
    "const": TokenKind.CONST,
    "var": TokenKind.VAR,
    "include": TokenKind.INCLUDE,
    "include_once": TokenKind.INCLUDE_ONCE,
    "require": TokenKind.REQUIRE,
    "require_once": TokenKind.REQUIRE_ONCE,
    "namespace": TokenKind.NAMESPACE,
    "use": TokenKind.USE,
    "declare": TokenKind.DECLARE,
}


def tokenize(source: str) -> List[Token]:
    """Split ``source`` into tokens."""
    return _Lexer(source).run()


class _Lexer:
    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.line = 1
        self.column = 1
        self.tokens: List[Token] = []
        self._in_php = False

    def run(self) -> List[Token]:
        while self.pos < len(self.source):
            if self._in_php:
                self._php_token()
            else:
                self._inline_html()
        self._mark_closures()
        return self.tokens

    def emit(self, kind: TokenKind, text: str) -> int:
        index = len(self.tokens)
        self.tokens.append(Token(kind=kind, content=text, line=self.line, column=self.column))
        newlines = text.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(text) - text.rfind("\n")
        else:
            self.column += len(text)
        self.pos += len(text)
        return index

    def _inline_html(self) -> None:
        match = _OPEN_TAG.search(self.source, self.pos)
        if match is None:
            self.emit(TokenKind.INLINE_HTML, self.source[self.pos :])
            return
        if match.start() > self.pos:
            self.emit(TokenKind.INLINE_HTML, self.source[self.pos : match.start()])
        self.emit(TokenKind.OPEN_TAG, match.group(0))
        self._in_php = True

    def _php_token(self) -> None:
        source, pos = self.source, self.pos

        match = _WHITESPACE.match(source, pos)
        if match:
            self.emit(TokenKind.WHITESPACE, match.group(0))
            return

        match = _CLOSE_TAG.match(source, pos)
        if match:
            self.emit(TokenKind.CLOSE_TAG, match.group(0))
            self._in_php = False
            return

        if source.startswith("/**", pos) and source[pos + 3 : pos + 4] in (" ", "\t", "\r", "\n"):
            self._doc_comment()
            return

        for pattern, kind in (
            (_BLOCK_COMMENT, TokenKind.COMMENT),
            (_LINE_COMMENT, TokenKind.COMMENT),
            (_SINGLE_QUOTED, TokenKind.CONSTANT_STRING),
            (_DOUBLE_QUOTED, TokenKind.CONSTANT_STRING),
            (_VARIABLE, TokenKind.VARIABLE),
            (_NUMBER, TokenKind.NUMBER),
        ):
            match = pattern.match(source, pos)
            if match:
                self.emit(kind, match.group(0))
                return

        match = _IDENTIFIER.match(source, pos)
        if match:
            word = match.group(0)
            self.emit(_KEYWORDS.get(word.lower(), TokenKind.STRING), word)
            return

        self.emit(TokenKind.OTHER, source[pos])

    def _doc_comment(self) -> None:
        end = self.source.find("*/", self.pos + 3)
        body_end = len(self.source) if end == -1 else end

        opener = self.emit(TokenKind.DOC_COMMENT_OPEN_TAG, "/**")
        tags: List[int] = []
        while self.pos < body_end:
            newline = self.source.find("\n", self.pos, body_end)
            line_end = body_end if newline == -1 else newline + 1
            self._doc_line(self.source[self.pos : line_end], tags)

        closer: Optional[int] = None
        if end != -1:
            closer = self.emit(TokenKind.DOC_COMMENT_CLOSE_TAG, "*/")
        self.tokens[opener] = replace(
            self.tokens[opener], comment_closer=closer, comment_tags=tuple(tags)
        )

    def _doc_line(self, text: str, tags: List[int]) -> None:
        newline = ""
        if text.endswith("\r\n"):
            newline = "\r\n"
        elif text.endswith("\n"):
            newline = "\n"
        body = text[: len(text) - len(newline)]

        indent = _DOC_INDENT.match(body).group(0)  # type: ignore[union-attr]
        if indent:
            self.emit(TokenKind.DOC_COMMENT_WHITESPACE, indent)
        rest = body[len(indent) :]
        if rest.startswith("*"):
            self.emit(TokenKind.DOC_COMMENT_STAR, "*")
            rest = rest[1:]
            gap = _DOC_INDENT.match(rest).group(0)  # type: ignore[union-attr]
            if gap:
                self.emit(TokenKind.DOC_COMMENT_WHITESPACE, gap)
                rest = rest[len(gap) :]

        stripped = rest.rstrip(" \t\r")
        if stripped:
            tag = _DOC_TAG.match(stripped)
            if tag:
                tags.append(self.emit(TokenKind.DOC_COMMENT_TAG, tag.group(0)))
                remainder = stripped[tag.end() :]
                gap = _DOC_INDENT.match(remainder).group(0)  # type: ignore[union-attr]
                if gap:
                    self.emit(TokenKind.DOC_COMMENT_WHITESPACE, gap)
                if remainder[len(gap) :]:
                    self.emit(TokenKind.DOC_COMMENT_STRING, remainder[len(gap) :])
            else:
                self.emit(TokenKind.DOC_COMMENT_STRING, stripped)
        trailing = rest[len(stripped) :]
        if trailing:
            self.emit(TokenKind.DOC_COMMENT_WHITESPACE, trailing)
        if newline:
            self.emit(TokenKind.DOC_COMMENT_WHITESPACE, newline)

    def _mark_closures(self) -> None:
        for index, token in enumerate(self.tokens):
            if token.kind is not TokenKind.FUNCTION:
                continue
            following = self._next_significant(index + 1)
            if following is not None and self.tokens[following].content == "&":
                following = self._next_significant(following + 1)
            if following is not None and self.tokens[following].content == "(":
                self.tokens[index] = replace(token, kind=TokenKind.CLOSURE)

    def _next_significant(self, start: int) -> Optional[int]:
        for index in range(start, len(self.tokens)):
            if self.tokens[index].kind is not TokenKind.WHITESPACE:
                return index
        return None


__all__ = ["tokenize"]
