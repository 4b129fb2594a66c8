"""Tests for headerlint.tokenizer."""

from __future__ import annotations

import pytest

from headerlint.models import TokenKind
from headerlint.tokenizer import tokenize
from tests._fixtures.project_builder import SOURCE_LINK, VALID_SOURCE


@pytest.mark.parametrize(
    "source",
    [
        VALID_SOURCE,
        "<html>\n<?php echo 'hi'; ?>\n</html>\n",
        "<?php\n$x = \"/** not a doc */\"; // trailing ?>\ntext",
        "<?php\r\n/**\r\n * @see x\r\n */\r\n\r\nclass Foo {}\r\n",
        "<?php\n/** unterminated\n * @see",
        "",
    ],
)
def test_tokens_reproduce_source(source: str) -> None:
    tokens = tokenize(source)
    assert "".join(token.content for token in tokens) == source


def test_open_tag_includes_one_newline() -> None:
    tokens = tokenize(VALID_SOURCE)

    assert tokens[0].kind is TokenKind.OPEN_TAG
    assert tokens[0].content == "<?php\n"
    assert tokens[1].kind is TokenKind.DOC_COMMENT_OPEN_TAG
    assert tokens[1].line == 2


def test_doc_comment_records_closer_and_tags() -> None:
    tokens = tokenize(VALID_SOURCE)
    opener = tokens[1]

    assert opener.comment_closer is not None
    closer = tokens[opener.comment_closer]
    assert closer.kind is TokenKind.DOC_COMMENT_CLOSE_TAG
    assert closer.line == 6

    names = [tokens[index].content for index in opener.comment_tags]
    assert names == ["@see", "@copyright", "@license"]
    assert all(tokens[index].kind is TokenKind.DOC_COMMENT_TAG for index in opener.comment_tags)

    see = opener.comment_tags[0]
    assert tokens[see + 1].kind is TokenKind.DOC_COMMENT_WHITESPACE
    assert tokens[see + 1].content == "       "
    assert tokens[see + 2].kind is TokenKind.DOC_COMMENT_STRING
    assert tokens[see + 2].content == SOURCE_LINK
    assert tokens[see + 2].line == 3


def test_single_line_doc_comment() -> None:
    tokens = tokenize("<?php /** @var int $x */\n")
    kinds = [token.kind for token in tokens]

    assert kinds[:2] == [TokenKind.OPEN_TAG, TokenKind.DOC_COMMENT_OPEN_TAG]
    tag = tokens[1].comment_tags[0]
    assert tokens[tag].content == "@var"
    assert tokens[tag + 2].content == "int $x"
    assert tokens[tokens[1].comment_closer].content == "*/"  # type: ignore[index]


def test_plain_and_empty_block_comments_are_comments() -> None:
    tokens = tokenize("<?php\n/**/\n/* header */\n# hash\n// slashes\n")
    comments = [token.content for token in tokens if token.kind is TokenKind.COMMENT]

    assert comments == ["/**/", "/* header */", "# hash", "// slashes"]
    assert not any(token.kind is TokenKind.DOC_COMMENT_OPEN_TAG for token in tokens)


def test_unterminated_doc_comment_has_no_closer() -> None:
    tokens = tokenize("<?php\n/**\n * @see foo\n")

    assert tokens[1].kind is TokenKind.DOC_COMMENT_OPEN_TAG
    assert tokens[1].comment_closer is None
    assert [tokens[i].content for i in tokens[1].comment_tags] == ["@see"]


def test_keywords_and_closures() -> None:
    source = "<?php\nFINAL class A {}\n$f = function &($x) {};\nfunction named() {}\nrequire_once 'a.php';\n"
    tokens = tokenize(source)
    kinds = {token.content: token.kind for token in tokens if token.kind is not TokenKind.WHITESPACE}

    assert kinds["FINAL"] is TokenKind.FINAL
    assert kinds["class"] is TokenKind.CLASS
    assert kinds["named"] is TokenKind.STRING
    assert kinds["require_once"] is TokenKind.REQUIRE_ONCE
    assert kinds["'a.php'"] is TokenKind.CONSTANT_STRING
    functions = [token.kind for token in tokens if token.content == "function"]
    assert functions == [TokenKind.CLOSURE, TokenKind.FUNCTION]


def test_line_and_column_tracking() -> None:
    tokens = tokenize("<?php\n\n  namespace Foo;\n")
    namespace = next(token for token in tokens if token.kind is TokenKind.NAMESPACE)

    assert namespace.line == 3
    assert namespace.column == 3


def test_inline_html_before_open_tag() -> None:
    tokens = tokenize("#!/usr/bin/env php\n<?php\n")

    assert tokens[0].kind is TokenKind.INLINE_HTML
    assert tokens[1].kind is TokenKind.OPEN_TAG
    assert tokens[1].line == 2
