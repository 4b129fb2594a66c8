"""File-level DocBlock rule.

- Checks if a file has a valid file-level DocBlock
- Checks for missing/invalid @see tag (and renames the deprecated @link tag)
- Checks for missing/invalid @copyright tag
- Checks for missing/invalid @license tag
- Checks order of @see, @copyright and @license tags
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, FrozenSet, Iterator, List, Optional, Sequence, Tuple

from ..constants import (
    COPYRIGHT_LINK_TEMPLATE,
    DEFAULT_SKIP_FILES,
    HEADER_METRIC,
    LICENSE_LINK_TEMPLATE,
    SOURCE_LINK_TEMPLATE,
)
from ..files import SourceFile
from ..identity import RepositoryIdentity
from ..licensing import detect_date_range
from ..models import Edit, HeaderStatus, TokenKind
from .base import Rule, RuleContext


class DocTag(str, Enum):
    SEE = "@see"
    LINK = "@link"
    COPYRIGHT = "@copyright"
    LICENSE = "@license"


REQUIRED_ORDER: Tuple[DocTag, ...] = (DocTag.SEE, DocTag.COPYRIGHT, DocTag.LICENSE)

_TAGS_BY_NAME: Dict[str, DocTag] = {tag.value: tag for tag in DocTag}

_DUPLICATE_CODES: Dict[DocTag, str] = {
    DocTag.SEE: "DuplicateSeeTag",
    DocTag.COPYRIGHT: "DuplicateCopyrightTag",
    DocTag.LICENSE: "DuplicateLicenseTag",
}
_MISSING_CODES: Dict[DocTag, str] = {
    DocTag.SEE: "MissingSeeTag",
    DocTag.COPYRIGHT: "MissingCopyrightTag",
    DocTag.LICENSE: "MissingLicenseTag",
}
_EMPTY_CODES: Dict[DocTag, str] = {
    DocTag.SEE: "EmptySeeTag",
    DocTag.LINK: "EmptyLinkTag",
    DocTag.COPYRIGHT: "EmptyCopyrightTag",
    DocTag.LICENSE: "EmptyLicenseTag",
}
_ORDER_CODES: Dict[DocTag, str] = {
    DocTag.SEE: "SeeTagOrder",
    DocTag.COPYRIGHT: "CopyrightTagOrder",
    DocTag.LICENSE: "LicenseTagOrder",
}

# A block directly followed by one of these documents that declaration.
DECLARATION_KINDS: FrozenSet[TokenKind] = frozenset(
    {
        TokenKind.CLASS,
        TokenKind.INTERFACE,
        TokenKind.TRAIT,
        TokenKind.FUNCTION,
        TokenKind.CLOSURE,
        TokenKind.PUBLIC,
        TokenKind.PRIVATE,
        TokenKind.PROTECTED,
        TokenKind.FINAL,
        TokenKind.STATIC,
        TokenKind.ABSTRACT,
        TokenKind.CONST,
        TokenKind.VAR,
        TokenKind.INCLUDE,
        TokenKind.INCLUDE_ONCE,
        TokenKind.REQUIRE,
        TokenKind.REQUIRE_ONCE,
    }
)


@dataclass(frozen=True)
class HeaderLocation:
    """Where (and whether) the file-level DocBlock was found."""

    status: HeaderStatus
    start: Optional[int] = None
    end: Optional[int] = None


class FoundTags:
    """Append-only log of the tag names met while scanning one DocBlock."""

    def __init__(self) -> None:
        self._names: List[str] = []

    def append(self, name: str) -> None:
        self._names.append(name)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __len__(self) -> int:
        return len(self._names)

    def __getitem__(self, index: int) -> str:
        return self._names[index]

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def ordering_view(self) -> Tuple[str, ...]:
        """Names used for the order check, with a leading @link read as @see.

        The @link tag has already been reported (and possibly renamed), so it
        must not also produce missing/misordered @see findings.
        """
        names = list(self._names)
        if names and names[0] == DocTag.LINK.value:
            names[0] = DocTag.SEE.value
        return tuple(names)


def locate_header(
    file: SourceFile, stack_ptr: int, skip_files: Sequence[str] = DEFAULT_SKIP_FILES
) -> HeaderLocation:
    """Find the file-level DocBlock following the open tag at ``stack_ptr``."""
    if file.path.endswith(tuple(skip_files)):
        return HeaderLocation(HeaderStatus.SKIPPED)

    tokens = file.tokens
    comment_start = file.find_next(TokenKind.WHITESPACE, stack_ptr + 1, exclude=True)

    if comment_start is not None and tokens[comment_start].kind is TokenKind.COMMENT:
        file.add_error(
            'You must use "/**" style comments for a file-level DocBlock',
            comment_start,
            "WrongStyle",
        )
        file.record_metric(stack_ptr, HEADER_METRIC, "yes")
        return HeaderLocation(HeaderStatus.WRONG_STYLE)

    comment_end: Optional[int] = None
    if comment_start is not None and tokens[comment_start].kind is TokenKind.DOC_COMMENT_OPEN_TAG:
        comment_end = tokens[comment_start].comment_closer

    attached = False
    if comment_end is not None:
        next_token = file.find_next(
            (TokenKind.WHITESPACE, TokenKind.COMMENT), comment_end + 1, exclude=True
        )
        attached = next_token is not None and tokens[next_token].kind in DECLARATION_KINDS

    if comment_end is None or attached:
        file.add_error("Missing file-level DocBlock", stack_ptr, "Missing")
        file.record_metric(stack_ptr, HEADER_METRIC, "no")
        return HeaderLocation(HeaderStatus.MISSING)

    file.record_metric(stack_ptr, HEADER_METRIC, "yes")
    return HeaderLocation(HeaderStatus.VALID, start=comment_start, end=comment_end)


class FileLevelDocBlockRule(Rule):
    """Enforces the @see/@copyright/@license file-level DocBlock."""

    name = "FileLevelDocBlock"

    def __init__(
        self,
        repository: RepositoryIdentity,
        *,
        skip_files: Sequence[str] = DEFAULT_SKIP_FILES,
    ) -> None:
        self.repository = repository
        self.skip_files = tuple(skip_files)

    @classmethod
    def from_context(cls, context: RuleContext) -> "FileLevelDocBlockRule":
        return cls(context.repository, skip_files=context.skip_files)

    def register(self) -> Sequence[TokenKind]:
        return [TokenKind.OPEN_TAG]

    def process(self, file: SourceFile, ptr: int) -> Optional[int]:
        # Only the leading block is inspected; the rest of the file is ignored.
        end_of_file = file.num_tokens + 1

        location = locate_header(file, ptr, self.skip_files)
        file.header_status = location.status
        if location.start is None or location.end is None:
            return end_of_file

        self._check_spacing(file, ptr, location.start, location.end)

        found = FoundTags()
        for tag in file.tokens[location.start].comment_tags:
            self._check_tag(file, tag, found, location.end)

        self._check_order(file, location.start, location.end, found.ordering_view())
        return end_of_file

    def expected_source_link(self) -> str:
        return SOURCE_LINK_TEMPLATE.format(repository=self.repository.slug)

    def expected_copyright_link(self) -> str:
        return COPYRIGHT_LINK_TEMPLATE.format(repository=self.repository.slug)

    def expected_license_link(self) -> str:
        return LICENSE_LINK_TEMPLATE.format(repository=self.repository.slug)

    def _check_spacing(self, file: SourceFile, ptr: int, start: int, end: int) -> None:
        tokens = file.tokens

        if tokens[start].line > tokens[ptr].line + 1:
            file.add_error(
                "There must be no blank lines before the file-level DocBlock",
                ptr,
                "SpacingAfterOpen",
            )

        following = file.find_next(TokenKind.WHITESPACE, end + 1, exclude=True)
        if following is None:
            return
        expected_line = tokens[end].line + 2
        if tokens[following].line == expected_line:
            return

        if tokens[following].line < expected_line:
            edits: Tuple[Edit, ...] = (Edit.newline_after(end, file.eol_char),)
        else:
            edits = _collapse_blank_lines(file, end + 1, following)
        file.add_fixable_error(
            "There must be exactly one blank line after the file-level DocBlock",
            end,
            "SpacingAfterComment",
            edits=edits,
        )

    def _check_tag(self, file: SourceFile, tag: int, found: FoundTags, comment_end: int) -> None:
        tokens = file.tokens
        name = tokens[tag].content
        doc_tag = _TAGS_BY_NAME.get(name)
        is_required = doc_tag in REQUIRED_ORDER

        if is_required and name in found:
            file.add_error(
                "Only one %s tag is allowed in a file-level DocBlock",
                tag,
                _DUPLICATE_CODES[doc_tag],  # type: ignore[index]
                (name,),
            )
        found.append(name)

        if doc_tag is DocTag.LINK:
            file.add_fixable_error(
                "Deprecated @link tag is used, use @see tag instead",
                tag,
                "DeprecatedLinkTag",
                edits=(Edit.replace(tag, DocTag.SEE.value + " "),),
            )

        if doc_tag is None:
            return

        string = file.find_next(TokenKind.DOC_COMMENT_STRING, tag, comment_end)
        if string is None or tokens[string].line != tokens[tag].line:
            file.add_error(
                "Content missing for %s tag in file-level DocBlock",
                tag,
                _EMPTY_CODES[doc_tag],
                (name,),
            )
            return

        if doc_tag in (DocTag.SEE, DocTag.LINK):
            self._check_source_link(file, name, tag, string)
        elif doc_tag is DocTag.COPYRIGHT:
            self._check_copyright_link(file, tag, string)
        else:
            self._check_license_link(file, tag, string)

    def _check_source_link(self, file: SourceFile, name: str, tag: int, string: int) -> None:
        expected = self.expected_source_link()
        if file.tokens[string].content == expected:
            return
        file.add_fixable_error(
            'Expected "%s" for %s tag',
            tag,
            "IncorrectSourceLink",
            (expected, name),
            edits=(Edit.replace(string, expected),),
        )

    def _check_copyright_link(self, file: SourceFile, tag: int, string: int) -> None:
        content = file.tokens[string].content
        first_year, last_year = detect_date_range(content)

        expected = self.expected_copyright_link()
        if content == expected:
            return
        fixed = file.add_fixable_error(
            'Expected "%s" for @copyright tag',
            tag,
            "IncorrectCopyrightLink",
            (expected,),
            edits=(Edit.replace(string, expected),),
        )
        if fixed and first_year is not None and last_year is not None:
            file.request_license_files(first_year, last_year)

    def _check_license_link(self, file: SourceFile, tag: int, string: int) -> None:
        expected = self.expected_license_link()
        if file.tokens[string].content == expected:
            return
        file.add_fixable_error(
            'Expected "%s" for @license tag',
            tag,
            "IncorrectLicenseLink",
            (expected,),
            edits=(Edit.replace(string, expected),),
        )

    def _check_order(
        self, file: SourceFile, start: int, end: int, found: Sequence[str]
    ) -> None:
        tags = file.tokens[start].comment_tags
        for position, tag in enumerate(REQUIRED_ORDER):
            if tag.value not in found:
                file.add_error(
                    "Missing %s tag in file-level DocBlock",
                    end,
                    _MISSING_CODES[tag],
                    (tag.value,),
                )

            if position >= len(found):
                break

            if found[position] != tag.value:
                file.add_warning(
                    "The file-level DocBlock tag in position %s should be the %s tag",
                    tags[position],
                    _ORDER_CODES[tag],
                    (position + 1, tag.value),
                )


def _collapse_blank_lines(file: SourceFile, first: int, stop: int) -> Tuple[Edit, ...]:
    gap = "".join(token.content for token in file.tokens[first:stop])
    indent = gap[gap.rfind("\n") + 1 :]
    edits = [Edit.replace(first, file.eol_char * 2 + indent)]
    edits.extend(Edit.replace(index, "") for index in range(first + 1, stop))
    return tuple(edits)


__all__ = [
    "DECLARATION_KINDS",
    "DocTag",
    "FileLevelDocBlockRule",
    "FoundTags",
    "HeaderLocation",
    "REQUIRED_ORDER",
    "locate_header",
]
