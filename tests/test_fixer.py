from __future__ import annotations

from headerlint.files import SourceFile
from headerlint.fixer import Fixer
from headerlint.models import Edit, Severity, TokenKind
from tests._fixtures.project_builder import VALID_SOURCE


def test_disabled_fixer_refuses_edits() -> None:
    source = SourceFile("a.php", VALID_SOURCE)

    assert source.fixer.apply([Edit.replace(0, "<?php ")]) is False
    assert source.fixer.changed is False
    assert source.fixer.get_contents() == VALID_SOURCE


def test_enabled_fixer_replaces_and_appends() -> None:
    source = SourceFile("a.php", "<?php\nnamespace Foo;\n", fixer=Fixer(enabled=True))
    namespace = source.find_next(TokenKind.NAMESPACE, 0)
    assert namespace is not None

    assert source.fixer.apply([Edit.replace(namespace, "use")]) is True
    assert source.fixer.apply([Edit.newline_after(0)]) is True

    assert source.fixer.applied == 2
    assert source.fixer.get_contents() == "<?php\n\nuse Foo;\n"


def test_second_edit_on_same_token_is_deferred() -> None:
    fixer = Fixer(enabled=True)
    source = SourceFile("a.php", "<?php\n$a;\n", fixer=fixer)

    assert fixer.apply([Edit.replace(1, "$b")]) is True
    assert fixer.apply([Edit.replace(2, ","), Edit.replace(1, "$c")]) is False

    assert fixer.applied == 1
    assert source.fixer.get_contents() == "<?php\n$b;\n"


def test_empty_edit_request_is_not_applied() -> None:
    fixer = Fixer(enabled=True)
    SourceFile("a.php", "<?php\n", fixer=fixer)

    assert fixer.apply([]) is False
    assert fixer.changed is False


def test_start_resets_pending_changes() -> None:
    fixer = Fixer(enabled=True)
    SourceFile("a.php", "<?php\n$a;\n", fixer=fixer)
    fixer.apply([Edit.replace(1, "$b")])

    second = SourceFile("b.php", "<?php\n$z;\n", fixer=fixer)

    assert fixer.changed is False
    assert second.fixer.get_contents() == "<?php\n$z;\n"


def test_find_next_respects_bounds_and_exclusion() -> None:
    source = SourceFile("a.php", "<?php\n\n$a = 1;\n")

    assert source.find_next(TokenKind.WHITESPACE, 1, exclude=True) == 2
    assert source.find_next(TokenKind.VARIABLE, 0, 2) is None
    assert source.find_next((TokenKind.NUMBER, TokenKind.VARIABLE), 0) == 2
    assert source.find_next(TokenKind.CLASS, 0) is None


def test_diagnostics_are_formatted_and_prefixed() -> None:
    source = SourceFile("a.php", "<?php\n$a;\n")
    source.active_rule = "Sample"

    error = source.add_error("Only one %s tag is allowed", 1, "Duplicate", ("@see",))
    warning = source.add_warning("Literal %s stays", 1, "Literal")

    assert error.message == "Only one @see tag is allowed"
    assert error.code == "Sample.Duplicate"
    assert error.severity is Severity.ERROR
    assert (error.line, error.column) == (2, 1)
    assert warning.message == "Literal %s stays"
    assert warning.severity is Severity.WARNING


def test_fixable_error_marks_diagnostic_fixed() -> None:
    source = SourceFile("a.php", "<?php\n$a;\n", fixer=Fixer(enabled=True))

    applied = source.add_fixable_error("Bad", 1, "Bad", edits=[Edit.replace(1, "$b")])

    assert applied is True
    diagnostic = source.diagnostics[0]
    assert diagnostic.fixable is True
    assert diagnostic.fixed is True
    assert diagnostic.to_dict() == {
        "severity": "error",
        "message": "Bad",
        "code": "Bad",
        "line": 2,
        "column": 1,
        "fixable": True,
        "fixed": True,
    }


def test_source_file_detects_line_endings() -> None:
    assert SourceFile("a.php", "<?php\r\nnamespace Foo;\r\n").eol_char == "\r\n"
    assert SourceFile("a.php", "<?php\nnamespace Foo;\n").eol_char == "\n"
    assert SourceFile("a.php", "<?php").eol_char == "\n"


def test_newline_after_uses_given_line_ending() -> None:
    source = SourceFile("a.php", "<?php\r\nnamespace Foo;\r\n", fixer=Fixer(enabled=True))
    namespace = source.find_next(TokenKind.NAMESPACE, 0)
    assert namespace is not None

    assert source.fixer.apply([Edit.newline_after(namespace, source.eol_char)]) is True
    assert source.fixer.get_contents() == "<?php\r\nnamespace\r\n Foo;\r\n"
