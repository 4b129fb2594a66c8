"""Runs header rules over a file, in report-only or fixing mode."""

from __future__ import annotations

import difflib
from pathlib import Path
from typing import Iterable, List, Optional, Tuple

from .config import HeaderLintConfig, load_config
from .files import SourceFile
from .fixer import Fixer, FixerError
from .identity import RepositoryIdentity, resolve_repository
from .licensing import LicenseFiles
from .logging import get_logger
from .models import FileReport, HeaderStatus, Severity
from .rules import Rule, RuleContext, discover_rules


class Runner:
    """Coordinates tokenizing, rule dispatch, and the fix loop for one project."""

    def __init__(
        self,
        root: Path | str = ".",
        *,
        config: HeaderLintConfig | None = None,
        repository: str | None = None,
        rules: Optional[Iterable[Rule]] = None,
    ) -> None:
        self.root = Path(root).expanduser().resolve()
        self.logger = get_logger("runner")
        self.config = config or load_config(self.root)
        self.repository: RepositoryIdentity = resolve_repository(
            self.root, repository or self.config.repository
        )
        self.logger.debug("Checking headers for repository %s", self.repository)
        self.license_files = LicenseFiles(
            self.root,
            self.repository,
            holder=self.config.licensing.holder,
            templates_dir=self.config.licensing.templates_dir,
        )
        self._rule_overrides = list(rules) if rules is not None else None

    def check(self, path: Path | str) -> FileReport:
        """Report header problems in ``path`` without changing anything."""
        file_path = Path(path)
        content = file_path.read_text(encoding="utf-8")
        return self.check_source(str(file_path), content)

    def fix(self, path: Path | str, *, dry_run: bool = False) -> FileReport:
        """Fix what can be fixed in ``path`` and report what remains.

        Licensing files are regenerated only after the fixed source has been
        written, so a fix loop that fails to converge leaves the project untouched.
        """
        file_path = Path(path)
        content = file_path.read_text(encoding="utf-8")
        report = self.check_source(str(file_path), content, fix=True)
        if dry_run:
            self.logger.info("Dry-run completed; %s not written", file_path)
            return report
        if report.changed:
            file_path.write_text(report.fixed or "", encoding="utf-8")
            self.logger.info("Fixed %d problem(s) in %s", report.fix_count, file_path)
        if report.license_years is not None and self.config.licensing.regenerate:
            self.license_files.build(*report.license_years)
        return report

    def check_source(self, filename: str, content: str, *, fix: bool = False) -> FileReport:
        """Check in-memory ``content`` as if it were stored at ``filename``.

        Nothing is written to disk; with ``fix`` the fixed text is returned on
        the report instead.
        """
        rules = self.rules()
        report = FileReport(path=filename, original=content)

        current = content
        if fix:
            current, report.fix_count, report.license_years = self._fix_loop(
                filename, content, rules
            )
            report.fixed = current
            report.diff = _unified_diff(content, current, filename)

        source = self._run(filename, current, rules, Fixer(enabled=False))
        report.status = source.header_status
        report.skipped = source.header_status is HeaderStatus.SKIPPED
        report.metrics = dict(source.metrics)
        report.diagnostics = [
            diagnostic
            for diagnostic in source.diagnostics
            if self.config.report.show_warnings or diagnostic.severity is Severity.ERROR
        ]
        self.logger.debug(
            "%s: %d error(s), %d warning(s)", filename, len(report.errors), len(report.warnings)
        )
        return report

    def rules(self) -> List[Rule]:
        if self._rule_overrides is not None:
            return list(self._rule_overrides)
        context = RuleContext(
            repository=self.repository,
            skip_files=tuple(self.config.skip_files),
        )
        return discover_rules(context, enabled=self.config.rules)

    def _fix_loop(
        self, filename: str, content: str, rules: List[Rule]
    ) -> Tuple[str, int, Optional[Tuple[int, int]]]:
        current = content
        total = 0
        license_years: Optional[Tuple[int, int]] = None
        for attempt in range(1, self.config.fixer.max_passes + 1):
            source = self._run(filename, current, rules, Fixer(enabled=True))
            if not source.fixer.changed:
                self.logger.debug("Fixer converged for %s after %d pass(es)", filename, attempt)
                return current, total, license_years
            total += source.fixer.applied
            if source.license_years is not None:
                license_years = source.license_years
            self.logger.debug(
                "Fixer pass %d applied %d fix(es) to %s", attempt, source.fixer.applied, filename
            )
            current = source.fixer.get_contents()
        raise FixerError(
            f"Fixes for {filename} did not converge after {self.config.fixer.max_passes} passes"
        )

    def _run(self, filename: str, content: str, rules: List[Rule], fixer: Fixer) -> SourceFile:
        source = SourceFile(filename, content, fixer=fixer)
        for rule in rules:
            self._dispatch(rule, source)
        source.active_rule = None
        return source

    def _dispatch(self, rule: Rule, source: SourceFile) -> None:
        listened = set(rule.register())
        source.active_rule = rule.name
        resume = 0
        for index, token in enumerate(source.tokens):
            if index < resume or token.kind not in listened:
                continue
            self.logger.debug("Running %s at token %d of %s", rule.name, index, source.path)
            result = rule.process(source, index)
            if result is not None:
                resume = result


def _unified_diff(original: str, updated: str, filename: str) -> str:
    diff = difflib.unified_diff(
        original.splitlines(keepends=True),
        updated.splitlines(keepends=True),
        fromfile=f"{filename} (original)",
        tofile=f"{filename} (fixed)",
    )
    return "".join(diff)


__all__ = ["Runner"]
