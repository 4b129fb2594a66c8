"""File-level DocBlock checker and fixer."""

from .models import Diagnostic, FileReport, HeaderStatus, Severity
from .runner import Runner

__all__ = ["Diagnostic", "FileReport", "HeaderStatus", "Runner", "Severity"]
