from __future__ import annotations

import re
from enum import Enum
from dataclasses import dataclass
from typing import List


class ValidationSeverity(Enum):
    WARNING = 1


@dataclass
class ValidationIssue:
    message: str
    severity: ValidationSeverity


_SCRIPT_CLOSE = re.compile(r"</\s*script", re.IGNORECASE)
_LINE_BREAK = re.compile(r"[\r\n\u2028\u2029]")


def inspect_interpolated_text(text: str) -> List[ValidationIssue]:
    """Report sequences that change the generated document when inserted raw.

    Nothing here validates mathematics; every finding is a WARNING.
    """
    issues: List[ValidationIssue] = []

    if "'" in text:
        issues.append(
            ValidationIssue(
                "Single quote terminates the JS string literal",
                ValidationSeverity.WARNING,
            )
        )

    if '"' in text:
        issues.append(
            ValidationIssue(
                "Double quote in interpolated text",
                ValidationSeverity.WARNING,
            )
        )

    if _SCRIPT_CLOSE.search(text):
        issues.append(
            ValidationIssue(
                "Script-closing sequence ends the inline script",
                ValidationSeverity.WARNING,
            )
        )

    if _LINE_BREAK.search(text):
        issues.append(
            ValidationIssue(
                "Line break inside a JS string literal",
                ValidationSeverity.WARNING,
            )
        )

    return issues


def summarize_issues(issues: List[ValidationIssue]) -> str:
    return "; ".join(f"{i.severity.name}: {i.message}" for i in issues)
