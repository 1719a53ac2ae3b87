"""
Diagnostics
===========

A diagnostic is one structural-validation (or transformation) finding.
Diagnostics are kept as plain, serializable records so callers can log or
display them verbatim.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional


SEVERITY_WARNING = "warning"
SEVERITY_ERROR = "error"
SEVERITY_FATAL = "fatal"


@dataclass(frozen=True)
class Diagnostic:
    """
    A single validation finding.

    Attributes:
        severity: 'warning', 'error' or 'fatal'
        message: Human readable description from the validating engine
        line: Line number in the validated document (when known)
    """
    severity: str
    message: str
    line: Optional[int] = None

    @property
    def is_error(self) -> bool:
        return self.severity in (SEVERITY_ERROR, SEVERITY_FATAL)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'severity': self.severity,
            'message': self.message,
            'line': self.line,
        }

    @classmethod
    def from_log_entry(cls, entry: Any) -> 'Diagnostic':
        """Build a diagnostic from an lxml ``_LogEntry``."""
        level = str(getattr(entry, 'level_name', 'ERROR')).lower()
        if level not in (SEVERITY_WARNING, SEVERITY_ERROR, SEVERITY_FATAL):
            level = SEVERITY_ERROR

        line = getattr(entry, 'line', None)
        # libxml2 reports 0 when no line is attached
        if not line:
            line = None

        message = getattr(entry, 'message', None) or str(entry)
        return cls(severity=level, message=message.strip(), line=line)


def diagnostics_from_log(error_log: Iterable[Any]) -> List[Diagnostic]:
    """Convert an lxml error log into an ordered list of diagnostics."""
    return [Diagnostic.from_log_entry(entry) for entry in error_log]
