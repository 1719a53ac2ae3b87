"""
Diagnostic Collection Window
============================

libxml2 reports validation problems through a global error channel, and a
cached DTD or XMLSchema object keeps the log of its last run on the shared
object. Each validation call runs inside a ``DiagnosticCollector`` window:

    enable collecting -> validate -> drain diagnostics -> restore

Windows are serialized across threads by a single lock, so the diagnostics
drained by one call never contain findings from another. The prior
collecting state is restored on every exit path.

The collecting flag is bookkeeping for callers (see ``is_collecting``); it
does not switch any lxml behaviour. Isolation comes from the lock together
with clearing the lxml error log on entry and exit.
"""

import logging
import threading
from typing import Any, Iterable, List

from lxml import etree

from jats_core.diagnostics import Diagnostic, diagnostics_from_log

logger = logging.getLogger(__name__)

_window_lock = threading.RLock()
_collecting = False


def is_collecting() -> bool:
    """Whether a collection window is currently open."""
    return _collecting


class DiagnosticCollector:
    """
    Scoped guard around one validation call.

    Example:
        with DiagnosticCollector() as collector:
            valid = dtd.validate(tree)
            collector.drain(dtd.error_log)
        diagnostics = collector.diagnostics
    """

    def __init__(self) -> None:
        self.diagnostics: List[Diagnostic] = []
        self._previous = False

    def __enter__(self) -> 'DiagnosticCollector':
        global _collecting

        _window_lock.acquire()
        try:
            self._previous = _collecting
            _collecting = True
            etree.clear_error_log()
        except BaseException:
            _collecting = self._previous
            _window_lock.release()
            raise
        return self

    def drain(self, error_log: Iterable[Any]) -> List[Diagnostic]:
        """Move the entries of an lxml error log into this window's diagnostics."""
        drained = diagnostics_from_log(error_log)
        self.diagnostics.extend(drained)
        return drained

    def __exit__(self, exc_type, exc, tb) -> bool:
        global _collecting

        try:
            _collecting = self._previous
            etree.clear_error_log()
        finally:
            _window_lock.release()

        if exc is not None:
            logger.debug(f"Collection window closed after {exc_type.__name__}")
        return False
