"""FilteredLog: collects diagnostics for later reporting on a build.

Messages are kept in memory so they can be snapshotted into a
``LedgerEntry`` or ``ReferenceBuild``, and mirrored to the standard
``logging`` tree.  Error messages are capped: after ``max_errors`` lines
further errors are only counted, and a single notice is appended when
the log is read.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

DEFAULT_MAX_ERRORS = 20


class FilteredLog:
    """Info and error messages captured while processing one build.

    Parameters
    ----------
    title:
        Heading that precedes the error messages (e.g. the repository).
    max_errors:
        Number of error lines retained before further errors are skipped.
    """

    def __init__(self, title: str = "Errors:", max_errors: int = DEFAULT_MAX_ERRORS) -> None:
        self._title = title
        self._max_errors = max_errors
        self._info: list[str] = []
        self._errors: list[str] = []
        self._skipped = 0

    def log_info(self, message: str, *args: object) -> None:
        text = message % args if args else message
        self._info.append(text)
        logger.info(text)

    def log_error(self, message: str, *args: object) -> None:
        text = message % args if args else message
        logger.error(text)
        if not self._errors:
            self._errors.append(self._title)
        if len(self._errors) > self._max_errors:
            self._skipped += 1
        else:
            self._errors.append(text)

    def log_exception(self, exc: BaseException, message: str, *args: object) -> None:
        """Record an error line followed by the exception type and message."""
        self.log_error(message, *args)
        self.log_error("%s: %s", type(exc).__name__, exc)

    @property
    def info_messages(self) -> list[str]:
        return list(self._info)

    @property
    def error_messages(self) -> list[str]:
        messages = list(self._errors)
        if self._skipped:
            messages.append(
                f"  ... skipped logging of {self._skipped} additional errors ..."
            )
        return messages

    def has_errors(self) -> bool:
        return bool(self._errors)
