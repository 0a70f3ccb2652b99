"""Exception hierarchy for the conversion pipeline.

Every failure carries the pipeline :class:`Stage` it happened in, so the
orchestrator can turn it into a :class:`~wikigraph.convert.ConversionFailure`
without inspecting exception types one by one.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class Stage(str, Enum):
    VALIDATION = "validation"
    FETCH = "fetch"
    PARSE = "parse"
    PERSIST = "persist"


class ConversionError(Exception):
    """Base class for failures raised by a pipeline stage."""

    stage: Stage

    def __init__(self, message: str, reason: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.reason = reason


class ValidationError(ConversionError):
    """The input URL was rejected.

    ``reason`` is one of ``blank``, ``malformed``, ``scheme`` or ``host``.
    """

    stage = Stage.VALIDATION


class FetchError(ConversionError):
    """The page could not be downloaded.

    ``reason`` is one of ``status``, ``mime`` or ``network``.
    """

    stage = Stage.FETCH

    def __init__(
        self,
        message: str,
        reason: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message, reason)
        self.status_code = status_code


class ParseError(ConversionError):
    stage = Stage.PARSE


class PersistError(ConversionError):
    """A graph write failed; the driver error is available as ``__cause__``."""

    stage = Stage.PERSIST
