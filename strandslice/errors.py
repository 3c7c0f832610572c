#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
StrandSlice v0.1.0

Exception types raised by the index, accessor and annotation layers.

Every lookup failure is distinguishable from a successful value: callers
catch the specific subclass (or ``StrandSliceError``) and decide whether to
abort or skip.

Author: StrandSlice Development Team
License: Dual License (Academic/Commercial) - See LICENSE_ACADEMIC.md and LICENSE_COMMERCIAL.md
"""


class StrandSliceError(Exception):
    """Base class for all StrandSlice errors."""
    pass


class RecordNotFoundError(StrandSliceError, LookupError):
    """Raised when an identifier is absent from an index."""

    def __init__(self, kind: str, name: str, source=None):
        self.kind = kind
        self.name = name
        self.source = source
        message = f"{kind} not found: {name}"
        if source is not None:
            message += f" (in {source})"
        super().__init__(message)


class MalformedRecordError(StrandSliceError, ValueError):
    """Raised when a record line lacks the expected fields or separators."""

    def __init__(self, message: str, line_no=None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class DuplicateIdentifierError(MalformedRecordError):
    """Raised in strict mode when an identifier is defined twice."""
    pass


class MalformedIndexError(StrandSliceError, ValueError):
    """Raised when a layout index line cannot be parsed."""

    def __init__(self, message: str, line_no=None):
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class UnsupportedBaseError(StrandSliceError, ValueError):
    """Raised when a base has no defined complement."""

    def __init__(self, base: str, position: int):
        self.base = base
        self.position = position
        super().__init__(
            f"Cannot complement base {base!r} at position {position} "
            f"(only A, C, G, T are supported)"
        )


class SequenceNotFoundError(StrandSliceError, LookupError):
    """Raised when a gene sequence does not occur in a path sequence."""
    pass


class InvalidCoordinateError(StrandSliceError, ValueError):
    """Raised for 1-based coordinates outside the valid range."""
    pass


__all__ = [
    'StrandSliceError',
    'RecordNotFoundError',
    'MalformedRecordError',
    'DuplicateIdentifierError',
    'MalformedIndexError',
    'UnsupportedBaseError',
    'SequenceNotFoundError',
    'InvalidCoordinateError',
]

# StrandSlice v0.1.0
# Any usage is subject to this software's license.
