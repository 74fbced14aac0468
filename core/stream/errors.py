#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Stream Errors

InvalidColumnCount is the only error an append can raise. The others come
from decoding a serialized stream or from the opt-in strict hand-off check.
"""

from typing import List


class StreamError(Exception):
    """Base error for instruction stream failures"""
    pass


class InvalidColumnCount(StreamError, ValueError):
    """Raised when a column section is enabled with fewer than two columns"""
    def __init__(self, columns: int):
        self.columns = columns
        super().__init__(f"A column wrap section must have more than one column (got {columns})")


class StreamDecodeError(StreamError, ValueError):
    """Raised when a serialized stream cannot be decoded"""
    pass


class StreamValidationError(StreamError):
    """Raised by strict validation when diagnostics were found"""
    def __init__(self, errors: List[str]):
        self.errors = errors
        super().__init__(f"Stream validation failed: {errors}")
