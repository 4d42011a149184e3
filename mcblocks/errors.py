"""Exceptions raised by the I/O-bearing nuclear-data layer."""

from __future__ import annotations


class NuclearError(Exception):
    """Base class for nuclear-data errors."""


class Hdf5Error(NuclearError):
    """HDF5 read failure with the offending path and a diagnostic."""

    def __init__(self, path: str, detail: str) -> None:
        super().__init__(f"HDF5 error reading {path}: {detail}")
        self.path = path
        self.detail = detail


class DimensionMismatchError(NuclearError):
    """Shape of loaded data differs from the expected shape."""

    def __init__(self, expected: str, got: str) -> None:
        super().__init__(f"dimension mismatch: expected {expected}, got {got}")
        self.expected = expected
        self.got = got


class NuclearIOError(NuclearError):
    """Wraps an underlying operating-system I/O error."""

    def __init__(self, error: OSError) -> None:
        super().__init__(f"I/O error: {error}")
        self.error = error
        self.__cause__ = error