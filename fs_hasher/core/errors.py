"""Exception hierarchy for fs-hasher."""

from __future__ import annotations


class FsHasherError(Exception):
    """Package base exception."""


class TypeMismatchError(FsHasherError, TypeError):
    """Observed file-system type differs from the type expected at a tree position."""

    def __init__(self, expected, observed, where: str = "") -> None:
        msg = f"File system type mismatch. Expected:{expected} Observed:{observed}"
        if where:
            msg = f"{msg} ({where})"
        super().__init__(msg)
        self.expected = expected
        self.observed = observed


class AbstractViolationError(FsHasherError, TypeError):
    """The shared node base was used directly instead of a concrete variant."""

    def __init__(self, name: str = "not specified") -> None:
        super().__init__(f"Attempting to instantiate an abstract class: '{name}'")
        self.name = name


class NotCreatableError(FsHasherError, TypeError):
    """A static-only facade was instantiated."""

    def __init__(self, name: str = "not specified") -> None:
        super().__init__(f"Attempting to instantiate a non-creatable class: '{name}'")
        self.name = name


class HashError(FsHasherError):
    """Hashing failed while combining digests or in the hash primitive."""

    def __init__(
        self,
        source: str | None = None,
        algorithm: str | None = None,
        detail: str | None = None,
    ) -> None:
        msg = "Error encountered when computing the hash."
        if source:
            msg += f" Source:'{source}'"
        if algorithm:
            msg += f" Algorithm:'{algorithm}'"
        if detail:
            msg += f" Error Detail:'{detail}'"
        super().__init__(msg)
        self.source = source
        self.algorithm = algorithm
        self.detail = detail


class NotRegisteredError(FsHasherError, ReferenceError):
    """The facade instance was destroyed and can no longer be used."""
