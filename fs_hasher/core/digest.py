"""Digest engine: streaming hash accumulators with uppercase hex output."""

from __future__ import annotations

import hashlib

from fs_hasher.core.errors import HashError


class DigestAccumulator:
    """Thin wrapper around a ``hashlib`` object."""

    def __init__(self, algorithm: str, impl) -> None:
        self.algorithm = algorithm
        self._impl = impl

    def update(self, data: bytes | str) -> None:
        if isinstance(data, str):
            data = data.encode("utf-8")
        self._impl.update(data)

    def hexdigest(self) -> str:
        return self._impl.hexdigest().upper()

    def snapshot(self) -> str:
        """Digest of everything fed so far; the accumulator stays usable."""
        return self._impl.copy().hexdigest().upper()


class DigestEngine:
    """Creates accumulators by algorithm name."""

    @staticmethod
    def create(algorithm: str) -> DigestAccumulator:
        try:
            impl = hashlib.new(algorithm)
        except (ValueError, TypeError) as exc:
            raise HashError(algorithm=str(algorithm), detail=str(exc)) from exc
        if impl.digest_size == 0:
            # shake_* need a length argument and are not usable here.
            raise HashError(algorithm=algorithm, detail="variable-length digests are not supported")
        return DigestAccumulator(algorithm, impl)


def digest_bytes(data: bytes | str, algorithm: str = "sha256") -> str:
    acc = DigestEngine.create(algorithm)
    acc.update(data)
    return acc.hexdigest()
