"""Core data types shared by the hash tree and the admission controller."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum

from fs_hasher.core.errors import HashError


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class FsType(IntEnum):
    INVALID = 0
    FILE = 1
    DIRECTORY = 2
    BATCH = 3
    OTHER = 4


class HashStatus(IntEnum):
    OK = 0
    INVALID_ALGORITHM = 1
    ACCESS_DENIED = 2
    TOO_MANY_FILES_OPEN = 3
    OTHER = 4


class HashAlgorithm(str, Enum):
    MD5 = "md5"
    SHA224 = "sha224"
    SHA256 = "sha256"
    SHA384 = "sha384"
    SHA512 = "sha512"


HASH_ALGORITHMS: dict[str, str] = {alg.name: alg.value for alg in HashAlgorithm}

DEFAULT_ALGORITHM = HashAlgorithm.SHA256.value


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class HashResult:
    status: HashStatus
    digest: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == HashStatus.OK


@dataclass(frozen=True)
class ComputeResult:
    source: str | None
    digest: str | None
    error: HashError | None = None


@dataclass(frozen=True)
class ReportRecord:
    type: FsType
    source: str
    depth: int
    digest: str | None
