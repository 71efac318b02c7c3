"""fs-hasher: order-independent content digests for files, directory trees
and batches of paths."""

from fs_hasher._version import __version__
from fs_hasher.admission import AdmissionController, FileHasherSerializer, HashRequest
from fs_hasher.config import AdmissionConfig, HasherConfig
from fs_hasher.core.errors import (
    AbstractViolationError,
    FsHasherError,
    HashError,
    NotCreatableError,
    NotRegisteredError,
    TypeMismatchError,
)
from fs_hasher.core.types import (
    HASH_ALGORITHMS,
    ComputeResult,
    FsType,
    HashAlgorithm,
    HashResult,
    HashStatus,
    ReportRecord,
)
from fs_hasher.hasher import FsHasher

__all__ = [
    "__version__",
    "FsHasher",
    "HASH_ALGORITHMS",
    "HashAlgorithm",
    "HashStatus",
    "HashResult",
    "ComputeResult",
    "ReportRecord",
    "FsType",
    "AdmissionConfig",
    "HasherConfig",
    "AdmissionController",
    "FileHasherSerializer",
    "HashRequest",
    "FsHasherError",
    "TypeMismatchError",
    "AbstractViolationError",
    "NotCreatableError",
    "HashError",
    "NotRegisteredError",
]
