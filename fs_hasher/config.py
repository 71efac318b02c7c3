"""Runtime configuration models."""

from __future__ import annotations

from dataclasses import dataclass, field

from fs_hasher.core.types import DEFAULT_ALGORITHM


@dataclass
class AdmissionConfig:
    retry_delay_seconds: float = 0.010
    # None retries "too many open files" forever.
    max_open_retries: int | None = None
    chunk_size: int = 64 * 1024


@dataclass
class HasherConfig:
    default_algorithm: str = DEFAULT_ALGORITHM
    admission: AdmissionConfig = field(default_factory=AdmissionConfig)
    event_history_limit: int | None = 1000
