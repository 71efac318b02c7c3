"""Admission module: gated file opening for hash requests."""

from fs_hasher.admission.controller import AdmissionController, FileHasherSerializer
from fs_hasher.admission.request import HashRequest
from fs_hasher.admission.worker import StreamWorker

__all__ = ["AdmissionController", "FileHasherSerializer", "HashRequest", "StreamWorker"]
