"""Duplicate detection over a flattened report."""

from __future__ import annotations

from typing import Iterable

from fs_hasher.core.types import ReportRecord


def build_digest_index(records: Iterable[ReportRecord]) -> dict[str, list[str]]:
    """Map each digest to the sources that produced it, in report order.

    Records without a digest are left out.
    """
    index: dict[str, list[str]] = {}
    for record in records:
        if record.digest is None:
            continue
        index.setdefault(record.digest, []).append(record.source)
    return index


def find_duplicates(records: Iterable[ReportRecord]) -> dict[str, list[str]]:
    return {digest: sources for digest, sources in build_digest_index(records).items() if len(sources) > 1}
