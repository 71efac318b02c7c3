"""CSV rendering of hash tree reports."""

from __future__ import annotations

from typing import Iterable

from fs_hasher.core.errors import TypeMismatchError
from fs_hasher.core.types import FsType, ReportRecord

TYPE_TAGS: dict[FsType, str] = {
    FsType.DIRECTORY: "(D)",
    FsType.FILE: "(F)",
    FsType.BATCH: "(B)",
    FsType.OTHER: "(O)",
    FsType.INVALID: "(I)",
}


def type_tag(fs_type) -> str:
    try:
        return TYPE_TAGS[FsType(fs_type)]
    except (ValueError, KeyError):
        raise TypeMismatchError(
            [FsType.DIRECTORY.name, FsType.FILE.name, FsType.BATCH.name], fs_type, "report"
        ) from None


def format_csv_line(record: ReportRecord, indent: bool = True) -> str:
    source = record.source
    if indent:
        source = " " * record.depth + source
    digest = record.digest or ""
    return f"{type_tag(record.type)};>{source};{digest}\n"


def format_csv_report(records: Iterable[ReportRecord], indent: bool = True) -> str:
    """Semicolon-delimited report, one line per node.

    ``indent`` pads each source with one space per depth level; it is
    used when the root is a directory or batch.
    """
    return "".join(format_csv_line(record, indent) for record in records)


def format_duplicates_csv(duplicates: dict[str, list[str]]) -> str:
    lines = []
    for digest, sources in duplicates.items():
        if len(sources) < 2:
            continue
        lines.append(f"{len(sources)};{digest};{sources[0]}\n")
        lines.extend(f";;{source}\n" for source in sources[1:])
    return "".join(lines)
