"""Tests for the FsHasher facade."""

from __future__ import annotations

import asyncio
import logging
import os

import pytest

from fs_hasher import HASH_ALGORITHMS, FsHasher, __version__
from fs_hasher.config import AdmissionConfig, HasherConfig
from fs_hasher.core.errors import HashError, NotRegisteredError
from tests.helpers import X_SHA256, XY_DIRECTORY_SHA256, Y_SHA256, hexdigest, write_tree


@pytest.fixture
def hasher():
    h = FsHasher(HasherConfig(admission=AdmissionConfig(retry_delay_seconds=0.001)))
    yield h
    h.destroy()


def test_introspection_defaults(hasher):
    assert hasher.version == __version__
    assert hasher.algorithm == HASH_ALGORITHMS["SHA256"]
    assert hasher.source == ""
    assert not hasher.is_busy


@pytest.mark.asyncio
async def test_build_rejects_malformed_source(hasher):
    with pytest.raises(TypeError):
        await hasher.build(42)
    with pytest.raises(TypeError):
        await hasher.build(None)


@pytest.mark.asyncio
async def test_unbuilt_operations_return_sentinels(hasher):
    assert await hasher.compute() == ""
    assert await hasher.report() == ""
    assert await hasher.find_duplicates() == {}
    assert await hasher.report_records() == []


@pytest.mark.asyncio
async def test_build_missing_path(hasher, tmp_path):
    assert await hasher.build(str(tmp_path / "missing")) is False
    assert await hasher.compute() == ""


@pytest.mark.asyncio
async def test_file_root(hasher, xy_dir):
    path = str(xy_dir / "a.txt")
    assert await hasher.build(path)
    assert hasher.source == path
    assert await hasher.compute() == X_SHA256
    assert await hasher.report() == f"(F);>{path};{X_SHA256}\n"


@pytest.mark.asyncio
async def test_directory_root(hasher, xy_dir):
    assert await hasher.build(str(xy_dir))
    assert await hasher.compute("sha256") == XY_DIRECTORY_SHA256
    assert await hasher.report() == (
        f"(D);>{xy_dir};{XY_DIRECTORY_SHA256}\n"
        f"(F);> {xy_dir / 'a.txt'};{X_SHA256}\n"
        f"(F);> {xy_dir / 'b.txt'};{Y_SHA256}\n"
    )


@pytest.mark.asyncio
async def test_pathlike_source(hasher, xy_dir):
    assert await hasher.build(xy_dir)
    assert await hasher.compute() == XY_DIRECTORY_SHA256


@pytest.mark.asyncio
async def test_algorithm_selection(hasher, xy_dir):
    await hasher.build(str(xy_dir / "a.txt"))
    md5 = await hasher.compute("md5")
    assert hasher.algorithm == "md5"
    assert md5 == hexdigest("x", "md5")
    assert len(md5) == 32

    assert await hasher.compute(None) == X_SHA256
    assert hasher.algorithm == "sha256"


@pytest.mark.asyncio
async def test_unknown_algorithm(hasher, xy_dir, caplog):
    await hasher.build(str(xy_dir))
    with caplog.at_level(logging.WARNING, logger="fs_hasher"):
        assert await hasher.compute("not-a-hash") == ""
    assert hasher.algorithm == "not-a-hash"
    assert isinstance(hasher.last_error, HashError)
    assert "Unknown algorithm" in caplog.text


@pytest.mark.asyncio
async def test_batch_root_and_duplicates(hasher, tmp_path):
    write_tree(tmp_path, {"one.txt": "same", "two.txt": "same", "three.txt": "different"})
    sources = [str(tmp_path / name) for name in ("one.txt", "two.txt", "three.txt")]

    assert await hasher.build(sources)
    assert hasher.source == ",".join(sources)
    assert await hasher.compute()

    duplicates = await hasher.find_duplicates()
    assert list(duplicates) == [hexdigest("same")]
    assert sorted(duplicates[hexdigest("same")]) == sorted(sources[:2])
    assert all(sources[2] not in group for group in duplicates.values())

    report = await hasher.report()
    lines = report.splitlines()
    assert lines[0].startswith(f"(B);>{','.join(sources)};")
    assert len(lines) == 4
    assert all(line.startswith("(F);> ") for line in lines[1:])


@pytest.mark.asyncio
async def test_directory_duplicates(hasher, tmp_path):
    root = write_tree(tmp_path / "root", {"a": {"f.txt": "x"}, "b": {"g.txt": "x"}, "c.txt": "y"})
    await hasher.build(str(root))
    await hasher.compute()
    duplicates = await hasher.find_duplicates()

    # The two folders pass their file's digest through, so four sources share it.
    assert list(duplicates) == [X_SHA256]
    assert sorted(os.path.relpath(p, root) for p in duplicates[X_SHA256]) == sorted(
        ["a", os.path.join("a", "f.txt"), "b", os.path.join("b", "g.txt")]
    )


@pytest.mark.asyncio
async def test_busy_while_computing(hasher, xy_dir):
    await hasher.build(str(xy_dir))
    task = asyncio.create_task(hasher.compute())
    await asyncio.sleep(0)

    assert hasher.is_busy
    assert await hasher.compute() == ""
    assert await hasher.report() == ""
    assert await hasher.find_duplicates() == {}
    assert await task == XY_DIRECTORY_SHA256
    assert not hasher.is_busy


@pytest.mark.asyncio
async def test_rebuild_replaces_root(hasher, xy_dir):
    await hasher.build(str(xy_dir))
    await hasher.build(str(xy_dir / "b.txt"))
    assert await hasher.compute() == Y_SHA256


@pytest.mark.asyncio
async def test_destroy_invalidates_instance(xy_dir):
    hasher = FsHasher()
    await hasher.build(str(xy_dir))
    hasher.destroy()

    with pytest.raises(NotRegisteredError):
        hasher.source
    with pytest.raises(NotRegisteredError):
        hasher.version
    with pytest.raises(NotRegisteredError):
        await hasher.compute()
    with pytest.raises(NotRegisteredError):
        await hasher.build(str(xy_dir))


@pytest.mark.asyncio
async def test_batch_skips_empty_members(hasher, xy_dir):
    a, b = str(xy_dir / "a.txt"), str(xy_dir / "b.txt")
    assert await hasher.build([a, "", None, b])
    assert hasher.source == f"{a},{b}"
    assert len(await hasher.report_records()) == 3
