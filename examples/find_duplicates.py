"""
Duplicate finder example
========================

Demonstrates:
1. Building a hash tree for a folder (or several paths as a batch)
2. Computing the order-independent root digest
3. Listing every digest shared by more than one file or folder
4. Watching admission events through the event bus
"""

import asyncio
import sys

from fs_hasher import FsHasher
from fs_hasher.observability.event_bus import HASH_COMPLETE, Event


async def main(paths: list[str]) -> None:
    hasher = FsHasher()
    completed = []

    def on_complete(event: Event) -> None:
        completed.append(event.source)

    hasher.event_bus.on(HASH_COMPLETE, on_complete)

    source = paths[0] if len(paths) == 1 else paths
    if not await hasher.build(source):
        print(f"Could not build a hash tree for {source!r}")
        return

    digest = await hasher.compute("sha256")
    print(f"Root digest: {digest}")
    print(f"Files hashed: {len(completed)}")

    duplicates = await hasher.find_duplicates()
    if not duplicates:
        print("All items are unique.")
    for dup_digest, sources in duplicates.items():
        print(f"\n{dup_digest} ({len(sources)} copies)")
        for src in sources:
            print(f"  {src}")

    hasher.destroy()


if __name__ == "__main__":
    asyncio.run(main(sys.argv[1:] or ["."]))
