"""Hash tree: file, directory and batch nodes."""

from fs_hasher.tree.base import FsNode, NodeBase
from fs_hasher.tree.batch import BatchNode
from fs_hasher.tree.children import ChildSet, combine_digests
from fs_hasher.tree.directory import DirectoryNode, make_child_node
from fs_hasher.tree.file import FileNode

__all__ = [
    "FsNode",
    "NodeBase",
    "FileNode",
    "DirectoryNode",
    "BatchNode",
    "ChildSet",
    "combine_digests",
    "make_child_node",
]
