"""Core primitives: types, errors, digests and file-system probing."""
