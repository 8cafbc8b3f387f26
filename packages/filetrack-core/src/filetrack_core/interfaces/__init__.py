"""Collaborator interfaces used by the freshness evaluator."""

from filetrack_core.interfaces.filesystem import FileStat, FileSystem, LocalFileSystem

__all__ = [
    "FileStat",
    "FileSystem",
    "LocalFileSystem",
]
