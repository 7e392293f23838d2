"""
Pydantic models for the remote file-storage API responses.
"""

from .files import FileDeleteResponse, FileRecord, FilesListResponse, PageInfo

__all__ = ["FileDeleteResponse", "FileRecord", "FilesListResponse", "PageInfo"]
