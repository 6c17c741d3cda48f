"""Heuristic risk triage for files and URLs."""

from .errors import InvalidUrl, UnsupportedFileType
from .file_analyzer import FileAnalyzer, analyze_file
from .url_analyzer import UrlAnalyzer, analyze_url

__all__ = [
    "FileAnalyzer",
    "InvalidUrl",
    "UnsupportedFileType",
    "UrlAnalyzer",
    "analyze_file",
    "analyze_url",
]
