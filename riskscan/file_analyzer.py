"""File analysis orchestration."""

from __future__ import annotations

import mimetypes
import os
from collections.abc import Callable
from typing import Any

from .advice import file_next_steps
from .config import AnalyzerConfig
from .errors import ExtractionFailure, UnsupportedFileType
from .file_checks import (
    ALLOWED_EXTENSIONS,
    FILE_CHECKS,
    FileParsers,
    FileSample,
    category_for,
    file_extension,
)
from .hashing import HashResult, hash_bytes
from .image_utils import read_exif
from .log_utils import log, log_error
from .models import FileAnalysisResult, FileHashes, FileMetadata, Signal
from .pdf_utils import extract_pdf_text
from .scoring import file_risk_level, file_risk_score

DEFAULT_MIME_TYPE = "application/octet-stream"


class FileAnalyzer:
    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        verbose: bool = False,
        pdf_text_extractor: Callable[[bytes], str] | None = None,
        exif_reader: Callable[[bytes], dict[str, Any]] | None = None,
    ) -> None:
        self._config = config or AnalyzerConfig()
        self._verbose = verbose
        self._parsers = FileParsers(
            pdf_text=pdf_text_extractor or extract_pdf_text,
            exif=exif_reader or read_exif,
            debug=verbose,
        )

    def analyze_path(self, path: str, declared_name: str | None = None) -> FileAnalysisResult:
        name = declared_name or os.path.basename(path)
        extension = _require_supported(name)
        log(self._verbose, f"Reading {path} for {extension} checks")
        # One read: hashes, size and signals all describe the same bytes.
        with open(path, "rb") as handle:
            data = handle.read()
        return self._analyze(data, name, extension, hash_bytes(data))

    def analyze_bytes(self, data: bytes, declared_name: str) -> FileAnalysisResult:
        extension = _require_supported(declared_name)
        return self._analyze(bytes(data), declared_name, extension, hash_bytes(data))

    def _analyze(
        self, data: bytes, name: str, extension: str, hashes: HashResult
    ) -> FileAnalysisResult:
        sample = FileSample(data=data, extension=extension)
        signals = tuple(self._run_checks(sample))
        risk_score = file_risk_score(signals)
        risk_level = file_risk_level(risk_score)
        next_steps = tuple(file_next_steps(signals, risk_level))
        log(self._verbose, f"Analyzed {name}: score={risk_score} level={risk_level}")

        metadata = FileMetadata(
            size=hashes.size,
            mime_type=_guess_mime_type(name),
            extension=extension,
            hashes=FileHashes(md5=hashes.md5, sha1=hashes.sha1, sha256=hashes.sha256),
            original_name=name,
        )
        return FileAnalysisResult(
            risk_score=risk_score,
            risk_level=risk_level,
            signals=signals,
            metadata=metadata,
            next_steps=next_steps,
        )

    def _run_checks(self, sample: FileSample) -> list[Signal]:
        category = category_for(sample.extension)
        check = FILE_CHECKS.get(category or "")
        if check is None:
            log(self._verbose, f"No content checks for {sample.extension} files")
            return []
        try:
            return check(sample, self._parsers)
        except Exception as exc:
            failure = ExtractionFailure(category or sample.extension, exc)
            log_error(str(failure))
            return []


def analyze_file(
    path_or_bytes: str | os.PathLike[str] | bytes,
    declared_name: str | None = None,
    config: AnalyzerConfig | None = None,
    verbose: bool = False,
) -> FileAnalysisResult:
    analyzer = FileAnalyzer(config, verbose=verbose)
    if isinstance(path_or_bytes, (bytes, bytearray, memoryview)):
        if not declared_name:
            raise UnsupportedFileType("")
        return analyzer.analyze_bytes(bytes(path_or_bytes), declared_name)
    return analyzer.analyze_path(os.fspath(path_or_bytes), declared_name)


def _require_supported(name: str) -> str:
    extension = file_extension(name)
    if extension not in ALLOWED_EXTENSIONS:
        raise UnsupportedFileType(extension)
    return extension


def _guess_mime_type(name: str) -> str:
    guess, _ = mimetypes.guess_type(name)
    return guess or DEFAULT_MIME_TYPE
