"""Per-category file evidence extractors.

Dispatch is by declared extension only; content is never sniffed to pick an
extractor.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from .image_utils import is_jpeg, read_exif
from .log_utils import log_debug
from .models import Signal
from .pdf_utils import extract_pdf_text
from .rules import FILE_RULES

LARGE_ARCHIVE_BYTES = 10 * 1024 * 1024
SMALL_EXECUTABLE_BYTES = 1024
LONG_LINE_CHARS = 1000

_BASE64_RE = re.compile(r"[A-Za-z0-9+/]{50,}={0,2}")

EXTENSION_CATEGORIES = {
    ".pdf": "pdf",
    ".docx": "office",
    ".docm": "office",
    ".xlsx": "office",
    ".xlsm": "office",
    ".pptx": "office",
    ".zip": "archive",
    ".rar": "archive",
    ".7z": "archive",
    ".js": "script",
    ".py": "script",
    ".exe": "executable",
    ".dll": "executable",
    ".msi": "executable",
    ".apk": "apk",
    ".jar": "jar",
    ".png": "image",
    ".jpg": "image",
    ".jpeg": "image",
    ".gif": "image",
    ".txt": "plain",
    ".deb": "package",
    ".rpm": "package",
}

ALLOWED_EXTENSIONS = frozenset(EXTENSION_CATEGORIES)


@dataclass(frozen=True)
class FileSample:
    data: bytes
    extension: str

    @property
    def size(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class FileParsers:
    """Format parsers the extractors delegate to."""

    pdf_text: Callable[[bytes], str] = field(default=extract_pdf_text)
    exif: Callable[[bytes], dict[str, Any]] = field(default=read_exif)
    debug: bool = False


def file_extension(filename: str) -> str:
    index = filename.rfind(".")
    if index == -1:
        return ""
    return filename[index:].lower()


def category_for(extension: str) -> str | None:
    return EXTENSION_CATEGORIES.get(extension.lower())


def check_pdf(sample: FileSample, parsers: FileParsers) -> list[Signal]:
    signals: list[Signal] = []
    text = parsers.pdf_text(sample.data)

    if "/JS" in text or "/JavaScript" in text:
        signals.append(FILE_RULES["pdf_js_detected"].fire())
    if "/EmbeddedFile" in text or "/F" in text:
        signals.append(FILE_RULES["pdf_embedded_files"].fire())
    if "/OpenAction" in text or "/Launch" in text:
        signals.append(FILE_RULES["pdf_suspicious_actions"].fire())
    return signals


def check_office(sample: FileSample, parsers: FileParsers) -> list[Signal]:
    signals: list[Signal] = []
    if b"vbaProject.bin" in sample.data or b"VBA" in sample.data:
        signals.append(FILE_RULES["office_macro_detected"].fire())
    # docm / xlsm naming convention, regardless of content
    if "m" in sample.extension.lower():
        signals.append(FILE_RULES["office_macro_enabled"].fire(extension=sample.extension))
    return signals


def check_archive(sample: FileSample, parsers: FileParsers) -> list[Signal]:
    if sample.size <= LARGE_ARCHIVE_BYTES:
        return []
    size_mb = int(sample.size / 1024 / 1024 + 0.5)
    return [FILE_RULES["archive_large_size"].fire(size_mb=size_mb)]


def check_script(sample: FileSample, parsers: FileParsers) -> list[Signal]:
    signals: list[Signal] = []
    content = sample.data.decode("utf-8", errors="replace")

    if "eval(" in content or "Function(" in content:
        signals.append(FILE_RULES["script_obfuscation"].fire())

    long_lines = sum(1 for line in content.split("\n") if len(line) > LONG_LINE_CHARS)
    if long_lines:
        signals.append(FILE_RULES["script_long_lines"].fire(count=long_lines))

    if _BASE64_RE.search(content):
        signals.append(FILE_RULES["script_base64"].fire())
    return signals


def check_executable(sample: FileSample, parsers: FileParsers) -> list[Signal]:
    signals: list[Signal] = []
    if sample.size > 2 and sample.data[:2] == b"MZ":
        signals.append(FILE_RULES["executable_pe_header"].fire())
    if sample.size < SMALL_EXECUTABLE_BYTES:
        signals.append(FILE_RULES["executable_small_size"].fire(size=sample.size))
    return signals


def check_apk(sample: FileSample, parsers: FileParsers) -> list[Signal]:
    if b"AndroidManifest.xml" in sample.data:
        return [FILE_RULES["apk_manifest_found"].fire()]
    return []


def check_jar(sample: FileSample, parsers: FileParsers) -> list[Signal]:
    if sample.size > 4 and sample.data[:2] == b"PK":
        return [FILE_RULES["jar_signature_found"].fire()]
    return []


def check_image(sample: FileSample, parsers: FileParsers) -> list[Signal]:
    if not is_jpeg(sample.data):
        return []
    try:
        exif = parsers.exif(sample.data)
    except Exception as exc:
        # Most images carry no readable EXIF block.
        log_debug(parsers.debug, f"EXIF parse skipped: {exc}")
        return []
    if exif.get("gps"):
        return [FILE_RULES["image_gps_data"].fire()]
    return []


FILE_CHECKS: dict[str, Callable[[FileSample, FileParsers], list[Signal]]] = {
    "pdf": check_pdf,
    "office": check_office,
    "archive": check_archive,
    "script": check_script,
    "executable": check_executable,
    "apk": check_apk,
    "jar": check_jar,
    "image": check_image,
}
