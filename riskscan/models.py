"""Data models for analysis results."""

from dataclasses import asdict, dataclass, field
from typing import Any


LOW = "LOW"
MEDIUM = "MEDIUM"
HIGH = "HIGH"
CRITICAL = "CRITICAL"
RISK_LEVELS = (LOW, MEDIUM, HIGH, CRITICAL)

LIKELY_GENUINE = "LIKELY_GENUINE"
SUSPICIOUS = "SUSPICIOUS"
UNKNOWN = "UNKNOWN"
CLASSIFICATIONS = (LIKELY_GENUINE, SUSPICIOUS, UNKNOWN)


@dataclass(frozen=True)
class Signal:
    id: str
    title: str
    weight: int
    why: str
    evidence: str
    risk_level: str


# URL findings share the signal shape.
Reason = Signal


@dataclass(frozen=True)
class FileHashes:
    md5: str
    sha1: str
    sha256: str


@dataclass(frozen=True)
class FileMetadata:
    size: int
    mime_type: str
    extension: str
    hashes: FileHashes
    original_name: str | None = None


@dataclass(frozen=True)
class FileAnalysisResult:
    risk_score: int
    risk_level: str
    signals: tuple[Signal, ...]
    metadata: FileMetadata
    next_steps: tuple[str, ...]


@dataclass(frozen=True)
class UrlMetadata:
    domain: str
    tld: str
    subdomain_count: int
    path: str
    protocol: str
    query_params: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class UrlAnalysisResult:
    normalized_url: str
    domain: str
    classification: str
    confidence: int
    score: int
    reasons: tuple[Reason, ...]
    metadata: UrlMetadata
    tips: tuple[str, ...]


def result_as_dict(result: FileAnalysisResult | UrlAnalysisResult) -> dict[str, Any]:
    data = asdict(result)
    return _lists_from_tuples(data)


def _lists_from_tuples(value: Any) -> Any:
    if isinstance(value, dict):
        return {key: _lists_from_tuples(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_lists_from_tuples(item) for item in value]
    return value
