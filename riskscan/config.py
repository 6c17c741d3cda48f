"""Configuration helpers for riskscan."""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_USER_AGENT = "Mozilla/5.0 (compatible; VulnerabilityScanner/1.0)"


@dataclass(frozen=True)
class AnalyzerConfig:
    fetch_timeout_seconds: float = 5.0
    fetch_max_bytes: int = 256 * 1024
    user_agent: str = DEFAULT_USER_AGENT
    rdap_base_url: str = "https://rdap.org/domain/"
    rdap_timeout_seconds: float = 5.0
    dns_timeout_seconds: float = 4.0
    network_checks: bool = True
    max_file_size: int = 25 * 1024 * 1024
    store_db: str | None = None

    @staticmethod
    def from_env() -> "AnalyzerConfig":
        _load_dotenv()
        defaults = AnalyzerConfig()
        return AnalyzerConfig(
            fetch_timeout_seconds=_parse_float(
                os.getenv("RISKSCAN_FETCH_TIMEOUT_SECONDS"), defaults.fetch_timeout_seconds
            ),
            fetch_max_bytes=_parse_int(
                os.getenv("RISKSCAN_FETCH_MAX_BYTES"), defaults.fetch_max_bytes
            ),
            user_agent=os.getenv("RISKSCAN_USER_AGENT") or defaults.user_agent,
            rdap_base_url=os.getenv("RISKSCAN_RDAP_BASE_URL") or defaults.rdap_base_url,
            rdap_timeout_seconds=_parse_float(
                os.getenv("RISKSCAN_RDAP_TIMEOUT_SECONDS"), defaults.rdap_timeout_seconds
            ),
            dns_timeout_seconds=_parse_float(
                os.getenv("RISKSCAN_DNS_TIMEOUT_SECONDS"), defaults.dns_timeout_seconds
            ),
            network_checks=os.getenv("RISKSCAN_NETWORK_CHECKS", "true").lower()
            in {"1", "true", "yes"},
            max_file_size=_parse_int(os.getenv("MAX_FILE_SIZE"), defaults.max_file_size),
            store_db=os.getenv("RISKSCAN_STORE_DB") or None,
        )


def _parse_int(raw: str | None, default: int) -> int:
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _parse_float(raw: str | None, default: float) -> float:
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _load_dotenv() -> None:
    env_path = Path(".env")
    if not env_path.exists():
        return
    try:
        content = env_path.read_text(encoding="utf-8")
    except OSError:
        return

    for line in content.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key and key not in os.environ:
            os.environ[key] = value
