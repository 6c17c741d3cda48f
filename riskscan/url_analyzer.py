"""URL analysis orchestration."""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from concurrent.futures import Future
from concurrent.futures import TimeoutError as FutureTimeout

from .advice import url_tips
from .config import AnalyzerConfig
from .dns_client import DnsClient, DnsRecords
from .errors import CollaboratorTimeout, ExtractionFailure
from .fetch_utils import FetchResult, PageFetcher
from .log_utils import log, log_error
from .models import Signal, UrlAnalysisResult, UrlMetadata
from .rdap_client import RdapClient
from .scoring import url_classification, url_confidence, url_score
from .url_checks import (
    check_content,
    check_dns,
    check_domain_age,
    check_lexical,
    check_transport,
    is_ip_literal,
    normalize_url,
    registrable_domain,
    timeout_reasons,
    url_metadata,
)

# Extra wait on top of a step's own timeout before it is abandoned.
STEP_GRACE_SECONDS = 1.0


class UrlAnalyzer:
    """Scores a URL from lexical, transport and optional network evidence.

    Domain age, DNS and content run on daemon threads. A step that outlives
    its deadline is abandoned: its thread keeps running in the background and
    whatever it returns later is discarded.
    """

    def __init__(
        self,
        config: AnalyzerConfig | None = None,
        verbose: bool = False,
        age_lookup: Callable[[str], int | None] | None = None,
        dns_lookup: Callable[[str], DnsRecords] | None = None,
        fetcher: Callable[[str], FetchResult] | None = None,
    ) -> None:
        self._config = config or AnalyzerConfig()
        self._verbose = verbose
        self._age_lookup = age_lookup or RdapClient(
            base_url=self._config.rdap_base_url,
            timeout_seconds=self._config.rdap_timeout_seconds,
            user_agent=self._config.user_agent,
            debug=verbose,
        ).domain_age_days
        self._dns_lookup = dns_lookup or DnsClient(
            timeout_seconds=self._config.dns_timeout_seconds,
            debug=verbose,
        ).lookup
        self._fetcher = fetcher or PageFetcher(
            timeout_seconds=self._config.fetch_timeout_seconds,
            max_bytes=self._config.fetch_max_bytes,
            user_agent=self._config.user_agent,
        )

    def analyze(self, url: str) -> UrlAnalysisResult:
        normalized = normalize_url(url)
        metadata = url_metadata(normalized)
        log(self._verbose, f"Analyzing {normalized}")

        reasons: list[Signal] = []
        reasons.extend(check_lexical(metadata))
        reasons.extend(check_transport(metadata.protocol))
        if self._config.network_checks:
            reasons.extend(self._network_reasons(normalized, metadata))
        else:
            log(self._verbose, "Network checks disabled")

        score = url_score(reasons)
        confidence = url_confidence(reasons)
        classification = url_classification(score, confidence)
        tips = url_tips(reasons, classification)
        log(
            self._verbose,
            f"Analyzed {normalized}: score={score} confidence={confidence} "
            f"classification={classification}",
        )
        return UrlAnalysisResult(
            normalized_url=normalized,
            domain=metadata.domain,
            classification=classification,
            confidence=confidence,
            score=score,
            reasons=tuple(reasons),
            metadata=metadata,
            tips=tuple(tips),
        )

    def _network_reasons(self, normalized: str, metadata: UrlMetadata) -> list[Signal]:
        domain = metadata.domain
        lookup_domain = registrable_domain(domain)
        steps: list[tuple[str, Callable[[], list[Signal]], float]] = []
        if is_ip_literal(domain):
            log(self._verbose, f"Skipping domain age and DNS checks for IP host {domain}")
        else:
            steps.append(
                (
                    "domain age",
                    lambda: check_domain_age(self._age_lookup(lookup_domain)),
                    self._config.rdap_timeout_seconds,
                )
            )
            steps.append(
                (
                    "dns",
                    lambda: check_dns(self._dns_lookup(lookup_domain)),
                    # MX and TXT are resolved one after the other.
                    self._config.dns_timeout_seconds * 2,
                )
            )
        steps.append(
            (
                "content",
                lambda: self._content_reasons(normalized, domain),
                self._config.fetch_timeout_seconds,
            )
        )

        start = time.monotonic()
        futures = [(name, self._start_step(name, step), timeout) for name, step, timeout in steps]
        reasons: list[Signal] = []
        # Collected in submission order so output order is fixed.
        for name, future, timeout in futures:
            reasons.extend(self._collect(name, future, start + timeout + STEP_GRACE_SECONDS))
        return reasons

    def _start_step(self, name: str, step: Callable[[], list[Signal]]) -> Future:
        # Daemon threads: an abandoned step never holds up interpreter exit.
        future: Future = Future()

        def run() -> None:
            future.set_result(self._guarded(name, step))

        threading.Thread(target=run, name=f"riskscan-{name}", daemon=True).start()
        return future

    def _collect(self, name: str, future: Future, deadline: float) -> list[Signal]:
        remaining = max(0.0, deadline - time.monotonic())
        try:
            return future.result(timeout=remaining)
        except FutureTimeout:
            log_error(f"{name} step abandoned after waiting {remaining:.1f}s")
            if name == "content":
                return timeout_reasons()
            return []

    def _content_reasons(self, normalized: str, domain: str) -> list[Signal]:
        try:
            page = self._fetcher(normalized)
        except CollaboratorTimeout as exc:
            log(self._verbose, str(exc))
            return timeout_reasons()
        log(self._verbose, f"Fetched {normalized} status={page.status_code}")
        return check_content(page, domain)

    def _guarded(self, name: str, step: Callable[[], list[Signal]]) -> list[Signal]:
        try:
            return step()
        except Exception as exc:
            log_error(str(ExtractionFailure(name, exc)))
            return []


def analyze_url(
    url: str,
    config: AnalyzerConfig | None = None,
    verbose: bool = False,
) -> UrlAnalysisResult:
    return UrlAnalyzer(config, verbose=verbose).analyze(url)
