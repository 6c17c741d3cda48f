"""URL normalization and evidence extractors."""

from __future__ import annotations

import re
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import tldextract

from .dns_client import DnsRecords
from .errors import InvalidUrl
from .fetch_utils import FetchResult
from .html_utils import inspect_html, is_external_action
from .models import Signal, UrlMetadata
from .rules import (
    LOOKALIKE_PATTERNS,
    SUSPICIOUS_KEYWORDS,
    SUSPICIOUS_TLDS,
    TRACKING_PARAMS,
    URL_RULES,
)

MAX_SUBDOMAINS = 3
NEW_DOMAIN_DAYS = 30
ESTABLISHED_DOMAIN_DAYS = 365
MAX_HIDDEN_INPUTS = 5

_IPV4_RE = re.compile(r"^(\d{1,3}\.){3}\d{1,3}$")
_FORBIDDEN_HOST_CHARS = set(" \t\r\n<>\"\\^`{|}")
_DEFAULT_PORTS = {"http": 80, "https": 443}

# Bundled public suffix snapshot; no suffix list download at runtime.
_SUFFIX_EXTRACT = tldextract.TLDExtract(suffix_list_urls=())


def normalize_url(raw: str) -> str:
    """Canonical form used for every check.

    Adds ``https://`` when no http(s) scheme is given, lower-cases and
    IDNA-encodes the host, and drops tracking query parameters.
    """
    candidate = (raw or "").strip()
    if not candidate:
        raise InvalidUrl(raw, "empty")
    if not candidate.lower().startswith(("http://", "https://")):
        candidate = "https://" + candidate

    try:
        parts = urlsplit(candidate)
        port = parts.port
    except ValueError as exc:
        raise InvalidUrl(raw, str(exc)) from exc

    host = parts.hostname or ""
    if not host or any(ch in _FORBIDDEN_HOST_CHARS for ch in parts.netloc):
        raise InvalidUrl(raw, "missing or malformed host")
    host = _encode_host(raw, host)

    scheme = parts.scheme.lower()
    netloc = f"[{host}]" if ":" in host else host
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        netloc = f"{netloc}:{port}"
    userinfo, sep, _ = parts.netloc.rpartition("@")
    if sep:
        netloc = f"{userinfo}@{netloc}"

    query = parse_qsl(parts.query, keep_blank_values=True)
    kept = [(name, value) for name, value in query if name not in TRACKING_PARAMS]
    return urlunsplit((scheme, netloc, parts.path or "/", urlencode(kept), parts.fragment))


def url_metadata(normalized_url: str) -> UrlMetadata:
    parts = urlsplit(normalized_url)
    domain = parts.hostname or ""
    labels = domain.split(".")
    return UrlMetadata(
        domain=domain,
        tld="." + labels[-1],
        subdomain_count=max(0, len(labels) - 2),
        path=parts.path or "/",
        protocol=parts.scheme,
        query_params=tuple(name for name, _ in parse_qsl(parts.query, keep_blank_values=True)),
    )


def is_ip_literal(domain: str) -> bool:
    return bool(_IPV4_RE.match(domain)) or ":" in domain


def registrable_domain(domain: str) -> str:
    """Domain registered under its public suffix, e.g. ``mybank.co.uk``.

    Hosts without a known public suffix are returned unchanged.
    """
    ext = _SUFFIX_EXTRACT(domain)
    return ext.top_domain_under_public_suffix or domain


def check_lexical(metadata: UrlMetadata) -> list[Signal]:
    reasons: list[Signal] = []
    domain = metadata.domain.lower()

    if metadata.subdomain_count > MAX_SUBDOMAINS:
        reasons.append(URL_RULES["excessive_subdomains"].fire(count=metadata.subdomain_count))

    if metadata.tld in SUSPICIOUS_TLDS:
        reasons.append(URL_RULES["suspicious_tld"].fire(tld=metadata.tld))

    for pattern, rule in LOOKALIKE_PATTERNS:
        if pattern.search(domain):
            reasons.append(rule.fire(pattern=pattern.pattern))

    path = metadata.path.lower()
    keywords = [kw for kw in SUSPICIOUS_KEYWORDS if kw in path or kw in domain]
    if keywords:
        reasons.append(URL_RULES["suspicious_keywords"].fire(keywords=", ".join(keywords)))

    if "xn--" in domain:
        reasons.append(URL_RULES["punycode_detected"].fire())

    if _IPV4_RE.match(domain):
        reasons.append(URL_RULES["numeric_ip"].fire(domain=domain))

    return reasons


def check_transport(protocol: str) -> list[Signal]:
    if protocol == "http":
        return [URL_RULES["no_ssl"].fire()]
    return [URL_RULES["ssl_present"].fire()]


def check_domain_age(age_days: int | None) -> list[Signal]:
    if age_days is None:
        return []
    if age_days < NEW_DOMAIN_DAYS:
        return [URL_RULES["new_domain"].fire(days=age_days)]
    if age_days > ESTABLISHED_DOMAIN_DAYS:
        return [URL_RULES["established_domain"].fire(days=age_days)]
    return []


def check_dns(records: DnsRecords) -> list[Signal]:
    reasons: list[Signal] = []
    if not records.has_mx:
        reasons.append(URL_RULES["no_mx_record"].fire())
    if not records.has_spf:
        reasons.append(URL_RULES["no_spf_record"].fire())
    return reasons


def check_content(page: FetchResult, domain: str) -> list[Signal]:
    if not page.ok or page.text is None:
        return []
    findings = inspect_html(page.text)
    reasons: list[Signal] = []

    seen: set[str] = set()
    for action in findings.form_actions:
        if action in seen or not is_external_action(action, domain):
            continue
        seen.add(action)
        reasons.append(URL_RULES["external_form_action"].fire(action=action))

    if findings.has_dynamic_code:
        reasons.append(URL_RULES["obfuscated_js"].fire())

    if findings.hidden_input_count > MAX_HIDDEN_INPUTS:
        reasons.append(URL_RULES["many_hidden_inputs"].fire(count=findings.hidden_input_count))

    return reasons


def timeout_reasons() -> list[Signal]:
    return [URL_RULES["timeout_error"].fire()]


def _encode_host(raw: str, host: str) -> str:
    if host.isascii():
        return host
    try:
        return host.encode("idna").decode("ascii")
    except UnicodeError as exc:
        raise InvalidUrl(raw, "host is not a valid international domain name") from exc
