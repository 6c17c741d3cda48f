"""MX and SPF presence lookups."""

from __future__ import annotations

from dataclasses import dataclass

import dns.exception
import dns.resolver

from .errors import CollaboratorTimeout
from .log_utils import log_debug


@dataclass(frozen=True)
class DnsRecords:
    has_mx: bool
    has_spf: bool


@dataclass
class DnsClient:
    timeout_seconds: float = 4.0
    debug: bool = False

    def lookup(self, domain: str) -> DnsRecords:
        resolver = dns.resolver.Resolver()
        mx = self._resolve(resolver, domain, "MX")
        txt = self._resolve(resolver, domain, "TXT")
        log_debug(self.debug, f"DNS domain={domain} mx={len(mx)} txt={len(txt)}")
        return DnsRecords(has_mx=bool(mx), has_spf=has_spf_record(txt))

    def _resolve(self, resolver: dns.resolver.Resolver, domain: str, record_type: str) -> list[str]:
        try:
            answers = resolver.resolve(domain, record_type, lifetime=self.timeout_seconds)
        except (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer):
            return []
        except dns.exception.Timeout as exc:
            raise CollaboratorTimeout(f"DNS {record_type} lookup", self.timeout_seconds) from exc
        if record_type == "TXT":
            return [
                b"".join(answer.strings).decode("utf-8", errors="replace") for answer in answers
            ]
        return [str(answer).rstrip(".") for answer in answers]


def has_spf_record(txt_records: list[str]) -> bool:
    return any(record.strip().strip('"').lower().startswith("v=spf1") for record in txt_records)
