"""Static rule catalogue for file and URL heuristics.

Each rule is data: the weight, tier and wording of a finding. Extractors decide
whether a rule fires and supply the values its evidence template needs.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from .models import HIGH, LOW, MEDIUM, Signal


@dataclass(frozen=True)
class Rule:
    id: str
    title: str
    weight: int
    why: str
    evidence: str
    risk_level: str

    def fire(self, **values: object) -> Signal:
        return Signal(
            id=self.id,
            title=self.title,
            weight=self.weight,
            why=self.why,
            evidence=self.evidence.format(**values),
            risk_level=self.risk_level,
        )


def _catalogue(*rules: Rule) -> dict[str, Rule]:
    return {rule.id: rule for rule in rules}


FILE_RULES = _catalogue(
    Rule(
        "pdf_js_detected",
        "JavaScript detected in PDF",
        30,
        "PDFs with JavaScript can execute code and may be malicious",
        "Found JavaScript references in PDF content",
        MEDIUM,
    ),
    Rule(
        "pdf_embedded_files",
        "Embedded files detected",
        20,
        "PDFs with embedded files may contain malicious content",
        "Found embedded file references in PDF",
        LOW,
    ),
    Rule(
        "pdf_suspicious_actions",
        "Suspicious actions detected",
        40,
        "PDFs with automatic actions can be dangerous",
        "Found OpenAction or Launch references",
        HIGH,
    ),
    Rule(
        "office_macro_detected",
        "Macro detected in Office document",
        60,
        "Office documents with macros can execute malicious code",
        "Found VBA project or macro indicators",
        HIGH,
    ),
    Rule(
        "office_macro_enabled",
        "Macro-enabled document format",
        40,
        "Macro-enabled formats can contain executable code",
        "File extension indicates macro support: {extension}",
        MEDIUM,
    ),
    Rule(
        "archive_large_size",
        "Large archive file",
        15,
        "Large archives may contain many files or large executables",
        "Archive size: {size_mb}MB",
        LOW,
    ),
    Rule(
        "script_obfuscation",
        "Potential code obfuscation detected",
        50,
        "Obfuscated code can hide malicious functionality",
        "Found eval() or Function() calls",
        HIGH,
    ),
    Rule(
        "script_long_lines",
        "Very long lines detected",
        25,
        "Very long lines may indicate obfuscated or encoded content",
        "Found {count} lines longer than 1000 characters",
        MEDIUM,
    ),
    Rule(
        "script_base64",
        "Base64 encoded content detected",
        30,
        "Base64 encoded content may hide malicious payloads",
        "Found potential Base64 encoded strings",
        MEDIUM,
    ),
    Rule(
        "executable_pe_header",
        "Windows executable detected",
        70,
        "Executable files can contain malicious code",
        "Found PE header (MZ signature)",
        HIGH,
    ),
    Rule(
        "executable_small_size",
        "Unusually small executable",
        20,
        "Very small executables may be suspicious",
        "File size: {size} bytes",
        LOW,
    ),
    Rule(
        "apk_manifest_found",
        "Android APK detected",
        60,
        "APK files can contain malicious Android applications",
        "Found AndroidManifest.xml in APK",
        HIGH,
    ),
    Rule(
        "jar_signature_found",
        "Java JAR file detected",
        50,
        "JAR files can contain executable Java code",
        "Found ZIP/JAR signature (PK)",
        MEDIUM,
    ),
    Rule(
        "image_gps_data",
        "GPS location data found",
        10,
        "Images with GPS data may reveal location information",
        "Found GPS coordinates in EXIF data",
        LOW,
    ),
)


URL_RULES = _catalogue(
    Rule(
        "excessive_subdomains",
        "Excessive subdomains detected",
        25,
        "Too many subdomains may indicate a suspicious URL structure",
        "{count} subdomains found",
        MEDIUM,
    ),
    Rule(
        "suspicious_tld",
        "Suspicious top-level domain",
        40,
        "This TLD is commonly used for malicious sites",
        "Suspicious TLD: {tld}",
        HIGH,
    ),
    Rule(
        "suspicious_keywords",
        "Suspicious keywords detected",
        30,
        "URL contains keywords commonly used in phishing attacks",
        "Found suspicious keywords in URL: {keywords}",
        MEDIUM,
    ),
    Rule(
        "punycode_detected",
        "Punycode encoding detected",
        50,
        "Punycode can be used to create look-alike domains",
        "Found punycode encoding in domain",
        HIGH,
    ),
    Rule(
        "numeric_ip",
        "Numeric IP address detected",
        35,
        "Legitimate sites rarely use IP addresses directly",
        "IP address: {domain}",
        MEDIUM,
    ),
    Rule(
        "no_ssl",
        "No SSL/TLS encryption",
        60,
        "HTTP connections are not encrypted and can be intercepted",
        "Site uses HTTP instead of HTTPS",
        HIGH,
    ),
    Rule(
        "ssl_present",
        "SSL/TLS encryption present",
        -20,
        "HTTPS provides encryption and helps verify site authenticity",
        "Site uses HTTPS protocol",
        LOW,
    ),
    Rule(
        "new_domain",
        "Recently registered domain",
        45,
        "New domains are commonly used in phishing attacks",
        "Domain registered {days} days ago",
        HIGH,
    ),
    Rule(
        "established_domain",
        "Established domain",
        -15,
        "Older domains are less likely to be malicious",
        "Domain registered {days} days ago",
        LOW,
    ),
    Rule(
        "no_mx_record",
        "No MX record found",
        20,
        "Legitimate domains typically have MX records for email",
        "No MX record found in DNS",
        LOW,
    ),
    Rule(
        "no_spf_record",
        "No SPF record found",
        15,
        "SPF records help prevent email spoofing",
        "No SPF record found in DNS",
        LOW,
    ),
    Rule(
        "external_form_action",
        "Form posts to external domain",
        35,
        "Forms posting to external domains may be phishing",
        "Form action: {action}",
        MEDIUM,
    ),
    Rule(
        "obfuscated_js",
        "Obfuscated JavaScript detected",
        40,
        "Obfuscated JavaScript can hide malicious functionality",
        "Found eval() or Function() calls in page content",
        HIGH,
    ),
    Rule(
        "many_hidden_inputs",
        "Many hidden input fields",
        25,
        "Excessive hidden inputs may indicate credential harvesting",
        "{count} hidden input fields found",
        MEDIUM,
    ),
    Rule(
        "timeout_error",
        "Content fetch timeout",
        10,
        "Unable to analyze page content due to timeout",
        "Page took too long to respond",
        LOW,
    ),
)


def _lookalike(weight: int) -> Rule:
    return Rule(
        "lookalike_pattern",
        "Look-alike domain pattern detected",
        weight,
        "Domain contains patterns commonly used in phishing",
        "Pattern matched: {pattern}",
        MEDIUM,
    )


# One finding per matching pattern; all share the lookalike_pattern id.
LOOKALIKE_PATTERNS: tuple[tuple[re.Pattern[str], Rule], ...] = (
    (re.compile(r"[0-9]+"), _lookalike(20)),
    (re.compile(r"[a-z]+[0-9]+[a-z]+"), _lookalike(30)),
    (re.compile(r"[0-9]+[a-z]+[0-9]+"), _lookalike(25)),
)

SUSPICIOUS_KEYWORDS = (
    "login",
    "verify",
    "update",
    "secure",
    "account",
    "banking",
    "paypal",
    "amazon",
    "google",
    "microsoft",
    "apple",
    "facebook",
)

SUSPICIOUS_TLDS = frozenset({".tk", ".ml", ".ga", ".cf", ".gq", ".xyz", ".top", ".club"})

TRACKING_PARAMS = frozenset(
    {"utm_source", "utm_medium", "utm_campaign", "utm_term", "utm_content", "ref", "source"}
)
