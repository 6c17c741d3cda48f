"""Recommended next steps for file and URL results."""

from __future__ import annotations

from collections.abc import Sequence

from .models import CRITICAL, HIGH, SUSPICIOUS, Signal


def file_next_steps(signals: Sequence[Signal], risk_level: str) -> list[str]:
    steps: list[str] = []

    if risk_level in (CRITICAL, HIGH):
        steps.append("Do not open or execute this file")
        steps.append("Consider quarantining the file")
        steps.append("Run additional antivirus scans")

    if any("macro" in signal.id for signal in signals):
        steps.append("Disable macros in Office applications")
        steps.append("Use Office Protected View")

    if any("executable" in signal.id for signal in signals):
        steps.append("Verify the source of this executable")
        steps.append("Check file signature and publisher")

    if not steps:
        steps.append("File appears safe, but always verify the source")
        steps.append("Keep your antivirus software updated")

    return steps


def url_tips(reasons: Sequence[Signal], classification: str) -> list[str]:
    tips: list[str] = []
    fired = {reason.id for reason in reasons}

    if classification == SUSPICIOUS:
        tips.append("Do not enter any personal information on this site")
        tips.append("Verify the URL with the legitimate organization")
        tips.append("Check for HTTPS and valid SSL certificate")

    if "no_ssl" in fired:
        tips.append("Never enter sensitive information on HTTP sites")

    if "suspicious_keywords" in fired:
        tips.append("Be cautious of URLs containing login/verify keywords")

    if "lookalike_pattern" in fired:
        tips.append("Check the domain name carefully for typos")

    if not tips:
        tips.append("Always verify the source before entering sensitive information")
        tips.append("Use bookmarks for important sites instead of clicking links")

    return tips
