import threading

import pytest

from riskscan import InvalidUrl, UrlAnalyzer, analyze_url
from riskscan import url_analyzer
from riskscan.config import AnalyzerConfig
from riskscan.dns_client import DnsRecords
from riskscan.errors import CollaboratorTimeout
from riskscan.fetch_utils import FetchResult
from riskscan.models import LIKELY_GENUINE, SUSPICIOUS

OFFLINE = AnalyzerConfig(network_checks=False)

PHISHING_PAGE = """
<form action="https://collector.evil.test/post">
<input type="hidden" name="a"><input type="hidden" name="b"><input type="hidden" name="c">
<input type="hidden" name="d"><input type="hidden" name="e"><input type="hidden" name="f">
</form>
"""


def _ids(result):
    return [reason.id for reason in result.reasons]


class Recorder:
    def __init__(self, value=None, error=None):
        self.value = value
        self.error = error
        self.calls = []

    def __call__(self, arg):
        self.calls.append(arg)
        if self.error is not None:
            raise self.error
        return self.value


def _online(age=None, dns=None, fetch=None, **config):
    age = age or Recorder(None)
    dns = dns or Recorder(DnsRecords(has_mx=True, has_spf=True))
    fetch = fetch or Recorder(FetchResult("https://example.com/", 200, "<html></html>"))
    analyzer = UrlAnalyzer(
        AnalyzerConfig(**config), age_lookup=age, dns_lookup=dns, fetcher=fetch
    )
    return analyzer, age, dns, fetch


def test_https_domain_offline():
    result = UrlAnalyzer(OFFLINE).analyze("https://example.com")

    assert result.normalized_url == "https://example.com/"
    assert result.domain == "example.com"
    assert _ids(result) == ["ssl_present"]
    assert result.score == 0
    assert result.confidence == 55
    assert result.classification == LIKELY_GENUINE
    assert list(result.tips) == [
        "Always verify the source before entering sensitive information",
        "Use bookmarks for important sites instead of clicking links",
    ]


def test_http_phishing_url_offline():
    result = UrlAnalyzer(OFFLINE).analyze("http://paypal-login.tk/verify")

    assert _ids(result) == ["suspicious_tld", "suspicious_keywords", "no_ssl"]
    assert result.score == 100
    assert result.confidence == 85
    assert result.classification == SUSPICIOUS
    assert list(result.tips) == [
        "Do not enter any personal information on this site",
        "Verify the URL with the legitimate organization",
        "Check for HTTPS and valid SSL certificate",
        "Never enter sensitive information on HTTP sites",
        "Be cautious of URLs containing login/verify keywords",
    ]
    assert result.metadata.protocol == "http"
    assert result.metadata.path == "/verify"


def test_offline_skips_collaborators():
    age, dns, fetch = Recorder(10), Recorder(DnsRecords(False, False)), Recorder(None)
    UrlAnalyzer(OFFLINE, age_lookup=age, dns_lookup=dns, fetcher=fetch).analyze("example.com")
    assert age.calls == dns.calls == fetch.calls == []


def test_network_reasons_in_fixed_order():
    analyzer, age, dns, fetch = _online(
        age=Recorder(5),
        dns=Recorder(DnsRecords(has_mx=False, has_spf=True)),
        fetch=Recorder(FetchResult("https://www.example.com/", 200, PHISHING_PAGE)),
    )

    result = analyzer.analyze("https://www.example.com/?utm_source=mail")

    assert _ids(result) == [
        "ssl_present",
        "new_domain",
        "no_mx_record",
        "external_form_action",
        "many_hidden_inputs",
    ]
    assert age.calls == ["example.com"]
    assert dns.calls == ["example.com"]
    assert fetch.calls == ["https://www.example.com/"]
    assert result.score == 72
    assert result.classification == SUSPICIOUS


def test_established_domain_lowers_score():
    analyzer, _, _, _ = _online(age=Recorder(4000))
    result = analyzer.analyze("https://example.com")
    assert _ids(result) == ["ssl_present", "established_domain"]
    assert result.score == 0
    assert result.classification == LIKELY_GENUINE


def test_ip_host_skips_age_and_dns():
    analyzer, age, dns, fetch = _online()
    result = analyzer.analyze("http://192.168.1.10/")
    assert age.calls == []
    assert dns.calls == []
    assert fetch.calls == ["http://192.168.1.10/"]
    assert "numeric_ip" in _ids(result)


def test_failing_lookup_is_skipped(capsys):
    analyzer, _, _, _ = _online(age=Recorder(error=RuntimeError("registry down")))
    result = analyzer.analyze("https://example.com")
    assert _ids(result) == ["ssl_present"]
    assert "domain age extractor failed: registry down" in capsys.readouterr().err


def test_fetch_timeout_adds_timeout_reason():
    analyzer, _, _, _ = _online(fetch=Recorder(error=CollaboratorTimeout("content fetch", 5)))
    result = analyzer.analyze("https://example.com")
    assert _ids(result) == ["ssl_present", "timeout_error"]


def test_fetch_error_adds_nothing():
    analyzer, _, _, _ = _online(fetch=Recorder(error=ConnectionError("refused")))
    assert _ids(analyzer.analyze("https://example.com")) == ["ssl_present"]


def test_non_2xx_page_adds_nothing():
    analyzer, _, _, _ = _online(fetch=Recorder(FetchResult("https://example.com/", 404)))
    assert _ids(analyzer.analyze("https://example.com")) == ["ssl_present"]


def test_hung_fetch_is_abandoned(monkeypatch):
    monkeypatch.setattr(url_analyzer, "STEP_GRACE_SECONDS", 0.0)
    release = threading.Event()

    def hanging_fetch(url):
        release.wait(5)
        return FetchResult(url, 200, "<script>eval(1)</script>")

    analyzer, _, _, _ = _online(fetch=hanging_fetch, fetch_timeout_seconds=0.1)
    try:
        result = analyzer.analyze("https://example.com")
    finally:
        release.set()
    assert _ids(result) == ["ssl_present", "timeout_error"]


def test_repeat_analysis_is_identical():
    analyzer = UrlAnalyzer(OFFLINE)
    assert analyzer.analyze("http://abc123def.xyz/login") == analyzer.analyze(
        "http://abc123def.xyz/login"
    )


@pytest.mark.parametrize("raw", ["", "https://", "http://bad host/"])
def test_invalid_url(raw):
    with pytest.raises(InvalidUrl):
        UrlAnalyzer(OFFLINE).analyze(raw)


def test_analyze_url_function():
    result = analyze_url("example.com", config=OFFLINE)
    assert result.normalized_url == "https://example.com/"


def test_lookups_use_domain_under_public_suffix():
    analyzer, age, dns, _ = _online()
    analyzer.analyze("https://login.mybank.co.uk/")
    assert age.calls == ["mybank.co.uk"]
    assert dns.calls == ["mybank.co.uk"]


def test_network_steps_run_on_daemon_threads():
    seen = []

    def recording_fetch(url):
        seen.append(threading.current_thread().daemon)
        return FetchResult(url, 200, "<html></html>")

    analyzer, _, _, _ = _online(fetch=recording_fetch)
    analyzer.analyze("https://example.com")
    assert seen == [True]
