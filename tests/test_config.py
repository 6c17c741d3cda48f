import pytest

from riskscan.config import DEFAULT_USER_AGENT, AnalyzerConfig

ENV_VARS = (
    "RISKSCAN_FETCH_TIMEOUT_SECONDS",
    "RISKSCAN_FETCH_MAX_BYTES",
    "RISKSCAN_USER_AGENT",
    "RISKSCAN_RDAP_BASE_URL",
    "RISKSCAN_RDAP_TIMEOUT_SECONDS",
    "RISKSCAN_DNS_TIMEOUT_SECONDS",
    "RISKSCAN_NETWORK_CHECKS",
    "MAX_FILE_SIZE",
    "RISKSCAN_STORE_DB",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in ENV_VARS:
        # setenv first so teardown also removes values loaded from .env
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return tmp_path


def test_defaults(clean_env):
    config = AnalyzerConfig.from_env()
    assert config == AnalyzerConfig()
    assert config.fetch_timeout_seconds == 5.0
    assert config.fetch_max_bytes == 256 * 1024
    assert config.user_agent == DEFAULT_USER_AGENT
    assert config.network_checks is True
    assert config.max_file_size == 25 * 1024 * 1024
    assert config.store_db is None


def test_environment_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("RISKSCAN_FETCH_TIMEOUT_SECONDS", "2.5")
    monkeypatch.setenv("RISKSCAN_FETCH_MAX_BYTES", "1024")
    monkeypatch.setenv("RISKSCAN_NETWORK_CHECKS", "false")
    monkeypatch.setenv("MAX_FILE_SIZE", "100")
    monkeypatch.setenv("RISKSCAN_STORE_DB", "scans.db")

    config = AnalyzerConfig.from_env()

    assert config.fetch_timeout_seconds == 2.5
    assert config.fetch_max_bytes == 1024
    assert config.network_checks is False
    assert config.max_file_size == 100
    assert config.store_db == "scans.db"


def test_bad_numbers_fall_back(clean_env, monkeypatch):
    monkeypatch.setenv("RISKSCAN_FETCH_MAX_BYTES", "lots")
    monkeypatch.setenv("RISKSCAN_DNS_TIMEOUT_SECONDS", "soon")
    config = AnalyzerConfig.from_env()
    assert config.fetch_max_bytes == 256 * 1024
    assert config.dns_timeout_seconds == 4.0


def test_dotenv_file(clean_env, monkeypatch):
    (clean_env / ".env").write_text(
        "# local settings\n"
        "RISKSCAN_USER_AGENT='riskscan-test/1.0'\n"
        'RISKSCAN_RDAP_BASE_URL="https://rdap.test/domain/"\n'
        "RISKSCAN_NETWORK_CHECKS=0\n"
        "not a setting\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("RISKSCAN_NETWORK_CHECKS", "yes")

    config = AnalyzerConfig.from_env()

    assert config.user_agent == "riskscan-test/1.0"
    assert config.rdap_base_url == "https://rdap.test/domain/"
    # Existing environment wins over .env.
    assert config.network_checks is True
