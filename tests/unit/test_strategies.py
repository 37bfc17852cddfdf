# SPDX-FileCopyrightText: 2025 Theori Inc.
# SPDX-License-Identifier: AGPL-3.0-or-later

import socket

import pytest

from wordbuster.config import Options
from wordbuster.errors import ConfigurationError, ErrorCategory, SetupError
from wordbuster.http import ProbeResponse, StubProbeClient
from wordbuster.models import ProbeError, Result
from wordbuster.strategies import (
    DEFAULT_STATUS_CODES,
    DirOptions,
    DirStrategy,
    DnsOptions,
    DnsStrategy,
    Strategy,
    normalize_base_url,
    parse_status_codes,
)

NOT_FOUND = ProbeResponse(ok=True, status_code=404)


def dir_strategy(responses=None, default=NOT_FOUND, dir_options=None, **overrides):
    options = Options(target="http://target.test", **overrides)
    client = StubProbeClient(responses, default=default)
    return DirStrategy(options, client, dir_options), client


def test_parse_status_codes():
    assert parse_status_codes(None) == DEFAULT_STATUS_CODES
    assert parse_status_codes("200, 403,") == frozenset({200, 403})
    assert parse_status_codes([500]) == frozenset({500})
    for bad in ("abc", "99", ","):
        with pytest.raises(ConfigurationError):
            parse_status_codes(bad)


def test_normalize_base_url():
    assert normalize_base_url("target.test") == "http://target.test/"
    assert normalize_base_url("https://target.test/app") == "https://target.test/app/"


def test_strategies_satisfy_protocol():
    strategy, _ = dir_strategy()
    assert isinstance(strategy, Strategy)
    assert isinstance(DnsStrategy(Options(target="example.test"), resolver=lambda host: []), Strategy)


def test_dir_process_classifies_hits_misses_and_errors():
    strategy, client = dir_strategy(
        {
            "http://target.test/admin": ProbeResponse(ok=True, status_code=200, content_length=42),
            "http://target.test/old": ProbeResponse(ok=True, status_code=301, location="/new"),
            "http://target.test/broken": ProbeResponse(
                ok=False, error_message="invalid certificate", error_category=ErrorCategory.INVALID_CERTIFICATE
            ),
        },
        cookies="session=1",
    )

    hit = strategy.process("admin")
    assert isinstance(hit, Result) and hit.found is True and hit.length == 42
    redirect = strategy.process("old")
    assert redirect.found is True and redirect.extra["location"] == "/new"
    miss = strategy.process("nothing")
    assert isinstance(miss, Result) and miss.found is False and miss.status_code == 404
    error = strategy.process("broken")
    assert isinstance(error, ProbeError)
    assert error.category == ErrorCategory.INVALID_CERTIFICATE
    assert str(error) == "broken: invalid certificate"
    assert all(cookie == "session=1" for _, cookie in client.requests)


def test_dir_result_to_string():
    strategy, _ = dir_strategy()
    assert strategy.result_to_string(Result(word="admin", status_code=200, length=42)) == "/admin (Status: 200) [Size: 42]"
    assert strategy.result_to_string(Result(word="old", status_code=301, extra={"location": "/new"})) == "/old (Status: 301) [--> /new]"
    assert strategy.result_to_string(Result(word="nope", status_code=404, found=False)) == ""

    expanded, _ = dir_strategy(dir_options=DirOptions(expanded=True, no_status=True))
    assert expanded.result_to_string(Result(word="admin", status_code=200)) == "http://target.test/admin"


def test_dir_setup_rejects_unreachable_target():
    strategy, _ = dir_strategy(default=ProbeResponse(ok=False, error_message="connection refused"))
    with pytest.raises(SetupError, match="unable to connect"):
        strategy.setup()


def test_dir_setup_detects_wildcard_responses():
    strategy, _ = dir_strategy(default=ProbeResponse(ok=True, status_code=200))
    with pytest.raises(SetupError, match="wildcard"):
        strategy.setup()

    forced, _ = dir_strategy(default=ProbeResponse(ok=True, status_code=200), dir_options=DirOptions(wildcard_forced=True))
    forced.setup()


def test_dir_setup_passes_for_regular_targets():
    strategy, client = dir_strategy({"http://target.test/": ProbeResponse(ok=True, status_code=200)})
    strategy.setup()
    assert len(client.requests) == 2


def test_dir_config_string():
    strategy, _ = dir_strategy(
        dir_options=DirOptions(status_codes=frozenset({200, 403}), extensions=("php",)),
        wordlist="words.txt",
        username="admin",
    )
    config = strategy.config_string()
    assert "[+] Url:" in config and "http://target.test/" in config
    assert "200,403" in config
    assert "php" in config
    assert "admin" in config
    assert "Cookies" not in config


def fake_resolver(table):
    def resolve(host):
        if host in table:
            return table[host]
        raise socket.gaierror(socket.EAI_NONAME, "Name or service not known")

    return resolve


def test_dns_process_and_format():
    table = {"example.test": ["10.0.0.1"], "www.example.test": ["10.0.0.2", "10.0.0.3"]}
    strategy = DnsStrategy(Options(target="example.test."), DnsOptions(show_ips=True), resolver=fake_resolver(table))
    strategy.setup()

    hit = strategy.process("www")
    assert hit.found is True
    assert strategy.result_to_string(hit) == "Found: www.example.test [10.0.0.2,10.0.0.3]"
    miss = strategy.process("mail")
    assert isinstance(miss, Result) and miss.found is False
    assert strategy.result_to_string(miss) == ""


def test_dns_transport_errors_are_probe_errors():
    def resolver(host):
        raise OSError("resolver unavailable")

    strategy = DnsStrategy(Options(target="example.test"), resolver=resolver)
    outcome = strategy.process("www")
    assert isinstance(outcome, ProbeError)
    assert outcome.message == "resolver unavailable"


def test_dns_wildcard_detection():
    strategy = DnsStrategy(Options(target="example.test"), resolver=lambda host: ["10.9.9.9"])
    with pytest.raises(SetupError, match="wildcard"):
        strategy.setup()

    forced = DnsStrategy(Options(target="example.test"), DnsOptions(wildcard_forced=True), resolver=lambda host: ["10.9.9.9"])
    forced.setup()
    assert forced.process("anything").found is False
    assert "Wildcard forced" in forced.config_string()
