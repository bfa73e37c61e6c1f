"""
pytest fixtures for testing
"""
import json
import logging

import pytest
from unittest.mock import Mock

from cloudflare_dyndns.lib.config import Config
from cloudflare_dyndns.lib.dns.base import DNSRecord

ENV_VARS = [
    "CLOUDFLARE_API_TOKEN",
    "CLOUDFLARE_BASE_URL",
    "CLOUDFLARE_ZONE_ID",
    "CLOUDFLARE_UPDATE_RECORDS",
    "DYNDNS_USER_AGENT",
    "DYNDNS_LOG_FILE_PATH",
    "DYNDNS_HOME_GATEWAY",
    "IPIFY_URL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep the caller's environment out of configuration tests"""
    for key in ENV_VARS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config(tmp_path):
    """Valid configuration logging into a temporary directory"""
    return Config(
        api_token="test-token",
        base_url="https://mockserver.com/client/v4",
        zone_id="zone123",
        update_records=["home.example.com"],
        user_agent="test-agent/1.0",
        log_file_path=str(tmp_path),
        ipify_url="https://ip.example.net",
    )


@pytest.fixture
def home_record():
    """A record for the home host"""
    return DNSRecord(
        id="record1",
        name="home.example.com",
        type="A",
        address="1.1.1.1",
        proxied=False,
        ttl=1,
        comment="",
    )


def make_response(payload, status_code=200):
    """Mock requests.Response carrying a JSON (or raw string) body"""
    response = Mock()
    response.status_code = status_code
    body = payload if isinstance(payload, str) else json.dumps(payload)
    response.content = body.encode()
    response.text = body
    return response


def record_payload(record_id="record1", name="home.example.com", record_type="A",
                   content="1.1.1.1", **extra):
    """Wire representation of a record"""
    payload = {"id": record_id, "name": name, "type": record_type, "content": content}
    payload.update(extra)
    return payload


@pytest.fixture(autouse=True)
def reset_logger():
    """Drop handlers installed by setup_logging"""
    yield
    logger = logging.getLogger("cloudflare_dyndns")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()
