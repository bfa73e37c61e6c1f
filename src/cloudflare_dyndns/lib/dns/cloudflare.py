"""
Cloudflare DNS REST client
"""
import json
import logging
from typing import Any, Dict, List, Optional

import requests
from requests.exceptions import RequestException

from ..config import Config
from ..utils import join_url
from .base import APIError, DNSRecord, TransportError
from .envelope import ProviderResponse, decode_envelope

# Per-call timeout in seconds
REQUEST_TIMEOUT = 10


class CloudflareClient:
    """
    Stateless request/response wrapper around the Cloudflare DNS records API

    Every call is a single request: there is no retry at this layer.
    """

    def __init__(
        self,
        base_url: str,
        api_token: str,
        zone_id: str,
        user_agent: str,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.base_url = base_url
        self.api_token = api_token
        self.zone_id = zone_id
        self.user_agent = user_agent
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "CloudflareClient":
        return cls(
            base_url=config.base_url,
            api_token=config.api_token,
            zone_id=config.zone_id,
            user_agent=config.user_agent,
            **kwargs
        )

    @property
    def headers(self) -> Dict[str, str]:
        return {
            'Authorization': f"Bearer {self.api_token}",
            'Content-Type': "application/json",
            'User-Agent': self.user_agent,
            'Accept': "*/*",
        }

    def list_records(self, zone_id: Optional[str] = None) -> List[DNSRecord]:
        """
        List DNS records of a zone

        Args:
            zone_id: Zone to list, defaults to the configured zone

        Returns:
            Records in provider order

        Raises:
            TransportError: If the API could not be reached
            DecodeError: If the response is not a valid envelope
            APIError: If the API reported a failure
        """
        zone_id = zone_id or self.zone_id
        response = self._request("GET", f"/zones/{zone_id}/dns_records")
        self._raise_for_failure(response, "Failed to get DNS records")
        self.logger.debug(f"Fetched {len(response.result)} DNS records for zone {zone_id}")
        return response.result

    def update_record(self, record: DNSRecord, zone_id: Optional[str] = None) -> List[DNSRecord]:
        """
        Replace a DNS record

        Args:
            record: Record to write; its ``id`` selects the record to replace
            zone_id: Zone of the record, defaults to the configured zone

        Returns:
            Records echoed back by the API (usually the updated record)

        Raises:
            TransportError: If the API could not be reached
            DecodeError: If the response is not a valid envelope
            APIError: If the API rejected the update
        """
        zone_id = zone_id or self.zone_id
        response = self._request(
            "PUT", f"/zones/{zone_id}/dns_records/{record.id}", data=record.to_dict()
        )
        self._raise_for_failure(response, f"Failed to update DNS record {record.name}")
        self.logger.debug(f"Updated DNS record {record.id} ({record.name}) to {record.address}")
        return response.result

    def _request(self, method: str, endpoint: str, data: Optional[Dict[str, Any]] = None) -> ProviderResponse:
        """Send one request and decode the response envelope"""
        try:
            url = join_url(self.base_url, endpoint)
        except ValueError as e:
            raise TransportError(str(e))
        body = json.dumps(data) if data is not None else None

        self.logger.debug(f"{method} {url}")
        try:
            response = self.session.request(
                method,
                url,
                data=body,
                headers=self.headers,
                timeout=self.timeout,
            )
        except RequestException as e:
            raise TransportError(f"{method} {url} failed: {str(e)}")

        # Failures are reported inside the envelope, so the status code is
        # only kept for context
        return decode_envelope(response.content, status_code=response.status_code)

    def _raise_for_failure(self, response: ProviderResponse, message: str) -> None:
        if response.success:
            return
        for error in response.errors:
            self.logger.debug(f"{message}: {error}")
        raise APIError(message, errors=response.errors)
