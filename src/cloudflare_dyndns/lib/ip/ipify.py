"""
Public IP discovery through an ipify compatible echo service
"""
import logging
from typing import Optional

import requests
from requests.exceptions import RequestException

from ..config import Config
from ..retry import RetryPolicy
from .address import ResolvedIP

# Per-attempt timeout in seconds
REQUEST_TIMEOUT = 5


class IPResolutionError(Exception):
    """Public IP could not be resolved after all attempts"""

    def __init__(self, message: str, attempts: int = 0, last_error: Optional[str] = None):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error

    def __str__(self) -> str:
        message = super().__str__()
        if self.last_error:
            return f"{message} after {self.attempts} attempt(s): {self.last_error}"
        return message


class IpifyClient:
    """Client for a plain-text IP echo service"""

    def __init__(
        self,
        url: str,
        user_agent: str,
        retry_policy: Optional[RetryPolicy] = None,
        timeout: float = REQUEST_TIMEOUT,
        session: Optional[requests.Session] = None,
        logger: Optional[logging.Logger] = None,
    ):
        self.url = url
        self.user_agent = user_agent
        self.retry_policy = retry_policy or RetryPolicy()
        self.timeout = timeout
        self.session = session or requests.Session()
        self.logger = logger or logging.getLogger(__name__)

    @classmethod
    def from_config(cls, config: Config, **kwargs) -> "IpifyClient":
        return cls(url=config.ipify_url, user_agent=config.user_agent, **kwargs)

    def get_public_ip(self) -> str:
        """
        Get the public IP address of the current machine

        Returns:
            The response body of the first successful attempt, whitespace
            trimmed. The value is not validated as an IP address.

        Raises:
            IPResolutionError: If every attempt failed
        """
        last_error = None
        attempts = 0
        for attempt in self.retry_policy.attempts():
            attempts = attempt
            try:
                return self._fetch()
            except _AttemptFailed as e:
                last_error = str(e)
                self.logger.debug(
                    f"IP lookup attempt {attempt}/{self.retry_policy.max_attempts} failed: {last_error}"
                )

        raise IPResolutionError("unable to get ip address", attempts=attempts, last_error=last_error)

    def resolve(self) -> ResolvedIP:
        """Get the public IP address and classify its family"""
        address = self.get_public_ip()
        resolved = ResolvedIP.from_address(address)
        self.logger.debug(f"Resolved public IP {resolved.address} ({resolved.record_type})")
        return resolved

    def _fetch(self) -> str:
        try:
            response = self.session.get(
                self.url,
                headers={'User-Agent': self.user_agent},
                timeout=self.timeout,
            )
        except RequestException as e:
            raise _AttemptFailed(f"request to {self.url} failed: {str(e)}")

        if response.status_code != 200:
            raise _AttemptFailed(
                f"received an invalid status code when getting ip address: {response.status_code}"
            )

        try:
            body = response.text.strip()
        except (RequestException, UnicodeDecodeError) as e:
            raise _AttemptFailed(f"unable to read response to get ip address: {str(e)}")

        if not body:
            raise _AttemptFailed("received an empty response when getting ip address")
        return body


class _AttemptFailed(Exception):
    """Single lookup attempt failed and may be retried"""
