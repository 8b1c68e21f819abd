from __future__ import annotations

import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import requests

from .env_loader import load_env_files
from .exceptions import MissingCredentialsError, TransportError

_logger = logging.getLogger(__name__)

# Ensure .env is loaded for library use as well (e.g., scripts importing SalesforceAPI)
load_env_files(quiet=True)

RETRYABLE_STATUS = (429, 500, 502, 503, 504)
# POST may already have been applied server-side (create, _HttpMethod overrides).
RETRYABLE_METHODS = ("GET", "HEAD")


# ----------------------------------------------------------------------
# Configuration dataclass
# ----------------------------------------------------------------------
@dataclass
class SFConfig:
    """Configuration for Salesforce API authentication."""

    # Which auth flow to use – currently we only support client_credentials
    auth_flow: str = "client_credentials"

    # Base login URL (not the instance URL)
    login_url: str = "https://login.salesforce.com"

    client_id: Optional[str] = None
    client_secret: Optional[str] = None

    # Optional: pre-provided token / instance URL (e.g. from cache)
    access_token: Optional[str] = None
    instance_url: Optional[str] = None

    # Optional: override API version (e.g. "v60.0"); otherwise auto-discover
    api_version: Optional[str] = None

    @classmethod
    def from_env(cls) -> SFConfig:
        """Load configuration from environment variables."""
        return cls(
            auth_flow=os.getenv("SF_AUTH_FLOW", "client_credentials"),
            login_url=os.getenv("SF_LOGIN_URL", "https://login.salesforce.com"),
            client_id=os.getenv("SF_CLIENT_ID"),
            client_secret=os.getenv("SF_CLIENT_SECRET"),
            access_token=os.getenv("SF_ACCESS_TOKEN"),
            instance_url=os.getenv("SF_INSTANCE_URL"),
            api_version=os.getenv("SF_API_VERSION"),
        )


# ----------------------------------------------------------------------
# Transport
# ----------------------------------------------------------------------
class SalesforceAPI:
    """Authenticated HTTP transport for the Salesforce REST API.

    Owns the ``requests`` session, the bearer token, the instance URL and the
    API version. It never interprets response status beyond retrying
    transient failures; callers such as ``SObjectsClient`` do that.
    """

    def __init__(
        self,
        cfg: Optional[SFConfig] = None,
        *,
        retries: int = 3,
        backoff: float = 0.8,
        timeout: float = 30.0,
    ) -> None:
        self.cfg = cfg or SFConfig.from_env()
        self.session = requests.Session()
        self.access_token: Optional[str] = None
        self.instance_url: Optional[str] = None
        self.api_version: Optional[str] = None
        self.retries = retries
        self.backoff = backoff
        self.timeout = timeout

    # --------------------------- Public methods -----------------------

    def connect(self) -> None:
        """Authenticate using either an existing token or configured auth flow."""
        if self.cfg.access_token and self.cfg.instance_url:
            _logger.debug("Using existing access token from configuration.")
            self.access_token = self.cfg.access_token
            self.instance_url = self.cfg.instance_url.rstrip("/")
        else:
            _logger.info("Performing OAuth login using auth flow: %s", self.cfg.auth_flow)
            self._login_via_auth_flow()

        if not self.access_token or not self.instance_url:
            raise RuntimeError("Authentication did not yield access_token and instance_url.")

        self.session.headers.update({"Authorization": f"Bearer {self.access_token}"})
        self.api_version = self.cfg.api_version or self._discover_latest_api_version()
        _logger.info(
            "Connected to Salesforce instance=%s api=%s",
            self.instance_url,
            self.api_version,
        )

    def request(
        self,
        method: str,
        url: str,
        *,
        data: Any = None,
        headers: Optional[Dict[str, str]] = None,
        stream: bool = False,
        auth_required: bool = True,
    ) -> requests.Response:
        """Send one request; GET/HEAD are retried on connection errors and 429/5xx.

        The last response is returned whatever its status. A connection error
        on the final attempt raises ``TransportError``.
        """
        hdrs: Dict[str, str] = dict(headers or {})
        if auth_required and self.access_token:
            hdrs["Authorization"] = f"Bearer {self.access_token}"

        attempts = self.retries if method.upper() in RETRYABLE_METHODS else 1
        for attempt in range(1, attempts + 1):
            try:
                r = self.session.request(
                    method,
                    url,
                    data=data,
                    headers=hdrs,
                    stream=stream,
                    timeout=self.timeout,
                )
            except requests.RequestException as e:
                _logger.warning("Request error (attempt %d/%d): %s", attempt, attempts, e)
                if attempt == attempts:
                    raise TransportError(f"{method} {url} failed: {e}") from e
                time.sleep(self.backoff * attempt)
                continue

            if r.status_code in RETRYABLE_STATUS and attempt < attempts:
                _logger.warning("HTTP %s -> retrying %d/%d", r.status_code, attempt, attempts)
                r.close()
                time.sleep(self.backoff * attempt)
                continue

            return r
        raise RuntimeError("Exceeded maximum retries.")

    # --------------------------- Internal helpers --------------------

    def _login_via_auth_flow(self) -> None:
        """Dispatch to the configured auth flow."""
        if self.cfg.auth_flow == "client_credentials":
            self._client_credentials_login()
        else:
            raise RuntimeError(f"Unsupported SF_AUTH_FLOW: {self.cfg.auth_flow!r}")

    def _client_credentials_login(self) -> None:
        """Perform OAuth2 client credentials flow."""
        missing = [
            k
            for k, v in {
                "SF_CLIENT_ID": self.cfg.client_id,
                "SF_CLIENT_SECRET": self.cfg.client_secret,
                "SF_LOGIN_URL": self.cfg.login_url,
            }.items()
            if not v
        ]
        if missing:
            raise MissingCredentialsError(missing)

        token_url = f"{self.cfg.login_url.rstrip('/')}/services/oauth2/token"
        data = {
            "grant_type": "client_credentials",
            "client_id": self.cfg.client_id,
            "client_secret": self.cfg.client_secret,
        }

        _logger.debug("Requesting access token from %s", token_url)
        r = self._checked("POST", token_url, data=data, auth_required=False)
        payload = r.json()

        # Expect standard Salesforce fields
        self.access_token = payload["access_token"]
        self.instance_url = payload["instance_url"].rstrip("/")

    def _discover_latest_api_version(self) -> str:
        """Find the latest available API version."""
        url = f"{self.instance_url}/services/data/"
        versions = self._checked("GET", url).json()
        best = sorted(versions, key=lambda v: float(v.get("version", "0")), reverse=True)[0]
        version_str = best.get("url", "").split("/")[-1]
        _logger.debug("Latest API version discovered: %s", version_str)
        return version_str

    def _checked(self, method: str, url: str, **kwargs: Any) -> requests.Response:
        r = self.request(method, url, **kwargs)
        if r.status_code >= 400:
            _logger.error("HTTP %s error for %s: %s", r.status_code, url, r.text)
            raise TransportError(
                f"HTTP {r.status_code} from {method} {url}", status_code=r.status_code
            )
        return r
