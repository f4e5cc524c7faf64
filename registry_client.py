"""
Registry Catalog Client

AI Attribution (AIA): EAI Hin R Claude Code v1.0
Full: AIA Entirely AI, Human-initiated, Reviewed, Claude Code v1.0
Expanded: This work was entirely AI-generated. AI was prompted for its contributions,
or AI assistance was enabled. AI-generated content was reviewed and approved.
The following model(s) or application(s) were used: Claude Code.
Interpretation: https://aiattribution.github.io/interpret-attribution
More: https://aiattribution.github.io/
Vibe-Coder: Andrew Potozniak <potozniak@redhat.com>
Session Date: 2026-10-19
"""

import asyncio
import base64
import re
import time
from typing import Dict, List, Any, Optional
from urllib.parse import urljoin, quote

import httpx

CATALOG_ENDPOINT = '/v2/_catalog'
DEFAULT_TIMEOUT = 30.0
API_CALL_LOG_LIMIT = 100
USER_AGENT = "Container-Image-Catalog/0.1.0"


class FetchError(Exception):
    """Any failure retrieving data from a registry"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message or "Unknown registry error"

    def __str__(self) -> str:
        return self.message


class TransportError(FetchError):
    """Connection, DNS, TLS or timeout failure"""


class HttpStatusError(FetchError):
    """Registry answered with a non-2xx status"""

    def __init__(self, status_code: int, url: str, message: str = None):
        if message is None:
            if status_code == 404:
                message = f"catalog not found (HTTP 404 from {url})"
            elif status_code == 401:
                message = f"Authentication required (HTTP 401 from {url})"
            else:
                message = f"Registry returned HTTP {status_code} for {url}"
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class DecodeError(FetchError):
    """Response body is not the JSON shape the registry API promises"""


def sort_tags_by_timestamp(tags_list, manifest_metadata=None):
    """Sort tags by timestamp (newest first) using manifest metadata if available"""
    if not manifest_metadata:
        # Fallback to alphabetical sorting
        return sorted(tags_list, key=str.lower)

    # Build tag-to-timestamp mapping
    tag_timestamps = {}
    for manifest_data in manifest_metadata.values():
        time_uploaded = manifest_data.get("timeUploadedMs", "0")
        time_created = manifest_data.get("timeCreatedMs", "0")

        # Use upload time if available, otherwise creation time
        timestamp = int(time_uploaded) if time_uploaded != "0" else int(time_created)

        for tag in manifest_data.get("tag", []):
            tag_timestamps[tag] = timestamp

    def tag_sort_key(tag_name):
        return (-tag_timestamps.get(tag_name, 0), tag_name.lower())

    return sorted(tags_list, key=tag_sort_key)


def _string_list(body: Any, field: str, url: str, allow_null: bool = False) -> List[str]:
    """Pull a list of strings out of a decoded JSON object"""
    if not isinstance(body, dict):
        raise DecodeError(f"Unexpected response from {url}: expected a JSON object")
    if field not in body:
        raise DecodeError(f"Unexpected response from {url}: missing '{field}' field")

    values = body[field]
    if values is None and allow_null:
        return []
    if not isinstance(values, list) or not all(isinstance(value, str) for value in values):
        raise DecodeError(f"Unexpected response from {url}: '{field}' must be a list of strings")
    return list(values)


class RegistryClient:
    """HTTP client for Docker Registry API v2 with authentication support"""

    def __init__(self, base_url: str, timeout: float = DEFAULT_TIMEOUT, username: str = None,
                 password: str = None, auth_type: str = "none", verify_tls: bool = True,
                 transport: httpx.AsyncBaseTransport = None, tui_debug_logger=None,
                 call_recorder=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = None
        self.username = username
        self.password = password
        self.auth_type = auth_type  # "bearer", "basic", or "none"
        self.verify_tls = verify_tls
        self.transport = transport
        self.tui_debug_logger = tui_debug_logger
        self.call_recorder = call_recorder
        self.cached_token = None

    def _filter_response_headers(self, headers: dict) -> dict:
        """Filter response headers to exclude potentially sensitive information"""
        safe_headers = {
            'content-type', 'content-length', 'content-encoding',
            'date', 'cache-control', 'expires', 'last-modified',
            'link', 'location',
            'docker-content-digest', 'docker-distribution-api-version',
            'x-ratelimit-limit', 'x-ratelimit-remaining', 'x-ratelimit-reset',
            'www-authenticate',
        }

        filtered = {}
        for key, value in headers.items():
            lowered = key.lower()
            if lowered in safe_headers:
                filtered[key] = value
            elif lowered.startswith('x-') and not any(s in lowered for s in ['auth', 'token', 'key', 'secret']):
                filtered[key] = value
        return filtered

    async def __aenter__(self):
        """Async context manager entry"""
        client_kwargs = {
            "timeout": self.timeout,
            "verify": self.verify_tls,
            "follow_redirects": True,
            "headers": {
                "User-Agent": USER_AGENT,
                "Accept": "application/json",
            },
        }
        if self.transport is not None:
            client_kwargs["transport"] = self.transport
        self.session = httpx.AsyncClient(**client_kwargs)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        if self.session:
            await self.session.aclose()
            self.session = None

    def _get_auth_headers(self) -> Dict[str, str]:
        """Get appropriate authentication headers"""
        if self.cached_token:
            return {"Authorization": f"Bearer {self.cached_token}"}
        if self.auth_type == "basic" and self.username and self.password:
            credentials = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
            return {"Authorization": f"Basic {credentials}"}
        if self.auth_type == "bearer" and self.password:
            return {"Authorization": f"Bearer {self.password}"}
        return {}

    def _parse_www_authenticate(self, www_auth_header: str) -> Dict[str, str]:
        """Parse WWW-Authenticate header to extract realm, service, scope"""
        if not www_auth_header.lower().startswith('bearer'):
            return {}
        auth_params = dict(re.findall(r'(\w+)="([^"]*)"', www_auth_header))

        if self.tui_debug_logger:
            self.tui_debug_logger.debug("WWW-Authenticate parsed",
                                        realm=auth_params.get('realm', 'not_found'),
                                        service=auth_params.get('service', 'not_found'),
                                        scope_provided='scope' in auth_params)
        return auth_params

    async def _get_registry_token(self, challenge: Dict[str, str]) -> Optional[str]:
        """Exchange a Bearer challenge for a token at the registry auth service"""
        realm = challenge.get('realm')
        if not realm:
            return None

        params = {'service': challenge.get('service', 'registry')}
        if challenge.get('scope'):
            params['scope'] = challenge['scope']

        headers = {}
        if self.username and self.password:
            credentials = base64.b64encode(f"{self.username}:{self.password}".encode()).decode()
            headers["Authorization"] = f"Basic {credentials}"

        if self.tui_debug_logger:
            self.tui_debug_logger.debug("Token request initiated",
                                        token_url=realm,
                                        anonymous=not headers)

        try:
            response = await self.session.get(realm, params=params, headers=headers)
        except httpx.HTTPError as e:
            if self.tui_debug_logger:
                self.tui_debug_logger.debug("Token request failed", error=str(e))
            return None

        if response.status_code != 200:
            if self.tui_debug_logger:
                self.tui_debug_logger.debug("Token request rejected", status_code=response.status_code)
            return None

        try:
            token_data = response.json()
        except ValueError:
            return None
        if not isinstance(token_data, dict):
            return None

        token = token_data.get('token') or token_data.get('access_token')
        if token:
            self.cached_token = token
        return token

    def _describe_transport_error(self, url: str, error: Exception) -> str:
        """Human readable message for a failed connection"""
        if isinstance(error, httpx.TimeoutException):
            return f"Timed out contacting {url}"

        error_details = f"Error: {error}" if str(error) else f"Error: {type(error).__name__}"
        lowered = str(error).lower()
        if "certificate" in lowered or "ssl" in lowered:
            error_details += " (TLS/SSL certificate issue)"
        elif isinstance(error, httpx.ConnectError):
            error_details += f" (could not connect to {self.base_url})"
        elif isinstance(error, (httpx.UnsupportedProtocol, httpx.InvalidURL)):
            error_details += f" (invalid registry URL {self.base_url})"
        return error_details

    def _record(self, call_data: Dict[str, Any]) -> None:
        if self.call_recorder is not None:
            self.call_recorder(call_data)

    @staticmethod
    def _timestamp() -> str:
        return time.strftime("%H:%M:%S.") + f"{int((time.time() % 1) * 1000):03d}"

    async def _make_request(self, endpoint: str) -> httpx.Response:
        """Make HTTP GET request, retrying once with a token on a Bearer challenge"""
        url = urljoin(self.base_url + '/', endpoint.lstrip('/'))
        start_time = time.time()

        try:
            response = await self.session.get(url, headers=self._get_auth_headers())

            if response.status_code == 401 and not self.cached_token and self.auth_type != "basic":
                challenge = self._parse_www_authenticate(response.headers.get('WWW-Authenticate', ''))
                if challenge:
                    token = await self._get_registry_token(challenge)
                    if token:
                        if self.tui_debug_logger:
                            self.tui_debug_logger.debug("Token acquired, retrying request", url=url)
                        response = await self.session.get(url, headers=self._get_auth_headers())
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            message = self._describe_transport_error(url, e)
            self._record({
                "url": url,
                "method": "GET",
                "status_code": 0,
                "duration_ms": int((time.time() - start_time) * 1000),
                "size_bytes": 0,
                "headers": {},
                "content_preview": message,
                "response_content_full": message,
                "timestamp": self._timestamp(),
                "error": str(e),
            })
            if self.tui_debug_logger:
                self.tui_debug_logger.error("Registry request failed", url=url, error=message)
            raise TransportError(message) from e

        self._record({
            "url": url,
            "method": response.request.method,
            "status_code": response.status_code,
            "duration_ms": int((time.time() - start_time) * 1000),
            "size_bytes": len(response.content),
            "headers": self._filter_response_headers(dict(response.headers)),
            "content_preview": response.text[:500] if response.text else "",
            "response_content_full": response.text if response.text else "",
            "timestamp": self._timestamp(),
        })

        if self.tui_debug_logger:
            self.tui_debug_logger.debug("Registry response received",
                                        url=url,
                                        status_code=response.status_code,
                                        size_bytes=len(response.content))

        if not response.is_success:
            raise HttpStatusError(response.status_code, url)
        return response

    def _decode_json(self, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"Malformed JSON from {response.request.url}: {e}") from e

    async def get_catalog(self) -> List[str]:
        """Get repository catalog (GET /v2/_catalog), in server order"""
        response = await self._make_request(CATALOG_ENDPOINT)
        return _string_list(self._decode_json(response), "repositories", str(response.request.url))

    async def get_tags(self, repository: str) -> List[str]:
        """Get tags for repository (GET /v2/{name}/tags/list)"""
        response = await self._make_request(f'/v2/{quote(repository, safe="/")}/tags/list')
        body = self._decode_json(response)
        tags = _string_list(body, "tags", str(response.request.url), allow_null=True)
        return sort_tags_by_timestamp(tags, body.get("manifest"))


class RegistryManager:
    """Creates registry clients and keeps the API call log for the debug console"""

    def __init__(self, timeout: float = DEFAULT_TIMEOUT, verify_tls: bool = True,
                 transport: httpx.AsyncBaseTransport = None):
        self.api_call_log = []  # For debug console
        self.tui_debug_logger = None  # For file-based debug logging
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.transport = transport
        self.registry_config = {}  # {registry_url: {username, password, auth_type}}

    def set_tui_debug_logger(self, debug_logger):
        """Set the TUI debug logger for file-based auth/cache logging"""
        self.tui_debug_logger = debug_logger

    def configure(self, timeout: float = None, verify_tls: bool = None,
                  transport: httpx.AsyncBaseTransport = None):
        """Update connection settings for subsequent fetches"""
        if timeout is not None:
            self.timeout = timeout
        if verify_tls is not None:
            self.verify_tls = verify_tls
        if transport is not None:
            self.transport = transport

    def set_registry_config(self, registry_url: str, username: str = None,
                            password: str = None, auth_type: str = "none"):
        """Remember credentials for one registry (in memory only)"""
        self.registry_config[registry_url.rstrip('/')] = {
            'username': username,
            'password': password,
            'auth_type': auth_type,
        }

    def add_api_call(self, call_data: Dict[str, Any]):
        """Add API call to debug log"""
        self.api_call_log.append(call_data)
        if len(self.api_call_log) > API_CALL_LOG_LIMIT:
            del self.api_call_log[:-API_CALL_LOG_LIMIT]

    def _client_for(self, registry_url: str, timeout: float) -> RegistryClient:
        registry_config = self.registry_config.get(registry_url.rstrip('/'), {})
        return RegistryClient(
            base_url=registry_url,
            timeout=timeout,
            username=registry_config.get('username'),
            password=registry_config.get('password'),
            auth_type=registry_config.get('auth_type', 'none'),
            verify_tls=self.verify_tls,
            transport=self.transport,
            tui_debug_logger=self.tui_debug_logger,
            call_recorder=self.add_api_call,
        )

    async def _with_client(self, registry_url: str, timeout: Optional[float], operation):
        timeout = self.timeout if timeout is None else timeout

        async def run():
            async with self._client_for(registry_url, timeout) as client:
                return await operation(client)

        try:
            return await asyncio.wait_for(run(), timeout)
        except asyncio.TimeoutError as e:
            raise TransportError(f"Timed out after {timeout:g}s waiting for {registry_url}") from e

    async def fetch_catalog(self, registry_url: str, timeout: float = None) -> List[str]:
        """Fetch the repository names served at {registry_url}/v2/_catalog"""
        if self.tui_debug_logger:
            self.tui_debug_logger.debug("Fetching registry catalog", registry_url=registry_url)
        return await self._with_client(registry_url, timeout, lambda client: client.get_catalog())

    async def fetch_tags(self, registry_url: str, repository: str, timeout: float = None) -> List[str]:
        """Fetch the tag list of one repository"""
        if self.tui_debug_logger:
            self.tui_debug_logger.debug("Fetching repository tags",
                                        registry_url=registry_url,
                                        repository=repository)
        return await self._with_client(registry_url, timeout, lambda client: client.get_tags(repository))


# Global registry manager instance
registry_manager = RegistryManager()
