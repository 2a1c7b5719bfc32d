"""
Transport configuration.

Options handed to aiohttp when the API client opens its session and
sends requests.
"""
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, Union
import ssl

import aiohttp


@dataclass
class ProxyConfig:
    """HTTP(S) proxy between the client and the UrBackup server."""
    url: str
    username: Optional[str] = None
    password: Optional[str] = None

    def to_request_kwargs(self) -> Dict[str, Any]:
        """Proxy arguments for ``ClientSession.post``."""
        auth = None
        if self.username:
            auth = aiohttp.BasicAuth(self.username, self.password or '')
        return {'proxy': self.url, 'proxy_auth': auth}


@dataclass
class SSLConfig:
    """
    Certificate checking for https endpoints.

    UrBackup servers are frequently reached over plain HTTP or through a
    reverse proxy with a private CA, hence the ``ca_file`` option.
    """
    verify: bool = True
    ca_file: Optional[str] = None
    check_hostname: bool = True

    def create_ssl_context(self) -> Union[ssl.SSLContext, bool]:
        """Create SSL context from configuration (False disables verification)."""
        if not self.verify:
            return False

        context = ssl.create_default_context(cafile=self.ca_file)
        context.check_hostname = self.check_hostname
        return context


@dataclass
class TimeoutConfig:
    """
    Per-request limits handed to aiohttp.

    The library imposes no operation-level timeout on top of these.
    """
    total: float = 60.0
    connect: float = 15.0
    sock_read: float = 30.0

    def to_aiohttp_timeout(self) -> aiohttp.ClientTimeout:
        return aiohttp.ClientTimeout(
            total=self.total,
            connect=self.connect,
            sock_read=self.sock_read
        )


@dataclass
class RetryConfig:
    """
    Backoff for network failures of idempotent calls (listings and
    identity lookups). Logins and mutating actions are sent once.
    """
    max_retries: int = 2
    base_delay: float = 0.25
    max_delay: float = 4.0
    exponential_base: float = 2.0

    def calculate_delay(self, attempt: int) -> float:
        """Calculate delay for given attempt number."""
        delay = self.base_delay * (self.exponential_base ** attempt)
        return min(delay, self.max_delay)


@dataclass
class APIConfig:
    """
    Complete transport configuration for one UrBackup server.
    """
    user_agent: str = 'urbackupy/1.0.0'

    proxy: Optional[ProxyConfig] = None
    ssl: SSLConfig = field(default_factory=SSLConfig)
    timeout: TimeoutConfig = field(default_factory=TimeoutConfig)
    retry: RetryConfig = field(default_factory=RetryConfig)

    # Level of the urbackupy.api logger when the root logger is unconfigured
    log_level: int = 20  # logging.INFO

    # A single server is contacted; keep its connection pool small
    limit_per_host: int = 4

    @classmethod
    def default(cls) -> 'APIConfig':
        """Create default configuration."""
        return cls()

    def get_connector_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp TCPConnector."""
        return {
            'limit_per_host': self.limit_per_host,
            'ssl': self.ssl.create_ssl_context(),
        }

    def get_session_kwargs(self) -> Dict[str, Any]:
        """Get kwargs for aiohttp ClientSession."""
        return {
            'headers': {
                'User-Agent': self.user_agent,
                'Accept': 'application/json',
            },
            'timeout': self.timeout.to_aiohttp_timeout(),
        }

    def get_request_kwargs(self) -> Dict[str, Any]:
        """Get extra kwargs for each request."""
        if self.proxy is None:
            return {}
        return self.proxy.to_request_kwargs()
