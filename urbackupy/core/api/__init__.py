"""UrBackup API module: transport, authentication and request orchestration."""
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig, RetryConfig
from .async_client import AsyncAPIClient, build_api_url
from .async_auth import AsyncAuthService, AuthResult
from .orchestrator import RequestOrchestrator

__all__ = [
    # Transport
    'AsyncAPIClient',
    'build_api_url',

    # Authentication
    'AsyncAuthService',
    'AuthResult',

    # Orchestration
    'RequestOrchestrator',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
]
