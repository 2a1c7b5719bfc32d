"""
urbackupy - Async Python client for the UrBackup server web API.

Usage:
    >>> from urbackupy import UrBackupClient
    >>>
    >>> async with UrBackupClient("http://127.0.0.1:55414", "admin", "secret") as server:
    ...     for client in await server.get_clients(include_removed=False):
    ...         print(client.name, client.file_ok)
"""
import logging
from .client import UrBackupClient

# Configuration
from .core.api import (
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    AsyncAPIClient,
    AsyncAuthService,
    RequestOrchestrator,
)

# Errors
from .core.exceptions import (
    UrBackupError,
    TransportError,
    AuthenticationError,
    DataIntegrityError,
    ValidationError,
)

# Models
from .core.models import (
    ClientStatus,
    ExtraClient,
    Group,
    User,
    AddedClient,
    ServerVersion,
    BackupType,
    UsageEntry,
    Activity,
    PastActivity,
    Activities,
    Backup,
    Backups,
    LogEntry,
)

from .core.crypto import PasswordHasher

__version__ = '1.0.0'


def setup_logging(level=logging.INFO):
    """
    Configure logging for urbackupy modules.

    Sets the level of every urbackupy logger and makes sure messages
    propagate to the root logger's handlers.

    Args:
        level: Logging level (default: logging.INFO)
    """
    loggers = [
        'urbackupy',
        'urbackupy.client',
        'urbackupy.api',
        'urbackupy.auth',
        'urbackupy.orchestrator',
    ]

    for logger_name in loggers:
        logger = logging.getLogger(logger_name)
        logger.setLevel(level)
        logger.propagate = True


__all__ = [
    'UrBackupClient',
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
    'RetryConfig',
    'AsyncAPIClient',
    'AsyncAuthService',
    'RequestOrchestrator',
    'UrBackupError',
    'TransportError',
    'AuthenticationError',
    'DataIntegrityError',
    'ValidationError',
    'ClientStatus',
    'ExtraClient',
    'Group',
    'User',
    'AddedClient',
    'ServerVersion',
    'BackupType',
    'UsageEntry',
    'Activity',
    'PastActivity',
    'Activities',
    'Backup',
    'Backups',
    'LogEntry',
    'PasswordHasher',
    'setup_logging',
]
