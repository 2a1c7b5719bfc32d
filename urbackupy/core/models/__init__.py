"""Typed result models returned by UrBackupClient operations."""
from .clients import (
    ClientStatus,
    ExtraClient,
    Group,
    User,
    AddedClient,
    ServerVersion,
)
from .jobs import (
    BackupType,
    UsageEntry,
    Activity,
    PastActivity,
    Activities,
    Backup,
    Backups,
    LogEntry,
)

__all__ = [
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
]
