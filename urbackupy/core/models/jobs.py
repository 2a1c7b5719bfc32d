"""
Job models: storage usage, activities, backups and live log entries.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from .fields import as_bool, as_float, as_int, as_str, require


class BackupType(str, Enum):
    """Backup job types accepted by ``start_backup``."""
    FULL_FILE = 'full_file'
    INCREMENTAL_FILE = 'incr_file'
    FULL_IMAGE = 'full_image'
    INCREMENTAL_IMAGE = 'incr_image'

    @property
    def is_image(self) -> bool:
        return self in (BackupType.FULL_IMAGE, BackupType.INCREMENTAL_IMAGE)


@dataclass
class UsageEntry:
    """Storage used by one client, in bytes."""
    name: str
    files: int = 0
    images: int = 0
    used: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'UsageEntry':
        require(data, 'name')
        return cls(
            name=as_str(data['name']),
            files=as_int(data.get('files')),
            images=as_int(data.get('images')),
            used=as_int(data.get('used'))
        )


@dataclass
class Activity:
    """
    Activity currently in progress.

    Attributes:
        id: Activity id (used by ``stop_activity``)
        client_id: Id of the client the activity runs for
        client_name: Name of that client
        action: Server action code (backup/restore kind)
        percent_done: Progress, -1 when unknown
        total_bytes: Bytes to process, -1 when unknown
        done_bytes: Bytes processed so far
        eta_ms: Estimated remaining time in milliseconds
        speed_bpms: Current speed in bytes per millisecond
        paused: Whether the activity is paused
        details: Free-form detail text
    """
    id: int
    client_id: int
    client_name: str
    action: int = 0
    percent_done: int = -1
    total_bytes: int = -1
    done_bytes: int = 0
    eta_ms: int = 0
    speed_bpms: float = 0.0
    paused: bool = False
    details: str = ''
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Activity':
        require(data, 'id', 'clientid', 'name')
        return cls(
            id=as_int(data['id']),
            client_id=as_int(data['clientid']),
            client_name=as_str(data['name']),
            action=as_int(data.get('action')),
            percent_done=as_int(data.get('pcdone'), -1),
            total_bytes=as_int(data.get('total_bytes'), -1),
            done_bytes=as_int(data.get('done_bytes')),
            eta_ms=as_int(data.get('eta_ms')),
            speed_bpms=as_float(data.get('speed_bpms')),
            paused=as_bool(data.get('paused')),
            details=as_str(data.get('details')),
            raw=dict(data)
        )


@dataclass
class PastActivity:
    """Finished activity from the server's recent history."""
    id: int
    client_id: int
    client_name: str
    backup_time: int = 0
    duration: int = 0
    size_bytes: int = 0
    image: bool = False
    incremental: bool = False
    restore: bool = False
    resumed: bool = False
    success: bool = False
    deleted: bool = False
    details: str = ''
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'PastActivity':
        require(data, 'id', 'clientid', 'name')
        return cls(
            id=as_int(data['id']),
            client_id=as_int(data['clientid']),
            client_name=as_str(data['name']),
            backup_time=as_int(data.get('backuptime')),
            duration=as_int(data.get('duration')),
            size_bytes=as_int(data.get('size_bytes')),
            image=as_bool(data.get('image')),
            incremental=as_bool(data.get('incremental')),
            restore=as_bool(data.get('restore')),
            resumed=as_bool(data.get('resumed')),
            success=as_bool(data.get('success')),
            deleted=as_bool(data.get('del')),
            details=as_str(data.get('details')),
            raw=dict(data)
        )


@dataclass
class Activities:
    """Current and past activities. A list stays empty when it was not requested."""
    current: List[Activity] = field(default_factory=list)
    past: List[PastActivity] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.current or self.past)


@dataclass
class Backup:
    """One file or image backup of a client."""
    id: int
    backup_time: int = 0
    size_bytes: int = 0
    incremental: bool = False
    archived: bool = False
    image: bool = False
    letter: str = ''
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any], image: bool = False) -> 'Backup':
        require(data, 'id')
        return cls(
            id=as_int(data['id']),
            backup_time=as_int(data.get('backuptime')),
            size_bytes=as_int(data.get('size_bytes')),
            incremental=as_bool(data.get('incremental')),
            archived=as_bool(data.get('archived')),
            image=image,
            letter=as_str(data.get('letter')),
            raw=dict(data)
        )


@dataclass
class Backups:
    """File and image backups of a client."""
    file: List[Backup] = field(default_factory=list)
    image: List[Backup] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.file or self.image)


@dataclass
class LogEntry:
    """
    Live log line.

    Attributes:
        id: Monotonic entry id (recency cursor value)
        message: Log text
        level: Severity (0 debug .. 3 error)
        time: Unix time of the entry
    """
    id: int
    message: str
    level: int = 0
    time: int = 0

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'LogEntry':
        require(data, 'id')
        return cls(
            id=as_int(data['id']),
            message=as_str(data.get('msg')),
            level=as_int(data.get('level')),
            time=as_int(data.get('time'))
        )
