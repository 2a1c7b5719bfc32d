"""
Client, group and user models.

Normalized views of the ``status`` and ``settings`` responses.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List

from .fields import as_bool, as_int, as_str, require


@dataclass
class ClientStatus:
    """
    Status of one backup client as listed by the server.

    Attributes:
        id: Client id
        name: Client name (case sensitive)
        group_name: Name of the client's group ('' for the default group)
        online: Whether the client is currently connected
        delete_pending: Whether the client is marked for removal
        last_backup: Unix time of the last file backup (0 if never)
        last_image_backup: Unix time of the last image backup (0 if never)
        last_seen: Unix time the client was last seen
        file_ok: Last file backup is recent enough
        image_ok: Last image backup is recent enough
        ip: Last known address
        client_version: Client software version string
        os_version: Operating system description
        status_code: Raw server status code
        raw: Unmodified server entry
    """
    id: int
    name: str
    group_name: str = ''
    online: bool = False
    delete_pending: bool = False
    last_backup: int = 0
    last_image_backup: int = 0
    last_seen: int = 0
    file_ok: bool = False
    image_ok: bool = False
    ip: str = ''
    client_version: str = ''
    os_version: str = ''
    status_code: int = 0
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'ClientStatus':
        require(data, 'id', 'name')
        return cls(
            id=as_int(data['id']),
            name=as_str(data['name']),
            group_name=as_str(data.get('groupname')),
            online=as_bool(data.get('online')),
            delete_pending=as_bool(data.get('delete_pending')),
            last_backup=as_int(data.get('lastbackup')),
            last_image_backup=as_int(data.get('lastbackup_image')),
            last_seen=as_int(data.get('lastseen')),
            file_ok=as_bool(data.get('file_ok')),
            image_ok=as_bool(data.get('image_ok')),
            ip=as_str(data.get('ip')),
            client_version=as_str(data.get('client_version_string')),
            os_version=as_str(data.get('os_version_string')),
            status_code=as_int(data.get('status')),
            raw=dict(data)
        )

    @property
    def backup_ok(self) -> bool:
        """Both file and image backups are up to date."""
        return self.file_ok and self.image_ok


@dataclass
class ExtraClient:
    """Client discovered on the network or added by address, not yet a full client."""
    id: int
    hostname: str
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'ExtraClient':
        require(data, 'id')
        return cls(
            id=as_int(data['id']),
            hostname=as_str(data.get('hostname', data.get('name'))),
            raw=dict(data)
        )


@dataclass
class Group:
    """Client group. The default group has id 0 and an empty name."""
    id: int
    name: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'Group':
        require(data, 'id', 'name')
        return cls(id=as_int(data['id']), name=as_str(data['name']))

    @property
    def is_default(self) -> bool:
        return self.id == 0


@dataclass
class User:
    """Web interface user with its rights (domain -> right)."""
    id: int
    name: str
    rights: Dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'User':
        require(data, 'id', 'name')
        rights = {}
        for entry in data.get('rights') or []:
            if isinstance(entry, dict) and 'domain' in entry:
                rights[as_str(entry['domain'])] = as_str(entry.get('right'))
        return cls(id=as_int(data['id']), name=as_str(data['name']), rights=rights)

    @property
    def is_admin(self) -> bool:
        return self.rights.get('all') == 'all'


@dataclass
class AddedClient:
    """Result of adding a client: its id, name and internet authentication key."""
    id: int
    name: str
    authkey: str = field(default='', repr=False)

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'AddedClient':
        return cls(
            id=as_int(data.get('new_clientid')),
            name=as_str(data.get('new_clientname')),
            authkey=as_str(data.get('new_authkey'))
        )


@dataclass
class ServerVersion:
    """Server software version."""
    number: int
    text: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> 'ServerVersion':
        return cls(
            number=as_int(data.get('curr_version_num')),
            text=as_str(data.get('curr_version_str'))
        )

    def __str__(self) -> str:
        return self.text or str(self.number)


def parse_clients(entries: List[Any]) -> List[ClientStatus]:
    return [ClientStatus.from_api(entry) for entry in entries]
