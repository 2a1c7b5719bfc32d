"""
UrBackupClient - High-level async client for the UrBackup server web API.

Example:
    >>> async with UrBackupClient("http://127.0.0.1:55414", "admin", "secret") as server:
    ...     for client in await server.get_clients():
    ...         print(client.name, client.online)
"""
import time
from typing import Optional, List, Dict, Any, Union

from .core.api import (
    AsyncAPIClient,
    AsyncAuthService,
    APIConfig,
    ProxyConfig,
    SSLConfig,
    TimeoutConfig,
    RetryConfig,
    RequestOrchestrator,
    build_api_url,
)
from .core.api.orchestrator import check_reference
from .core.exceptions import DataIntegrityError, ValidationError
from .core.logging import get_logger
from .core.models import (
    Activities,
    Activity,
    AddedClient,
    Backup,
    Backups,
    BackupType,
    ClientStatus,
    ExtraClient,
    Group,
    LogEntry,
    PastActivity,
    ServerVersion,
    UsageEntry,
    User,
)
from .core.models.clients import parse_clients
from .core.models.fields import as_bool
from .core.session import Credentials, LogCursor, SessionState


def _setting_value(value: Any) -> Any:
    """Settings may be plain values or ``{value, value_client, use}`` objects."""
    if isinstance(value, dict) and 'value' in value:
        return value['value']
    return value


_SCALAR_TYPES = (str, int, float, bool)

# Saves report success as true/false, 0/1 or '0'/'1'
_FLAG = (bool, int, str)


def _check_key(key: Any) -> None:
    if not isinstance(key, str) or not key:
        raise ValidationError(f"Settings key must be a non-empty string, got {key!r}")


def _settings_form(settings: Dict[str, Any], key: str, new_value: Any) -> Dict[str, Any]:
    """
    Build the save form: every current setting plus the changed one.

    None is sent as an empty field. Lists and other nested values have no
    form encoding and are rejected before anything is sent.

    Raises:
        ValidationError: If a value is not a scalar
    """
    form = {name: _setting_value(value) for name, value in settings.items()}
    form[key] = new_value

    for name, value in form.items():
        if value is None:
            form[name] = ''
        elif not isinstance(value, _SCALAR_TYPES):
            raise ValidationError(
                f"Setting '{name}' has a {type(value).__name__} value that cannot be saved"
            )
    return form


class UrBackupClient:
    """
    High-level async client for one UrBackup server.

    Every operation logs in on demand (anonymously when username or
    password is empty), resolves client/group names to ids against a
    fresh listing, and returns typed models.

    Identity references are keyword-only: pass ``client_id`` or
    ``client_name`` (``group_id`` or ``group_name`` for groups). The id
    wins when both are given. An empty name never matches anything.

    Errors:
        AuthenticationError, TransportError and DataIntegrityError are
        raised; ValidationError is raised for bad arguments before any
        request. A client or group that does not exist is not an error:
        the operation returns its empty value ([], False, None, {}).

    Example:
        >>> server = UrBackupClient("http://127.0.0.1:55414", "admin", "secret")
        >>> await server.start_incremental_file_backup(client_name="laptop")
        True
        >>> await server.close()
    """

    def __init__(
        self,
        endpoint: str,
        username: str = '',
        password: str = '',
        *,
        config: Optional[APIConfig] = None,
        transport: Optional[AsyncAPIClient] = None
    ):
        """
        Initialize UrBackup client.

        Args:
            endpoint: Server URL with protocol, host and port
                (for example ``http://127.0.0.1:55414``)
            username: Web interface user (empty for anonymous login)
            password: Password (empty for anonymous login)
            config: Optional API configuration
            transport: Optional pre-built transport (shares its session state)
        """
        build_api_url(endpoint)

        self._config = config or APIConfig.default()
        self._credentials = Credentials(endpoint, username or '', password or '')
        self._logger = get_logger('urbackupy.client')

        if transport is None:
            self._session = SessionState()
            self._api = AsyncAPIClient(endpoint, self._session, self._config)
        else:
            self._session = transport.session_state
            self._api = transport

        self._auth = AsyncAuthService(self._api, self._credentials, self._session)
        self._orchestrator = RequestOrchestrator(self._api, self._auth)
        self._log_cursor = LogCursor()

    # =========================================================================
    # Configuration helpers
    # =========================================================================

    @staticmethod
    def create_config(
        proxy: Optional[str] = None,
        proxy_user: Optional[str] = None,
        proxy_pass: Optional[str] = None,
        timeout: float = 60,
        max_retries: int = 2,
        verify_ssl: bool = True,
        ca_file: Optional[str] = None,
        user_agent: Optional[str] = None
    ) -> APIConfig:
        """
        Create API configuration with common options.

        Args:
            proxy: Proxy URL (e.g., "http://proxy:8080")
            proxy_user: Proxy username
            proxy_pass: Proxy password
            timeout: Total request timeout in seconds
            max_retries: Retries of idempotent calls on network failure
            verify_ssl: Whether to verify SSL certificates
            ca_file: CA bundle for servers behind a private CA
            user_agent: Custom user agent string

        Returns:
            APIConfig instance
        """
        proxy_config = None
        if proxy:
            proxy_config = ProxyConfig(
                url=proxy,
                username=proxy_user,
                password=proxy_pass
            )

        return APIConfig(
            proxy=proxy_config,
            timeout=TimeoutConfig(total=timeout),
            retry=RetryConfig(max_retries=max_retries),
            ssl=SSLConfig(verify=verify_ssl, check_hostname=verify_ssl, ca_file=ca_file),
            user_agent=user_agent or 'urbackupy/1.0.0'
        )

    # =========================================================================
    # Context manager
    # =========================================================================

    async def __aenter__(self) -> 'UrBackupClient':
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        """Close the client and release resources."""
        await self._api.close()

    # =========================================================================
    # Session
    # =========================================================================

    @property
    def endpoint(self) -> str:
        return self._credentials.endpoint

    @property
    def username(self) -> str:
        return self._credentials.username

    @property
    def is_logged_in(self) -> bool:
        """Check if a usable session exists."""
        return self._auth.is_logged_in

    @property
    def log_cursor(self) -> LogCursor:
        """Recency cursor used by ``get_live_log(recent_only=True)``."""
        return self._log_cursor

    async def login(self) -> bool:
        """
        Log in explicitly. Operations log in on demand, so this is optional.

        Returns:
            True when logged in (or already logged in)

        Raises:
            AuthenticationError: If the login is rejected
        """
        return await self._auth.ensure_logged_in()

    async def logout(self) -> None:
        """End the server session; the next operation logs in again."""
        await self._auth.logout()

    # =========================================================================
    # Server
    # =========================================================================

    async def get_server_identity(self) -> str:
        """Server identity string clients use to recognize this server."""
        response = await self._orchestrator.call(
            'status', expect={'server_identity': str}
        )
        return response['server_identity']

    async def get_server_version(self) -> ServerVersion:
        """Server software version."""
        response = await self._orchestrator.call(
            'status',
            expect={'curr_version_num': (int, str), 'curr_version_str': str}
        )
        return ServerVersion.from_api(response)

    async def get_users(self) -> List[User]:
        """Web interface users."""
        response = await self._orchestrator.call(
            'settings', {'sa': 'listusers'}, expect={'users': list}
        )
        return [User.from_api(entry) for entry in response['users']]

    async def _get_settings(self, section: str) -> Dict[str, Any]:
        response = await self._orchestrator.call(
            'settings', {'sa': section}, expect={'settings': dict}
        )
        return response['settings']

    async def get_general_settings(self) -> Dict[str, Any]:
        """Server-wide settings."""
        return await self._get_settings('general')

    async def get_mail_settings(self) -> Dict[str, Any]:
        """Mail server settings."""
        return await self._get_settings('mail')

    async def get_ldap_settings(self) -> Dict[str, Any]:
        """LDAP/AD login settings."""
        return await self._get_settings('ldap')

    async def set_general_settings(self, key: str, new_value: Any) -> bool:
        """
        Change one server-wide setting.

        The key must already be present in the current settings; unknown
        keys are rejected without a save request.

        Args:
            key: Setting name
            new_value: New value (booleans are sent as 'true'/'false')

        Returns:
            True if the server saved the settings
        """
        _check_key(key)

        settings = await self.get_general_settings()
        if key not in settings:
            self._logger.warning(f"Unknown general setting: {key}")
            return False

        params = _settings_form(settings, key, new_value)
        params['sa'] = 'general_save'

        response = await self._orchestrator.call(
            'settings', params, expect={'saved_ok': _FLAG}
        )
        return as_bool(response['saved_ok'])

    # =========================================================================
    # Groups
    # =========================================================================

    async def get_groups(self) -> List[Group]:
        """
        Client groups.

        Clients are in the default group (id 0, empty name) unless moved.
        """
        return await self._orchestrator.list_groups()

    async def add_group(self, group_name: str) -> bool:
        """
        Create a client group.

        Returns:
            True if created, False if a group with that name exists
        """
        if not isinstance(group_name, str) or not group_name:
            raise ValidationError("Group name must be a non-empty string")

        response = await self._orchestrator.call(
            'settings', {'sa': 'groupadd', 'name': group_name}
        )
        if as_bool(response.get('already_exists')):
            self._logger.info(f"Group already exists: {group_name}")
            return False
        if 'add_ok' not in response:
            raise DataIntegrityError(
                "Response to 'settings' is missing 'add_ok'", 'settings', field='add_ok'
            )
        return as_bool(response['add_ok'])

    async def remove_group(
        self,
        *,
        group_id: Optional[int] = None,
        group_name: Optional[str] = None
    ) -> bool:
        """
        Remove a client group. Its clients move to the default group.

        The default group (id 0) cannot be removed.

        Returns:
            True if removed, False if not found or not removable
        """
        resolved = await self._orchestrator.resolve_group(group_id, group_name)
        if resolved is None:
            return False
        if resolved == 0:
            self._logger.warning("The default group cannot be removed")
            return False

        response = await self._orchestrator.call(
            'settings',
            {'sa': 'groupremove', 'id': resolved},
            expect={'delete_ok': _FLAG}
        )
        return as_bool(response['delete_ok'])

    async def _group_name_for(
        self,
        group_id: Optional[int],
        group_name: Optional[str]
    ) -> Optional[str]:
        check_reference('group', group_id, group_name)
        if group_id is not None:
            for group in await self._orchestrator.list_groups():
                if group.id == group_id:
                    return group.name
            return None
        if group_name == '':
            return None
        return group_name

    async def get_group_members(
        self,
        *,
        group_id: Optional[int] = None,
        group_name: Optional[str] = None,
        include_removed: bool = True
    ) -> List[ClientStatus]:
        """
        Clients belonging to one group.

        Returns:
            Matching clients; empty list when the group is not found
        """
        if group_id is None and group_name is None:
            raise ValidationError("Either group id or group name is required")
        return await self.get_clients(
            group_id=group_id,
            group_name=group_name,
            include_removed=include_removed
        )

    # =========================================================================
    # Clients
    # =========================================================================

    async def get_clients(
        self,
        *,
        group_id: Optional[int] = None,
        group_name: Optional[str] = None,
        include_removed: bool = True
    ) -> List[ClientStatus]:
        """
        List clients, optionally restricted to one group.

        Args:
            group_id: Only clients of this group (wins over group_name)
            group_name: Only clients of this group
            include_removed: Include clients marked for removal

        Returns:
            Client status entries
        """
        name = None
        if group_id is not None or group_name is not None:
            name = await self._group_name_for(group_id, group_name)
            if name is None:
                return []

        clients = await self._orchestrator.list_clients()

        return [
            client for client in clients
            if (name is None or client.group_name == name)
            and (include_removed or not client.delete_pending)
        ]

    async def get_status(
        self,
        *,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None,
        include_removed: bool = True
    ) -> List[ClientStatus]:
        """
        Backup status of all clients, or of one client.

        Returns:
            Status entries; empty list when the client is not found
        """
        if client_id is None and client_name is None:
            return await self.get_clients(include_removed=include_removed)

        client = await self._orchestrator.find_client(client_id, client_name)
        if client is None or (client.delete_pending and not include_removed):
            return []
        return [client]

    async def get_extra_clients(self) -> List[ExtraClient]:
        """Clients added by hostname/IP that have not connected yet."""
        response = await self._orchestrator.call(
            'status', expect={'extra_clients': list}, idempotent=True
        )
        return [ExtraClient.from_api(entry) for entry in response['extra_clients']]

    async def get_online_clients(self, *, include_removed: bool = True) -> List[ClientStatus]:
        clients = await self.get_clients(include_removed=include_removed)
        return [client for client in clients if client.online]

    async def get_offline_clients(self, *, include_removed: bool = True) -> List[ClientStatus]:
        clients = await self.get_clients(include_removed=include_removed)
        return [client for client in clients if not client.online]

    async def get_removed_clients(self) -> List[ClientStatus]:
        """Clients marked for removal."""
        clients = await self.get_clients(include_removed=True)
        return [client for client in clients if client.delete_pending]

    async def get_blank_clients(self, *, include_removed: bool = True) -> List[ClientStatus]:
        """Clients that never completed a file or image backup."""
        clients = await self.get_clients(include_removed=include_removed)
        return [
            client for client in clients
            if client.last_backup == 0 and client.last_image_backup == 0
        ]

    async def get_failed_clients(self, *, include_removed: bool = True) -> List[ClientStatus]:
        """Clients whose last file or image backup is not OK."""
        clients = await self.get_clients(include_removed=include_removed)
        return [client for client in clients if not client.backup_ok]

    async def get_stale_clients(
        self,
        *,
        time_threshold: int = 24 * 60,
        include_removed: bool = True,
        include_blank: bool = True
    ) -> List[ClientStatus]:
        """
        Clients without a recent backup.

        Args:
            time_threshold: Minutes since the newest file or image backup
            include_removed: Include clients marked for removal
            include_blank: Include clients that were never backed up

        Returns:
            Stale clients
        """
        if isinstance(time_threshold, bool) or not isinstance(time_threshold, int) or time_threshold < 0:
            raise ValidationError("time_threshold must be a non-negative number of minutes")

        cutoff = int(time.time()) - time_threshold * 60
        clients = await self.get_clients(include_removed=include_removed)

        stale = []
        for client in clients:
            newest = max(client.last_backup, client.last_image_backup)
            if newest == 0:
                if include_blank:
                    stale.append(client)
            elif newest < cutoff:
                stale.append(client)
        return stale

    async def add_client(self, client_name: str) -> Optional[AddedClient]:
        """
        Add an internet client.

        Returns:
            AddedClient with the new id and authentication key, or None if
            a client with that name already exists
        """
        if not isinstance(client_name, str) or not client_name:
            raise ValidationError("Client name must be a non-empty string")

        response = await self._orchestrator.call('add_client', {'clientname': client_name})

        if as_bool(response.get('added_new_client')):
            self._logger.info(f"Added client: {client_name}")
            return AddedClient.from_api(response)
        if as_bool(response.get('already_exists')):
            self._logger.info(f"Client already exists: {client_name}")
            return None
        raise DataIntegrityError(
            "Response to 'add_client' is missing 'added_new_client'",
            'add_client',
            field='added_new_client'
        )

    async def _set_removal(self, client_id: int, remove: bool) -> Optional[ClientStatus]:
        params: Dict[str, Any] = {'remove_client': client_id}
        if not remove:
            params['stop_remove_client'] = True

        response = await self._orchestrator.call('status', params, expect={'status': list})
        for client in parse_clients(response['status']):
            if client.id == client_id:
                return client
        return None

    async def remove_client(
        self,
        *,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None
    ) -> bool:
        """
        Mark a client for removal. The server deletes it during cleanup.

        Returns:
            True if the client is now pending removal
        """
        resolved = await self._orchestrator.resolve_client(client_id, client_name)
        if resolved is None:
            return False

        client = await self._set_removal(resolved, remove=True)
        return client is not None and client.delete_pending

    async def cancel_remove_client(
        self,
        *,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None
    ) -> bool:
        """
        Cancel a pending removal.

        Returns:
            True if the client is no longer pending removal
        """
        resolved = await self._orchestrator.resolve_client(client_id, client_name)
        if resolved is None:
            return False

        client = await self._set_removal(resolved, remove=False)
        return client is not None and not client.delete_pending

    async def get_client_settings(
        self,
        *,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Settings of one client.

        Returns:
            Settings dict; empty when the client is not found
        """
        resolved = await self._orchestrator.resolve_client(client_id, client_name)
        if resolved is None:
            return {}

        response = await self._orchestrator.call(
            'settings',
            {'sa': 'clientsettings', 't_clientid': resolved},
            expect={'settings': dict}
        )
        return response['settings']

    async def set_client_settings(
        self,
        key: str,
        new_value: Any,
        *,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None
    ) -> bool:
        """
        Change one setting of a client.

        The key must already be present in the client's current settings;
        unknown keys are rejected without a save request.

        Returns:
            True if the server saved the settings
        """
        _check_key(key)

        resolved = await self._orchestrator.resolve_client(client_id, client_name)
        if resolved is None:
            return False

        settings = await self.get_client_settings(client_id=resolved)
        if key not in settings:
            self._logger.warning(f"Unknown client setting: {key}")
            return False

        params = _settings_form(settings, key, new_value)
        params.update({
            'sa': 'clientsettings_save',
            't_clientid': resolved,
            'overwrite': True,
        })

        response = await self._orchestrator.call(
            'settings', params, expect={'saved_ok': _FLAG}
        )
        return as_bool(response['saved_ok'])

    async def get_client_authkey(
        self,
        *,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None
    ) -> Optional[str]:
        """
        Internet authentication key of a client.

        Returns:
            Key string, or None when the client is not found or has no key
        """
        settings = await self.get_client_settings(client_id=client_id, client_name=client_name)
        authkey = _setting_value(settings.get('internet_authkey'))
        return str(authkey) if authkey else None

    # =========================================================================
    # Usage and activities
    # =========================================================================

    async def _client_name_for(
        self,
        client_id: Optional[int],
        client_name: Optional[str]
    ) -> Optional[str]:
        check_reference('client', client_id, client_name)
        if client_id is not None:
            client = await self._orchestrator.find_client(client_id=client_id)
            return client.name if client else None
        if client_name == '':
            return None
        return client_name

    async def get_usage(
        self,
        *,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None
    ) -> List[UsageEntry]:
        """
        Storage usage per client.

        Returns:
            Usage of all clients, or of the one client requested (empty list
            when it is not found)
        """
        name = None
        if client_id is not None or client_name is not None:
            name = await self._client_name_for(client_id, client_name)
            if name is None:
                return []

        response = await self._orchestrator.call('usage', expect={'usage': list})
        entries = [UsageEntry.from_api(entry) for entry in response['usage']]

        if name is not None:
            entries = [entry for entry in entries if entry.name == name]
            if not entries:
                self._logger.debug(f"No usage for client: {name}")
        return entries

    async def get_activities(
        self,
        *,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None,
        include_current: bool = True,
        include_past: bool = False
    ) -> Activities:
        """
        Current and/or past activities.

        Args:
            client_id: Only activities of this client
            client_name: Only activities of this client
            include_current: Include activities in progress
            include_past: Include recently finished activities

        Returns:
            Activities; lists stay empty when not requested or not found
        """
        if not include_current and not include_past:
            raise ValidationError("At least one of include_current/include_past must be set")

        resolved = None
        if client_id is not None or client_name is not None:
            resolved = await self._orchestrator.resolve_client(client_id, client_name)
            if resolved is None:
                return Activities()

        expect = {}
        if include_current:
            expect['progress'] = list
        if include_past:
            expect['lastacts'] = list

        response = await self._orchestrator.call('progress', expect=expect)

        activities = Activities()
        if include_current:
            activities.current = [Activity.from_api(entry) for entry in response['progress']]
        if include_past:
            activities.past = [PastActivity.from_api(entry) for entry in response['lastacts']]

        if resolved is not None:
            activities.current = [a for a in activities.current if a.client_id == resolved]
            activities.past = [a for a in activities.past if a.client_id == resolved]

        return activities

    async def stop_activity(
        self,
        activity_id: int,
        *,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None
    ) -> bool:
        """
        Stop an activity in progress.

        Returns:
            True if the stop request was accepted, False if the client is
            not found
        """
        if isinstance(activity_id, bool) or not isinstance(activity_id, int) or activity_id < 0:
            raise ValidationError(f"Activity id must be a non-negative integer, got {activity_id!r}")

        resolved = await self._orchestrator.resolve_client(client_id, client_name)
        if resolved is None:
            return False

        await self._orchestrator.call(
            'progress',
            {'stop_clientid': resolved, 'stop_id': activity_id},
            expect={'progress': list}
        )
        return True

    # =========================================================================
    # Backups
    # =========================================================================

    async def get_backups(
        self,
        *,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None,
        include_file_backups: bool = True,
        include_image_backups: bool = True
    ) -> Backups:
        """
        Backups of one client.

        Returns:
            Backups; empty when the client is not found
        """
        if not include_file_backups and not include_image_backups:
            raise ValidationError("At least one of file/image backups must be included")

        resolved = await self._orchestrator.resolve_client(client_id, client_name)
        if resolved is None:
            return Backups()

        expect = {}
        if include_file_backups:
            expect['backups'] = list
        if include_image_backups:
            expect['backup_images'] = list

        response = await self._orchestrator.call(
            'backups', {'sa': 'backups', 'clientid': resolved}, expect=expect
        )

        backups = Backups()
        if include_file_backups:
            backups.file = [Backup.from_api(entry) for entry in response['backups']]
        if include_image_backups:
            backups.image = [Backup.from_api(entry, image=True) for entry in response['backup_images']]
        return backups

    async def start_backup(
        self,
        backup_type: Union[BackupType, str],
        *,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None
    ) -> bool:
        """
        Start a backup job.

        Args:
            backup_type: BackupType or its value ('full_file', 'incr_file',
                'full_image', 'incr_image')

        Returns:
            True if the server started the job, False if the client is not
            found or the server refused
        """
        try:
            backup_type = BackupType(backup_type)
        except ValueError:
            raise ValidationError(f"Unknown backup type: {backup_type!r}") from None

        resolved = await self._orchestrator.resolve_client(client_id, client_name)
        if resolved is None:
            return False

        response = await self._orchestrator.call(
            'start_backup',
            {'start_client': resolved, 'start_type': backup_type.value},
            expect={'result': list}
        )
        started = any(
            isinstance(entry, dict) and as_bool(entry.get('start_ok'))
            for entry in response['result']
        )
        if started:
            self._logger.info(f"Started {backup_type.value} backup of client {resolved}")
        else:
            self._logger.warning(f"Server refused {backup_type.value} backup of client {resolved}")
        return started

    async def start_full_file_backup(self, **client) -> bool:
        return await self.start_backup(BackupType.FULL_FILE, **client)

    async def start_incremental_file_backup(self, **client) -> bool:
        return await self.start_backup(BackupType.INCREMENTAL_FILE, **client)

    async def start_full_image_backup(self, **client) -> bool:
        return await self.start_backup(BackupType.FULL_IMAGE, **client)

    async def start_incremental_image_backup(self, **client) -> bool:
        return await self.start_backup(BackupType.INCREMENTAL_IMAGE, **client)

    # =========================================================================
    # Live log
    # =========================================================================

    async def get_live_log(
        self,
        *,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None,
        recent_only: bool = False
    ) -> List[LogEntry]:
        """
        Live log entries of one client, or the server-wide log.

        Args:
            client_id: Client (omit both id and name for the server-wide log)
            client_name: Client name
            recent_only: Only entries newer than those returned by the last
                recent-only call for the same client

        Returns:
            Log entries; empty list when the client is not found
        """
        resolved = 0
        if client_id is not None or client_name is not None:
            resolved = await self._orchestrator.resolve_client(client_id, client_name)
            if resolved is None:
                return []

        async with self._log_cursor.lock:
            last_id = self._log_cursor.get(resolved) if recent_only else 0

            response = await self._orchestrator.call(
                'livelog',
                {'clientid': resolved, 'lastid': last_id},
                expect={'logdata': list}
            )
            entries = [LogEntry.from_api(entry) for entry in response['logdata']]

            if recent_only:
                entries = [entry for entry in entries if entry.id > last_id]
                self._log_cursor.advance(resolved, (entry.id for entry in entries))

        return entries
