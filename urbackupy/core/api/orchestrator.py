"""
Request orchestration shared by every public operation.

Each operation goes through the same steps: ensure a session, resolve
client/group references to ids, call the action, and check the shape of
the response before it is normalized.
"""
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union

from .async_auth import AsyncAuthService
from .async_client import AsyncAPIClient
from ..exceptions import AuthenticationError, DataIntegrityError, ValidationError
from ..logging import get_logger
from ..models import ClientStatus, Group
from ..models.clients import parse_clients

# field path -> accepted type(s); dotted paths address nested objects
Expectation = Mapping[str, Union[type, Tuple[type, ...]]]

_MISSING = object()


def _lookup(data: Dict[str, Any], path: str) -> Any:
    value: Any = data
    for part in path.split('.'):
        if not isinstance(value, dict) or part not in value:
            return _MISSING
        value = value[part]
    return value


def check_reference(kind: str, ref_id: Any, ref_name: Any) -> None:
    """
    Validate the types of an identity reference.

    Raises:
        ValidationError: If the id is not a non-negative integer or the
            name is not a string
    """
    if ref_id is not None and (
        isinstance(ref_id, bool) or not isinstance(ref_id, int) or ref_id < 0
    ):
        raise ValidationError(f"{kind} id must be a non-negative integer, got {ref_id!r}")
    if ref_name is not None and not isinstance(ref_name, str):
        raise ValidationError(f"{kind} name must be a string, got {ref_name!r}")


class RequestOrchestrator:
    """
    Authenticated, validated access to server actions.

    Name references are resolved against a fresh listing on every call;
    id/name mappings are never cached. When both an id and a name are
    given, the id wins and the name is not looked at.
    """

    def __init__(self, client: AsyncAPIClient, auth: AsyncAuthService):
        """
        Initialize orchestrator.

        Args:
            client: Transport
            auth: Authentication service guarding the session
        """
        self._client = client
        self._auth = auth
        self._logger = get_logger('urbackupy.orchestrator')

    @property
    def auth(self) -> AsyncAuthService:
        return self._auth

    async def call(
        self,
        action: str,
        params: Optional[Mapping[str, Any]] = None,
        *,
        expect: Optional[Expectation] = None,
        idempotent: bool = False
    ) -> Dict[str, Any]:
        """
        Log in if needed, call an action and validate the response.

        Args:
            action: Server action
            params: Action parameters
            expect: Required response fields and their types
            idempotent: Allow transport retries on network failure

        Returns:
            Response body

        Raises:
            AuthenticationError: Login failed or the session expired
            TransportError: HTTP-level failure
            DataIntegrityError: Response lacks an expected field
        """
        await self._auth.ensure_logged_in()
        token = self._auth.session.token
        response = await self._client.call(action, params, idempotent=idempotent)
        return self.validate(action, response, expect, token=token)

    def validate(
        self,
        action: str,
        response: Any,
        expect: Optional[Expectation] = None,
        *,
        token: Optional[str] = None
    ) -> Dict[str, Any]:
        """
        Check that ``response`` is an object carrying the expected fields.

        ``token`` is the session the request was sent with; a rejection
        only drops that session.
        """
        if not isinstance(response, dict):
            raise DataIntegrityError(
                f"Unexpected response to '{action}': {type(response).__name__}",
                action
            )

        if response.get('error') == 1 and not any(
            _lookup(response, path) is not _MISSING for path in (expect or {})
        ):
            self._logger.warning(f"Session rejected by server on '{action}'")
            self._auth.invalidate(token)
            raise AuthenticationError("Session expired or not authorized", action)

        for path, kind in (expect or {}).items():
            value = _lookup(response, path)
            if value is _MISSING:
                raise DataIntegrityError(
                    f"Response to '{action}' is missing '{path}'",
                    action,
                    field=path
                )
            if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
                raise DataIntegrityError(
                    f"Field '{path}' in response to '{action}' has type "
                    f"{type(value).__name__}",
                    action,
                    field=path
                )

        return response

    # =========================================================================
    # Identity resolution
    # =========================================================================

    async def list_clients(self) -> List[ClientStatus]:
        """Full client listing, including clients pending removal."""
        response = await self.call('status', expect={'status': list}, idempotent=True)
        return parse_clients(response['status'])

    async def list_groups(self) -> List[Group]:
        """All client groups."""
        response = await self.call(
            'settings',
            expect={'navitems.groups': list},
            idempotent=True
        )
        return [Group.from_api(entry) for entry in response['navitems']['groups']]

    async def resolve_client(
        self,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None
    ) -> Optional[int]:
        """
        Resolve a client reference to its id.

        Returns:
            Client id, or None when the name matches nothing (an empty name
            never matches and costs no request)

        Raises:
            ValidationError: If neither id nor name is given
        """
        check_reference('client', client_id, client_name)
        if client_id is not None:
            return client_id
        if client_name is None:
            raise ValidationError("Either client id or client name is required")
        if client_name == '':
            return None

        for client in await self.list_clients():
            if client.name == client_name:
                return client.id

        self._logger.debug(f"Client not found: {client_name}")
        return None

    async def find_client(
        self,
        client_id: Optional[int] = None,
        client_name: Optional[str] = None
    ) -> Optional[ClientStatus]:
        """
        Look up the current status entry of one client.

        Same precedence and empty-name rules as :meth:`resolve_client`.
        """
        check_reference('client', client_id, client_name)
        if client_id is None and client_name is None:
            raise ValidationError("Either client id or client name is required")
        if client_id is None and client_name == '':
            return None

        for client in await self.list_clients():
            if client_id is not None:
                if client.id == client_id:
                    return client
            elif client.name == client_name:
                return client

        self._logger.debug(f"Client not found: {client_id if client_id is not None else client_name}")
        return None

    async def resolve_group(
        self,
        group_id: Optional[int] = None,
        group_name: Optional[str] = None
    ) -> Optional[int]:
        """
        Resolve a group reference to its id.

        The default group has an empty name and is therefore only
        addressable by id 0.

        Raises:
            ValidationError: If neither id nor name is given
        """
        check_reference('group', group_id, group_name)
        if group_id is not None:
            return group_id
        if group_name is None:
            raise ValidationError("Either group id or group name is required")
        if group_name == '':
            return None

        for group in await self.list_groups():
            if group.name == group_name:
                return group.id

        self._logger.debug(f"Group not found: {group_name}")
        return None
