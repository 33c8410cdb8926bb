"""
Role-based capability checks.

Every mutating operation calls `require_capability` before touching storage,
so role strings are compared in exactly one place. Reads are open to
every role and carry no capability.
"""

from enum import Enum

from siteledger.config import get_logger
from siteledger.core.entities.ledger import ActionBy, UserRole
from siteledger.core.exceptions import AuthorizationError

logger = get_logger(__name__)


class Capability(str, Enum):
    MANAGE_PROJECT_INVENTORY = "manage_project_inventory"
    MANAGE_WAREHOUSE = "manage_warehouse"
    MANAGE_PROJECTS = "manage_projects"


ROLE_CAPABILITIES: dict[UserRole, frozenset[Capability]] = {
    UserRole.ADMIN: frozenset(Capability),
    UserRole.PROJECT_MANAGER: frozenset({Capability.MANAGE_PROJECT_INVENTORY}),
    UserRole.USER: frozenset(),
}


def capabilities_for(role: str) -> frozenset[Capability]:
    """Capabilities granted to a role name. Unknown roles get none."""
    try:
        return ROLE_CAPABILITIES[UserRole(role.strip().lower())]
    except ValueError:
        return frozenset()


def has_capability(actor: ActionBy, capability: Capability) -> bool:
    return capability in capabilities_for(actor.role)


def require_capability(actor: ActionBy, capability: Capability) -> None:
    """Raise AuthorizationError unless the actor's role grants `capability`."""
    if not has_capability(actor, capability):
        logger.warning(
            "authorization_denied",
            user_id=actor.user_id,
            role=actor.role,
            capability=capability.value,
        )
        raise AuthorizationError(actor.role, capability.value)
