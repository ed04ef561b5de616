"""
Role authority.

has_role() is a plain read on the grant table and never goes through a
permission check of its own, so any other check can call it. Only trusted
server-side code calls these functions; API views pass the authenticated
user's id as the actor.
"""

import logging

from django.db import DEFAULT_DB_ALIAS, transaction

from wallet.exceptions import InvalidRole, Unauthorized

from .models import Role, RoleGrant

logger = logging.getLogger(__name__)


def _validate_role(role: str) -> str:
    if role not in Role.values:
        raise InvalidRole(f'Unknown role: {role}')
    return role


def has_role(user_id, role: str, using: str = DEFAULT_DB_ALIAS) -> bool:
    """Return True if the user holds the role."""
    if user_id is None:
        return False
    return RoleGrant.objects.using(using).filter(user_id=user_id, role=role).exists()


def roles_for(user_id, using: str = DEFAULT_DB_ALIAS) -> set:
    """All roles held by the user."""
    return set(
        RoleGrant.objects.using(using).filter(user_id=user_id).values_list('role', flat=True)
    )


def assign_role(actor_id, target_user_id, role: str, using: str = DEFAULT_DB_ALIAS) -> RoleGrant:
    """
    Grant a role to a user.

    Granting a role the user already holds returns the existing grant.

    Raises:
        Unauthorized: If the actor is not an admin.
        InvalidRole: If the role is unknown.
    """
    if not has_role(actor_id, Role.ADMIN, using=using):
        raise Unauthorized('Only admins can assign roles')
    _validate_role(role)

    with transaction.atomic(using=using):
        grant, created = RoleGrant.objects.using(using).get_or_create(
            user_id=target_user_id,
            role=role,
        )

    if created:
        logger.info('User %s granted %s to user %s', actor_id, role, target_user_id)
    return grant


def revoke_role(actor_id, target_user_id, role: str, using: str = DEFAULT_DB_ALIAS) -> bool:
    """
    Remove a role from a user. Returns whether a grant was removed.

    Raises:
        Unauthorized: If the actor is not an admin.
        InvalidRole: If the role is unknown.
    """
    if not has_role(actor_id, Role.ADMIN, using=using):
        raise Unauthorized('Only admins can revoke roles')
    _validate_role(role)

    deleted, _ = RoleGrant.objects.using(using).filter(
        user_id=target_user_id,
        role=role,
    ).delete()

    if deleted:
        logger.info('User %s revoked %s from user %s', actor_id, role, target_user_id)
    return bool(deleted)
