"""
Property writes on behalf of users.

Ordinary edits are open to admins and to the seller who owns the listing.
The verification flag is enforced a second time by Property.save(), so a
seller edit that also flips is_verified fails as a whole and writes nothing.
"""

import logging

from django.db import DEFAULT_DB_ALIAS, transaction

from accounts.models import Role
from accounts.services import has_role
from wallet.exceptions import InvalidField, PropertyUnavailable, Unauthorized

from .models import Property

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = frozenset({
    'title',
    'description',
    'location',
    'property_type',
    'total_tokens',
    'token_price',
    'estimated_roi',
    'status',
    'is_verified',
})


def can_edit(user_id, prop: Property, using: str = DEFAULT_DB_ALIAS) -> bool:
    if has_role(user_id, Role.ADMIN, using=using):
        return True
    return prop.seller_id is not None and prop.seller_id == user_id


def _check_fields(changes: dict) -> None:
    unknown = set(changes) - EDITABLE_FIELDS
    if unknown:
        raise InvalidField(f"Cannot change: {', '.join(sorted(unknown))}")


def create_property(actor_id, using: str = DEFAULT_DB_ALIAS, **fields) -> Property:
    """
    List a new property owned by the actor.

    Raises:
        Unauthorized: If the actor is neither an admin nor a verified seller,
            or a non-admin tries to create an already verified listing.
        InvalidField: If fields names something that cannot be set.
    """
    _check_fields(fields)
    is_admin = has_role(actor_id, Role.ADMIN, using=using)
    if not is_admin and not has_role(actor_id, Role.VERIFIED_SELLER, using=using):
        raise Unauthorized('Only verified sellers can list properties')

    prop = Property(seller_id=actor_id, **fields)
    prop.full_clean(exclude=['seller'])
    with transaction.atomic(using=using):
        prop.save(using=using, actor_id=actor_id)

    logger.info('User %s listed property %s', actor_id, prop.pk)
    return prop


def update_property(actor_id, property_id, changes: dict, using: str = DEFAULT_DB_ALIAS) -> Property:
    """
    Apply field changes to a property.

    Raises:
        PropertyUnavailable: If the property does not exist.
        Unauthorized: If the actor cannot edit the property, or changes
            is_verified without being an admin.
        InvalidField: If changes names a field that cannot be edited.
    """
    _check_fields(changes)

    with transaction.atomic(using=using):
        try:
            prop = Property.objects.using(using).select_for_update().get(pk=property_id)
        except (Property.DoesNotExist, ValueError, TypeError):
            raise PropertyUnavailable() from None

        if not can_edit(actor_id, prop, using=using):
            raise Unauthorized('Only the seller or an admin can edit this property')

        for name, value in changes.items():
            setattr(prop, name, value)
        if prop.total_tokens < prop.tokens_sold:
            raise InvalidField('total_tokens cannot drop below tokens already sold')
        prop.full_clean(exclude=['seller'])
        prop.save(using=using, actor_id=actor_id)

    logger.info('User %s updated property %s: %s', actor_id, prop.pk, sorted(changes))
    return prop


def set_verification(actor_id, property_id, verified: bool, using: str = DEFAULT_DB_ALIAS) -> Property:
    """Admin toggle for the verification flag."""
    prop = update_property(actor_id, property_id, {'is_verified': bool(verified)}, using=using)
    logger.info('Property %s verification set to %s by user %s', prop.pk, prop.is_verified, actor_id)
    return prop
