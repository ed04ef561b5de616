"""
Errors raised by the marketplace core.

Every error is raised synchronously to the caller of the operation that
detected it. The atomic block around the operation rolls back, so no partial
mutation is ever committed on these paths.
"""

from rest_framework import status


class LedgerError(Exception):
    """Base class for all core errors."""

    code = 'ledger_error'
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = 'Operation failed'

    def __init__(self, message: str = ''):
        super().__init__(message or self.default_message)


class InvalidAmount(LedgerError):
    """Non-positive or malformed amount or token count."""

    code = 'invalid_amount'
    default_message = 'Amount must be positive'


class InsufficientFunds(LedgerError):
    """Wallet balance is lower than the requested debit."""

    code = 'insufficient_funds'
    default_message = 'Insufficient funds'


class PropertyUnavailable(LedgerError):
    """Property is missing or not active."""

    code = 'property_unavailable'
    http_status = status.HTTP_404_NOT_FOUND
    default_message = 'Property not found or not active'


class Unauthorized(LedgerError):
    """Role or ownership check failed."""

    code = 'unauthorized'
    http_status = status.HTTP_403_FORBIDDEN
    default_message = 'Not authorized'


class NoTokensIssued(LedgerError):
    """Distribution attempted on a property nobody holds tokens of."""

    code = 'no_tokens_issued'
    default_message = 'No tokens issued for this property'


class ExceedsAvailable(LedgerError):
    """Purchase would sell more tokens than the property has left."""

    code = 'exceeds_available'
    http_status = status.HTTP_409_CONFLICT
    default_message = 'Not enough tokens available'


class InvalidRole(LedgerError):
    code = 'invalid_role'
    default_message = 'Unknown role'


class InvalidField(LedgerError):
    code = 'invalid_field'
    default_message = 'Field cannot be changed'


class CertificateNotFound(LedgerError):
    code = 'certificate_not_found'
    http_status = status.HTTP_404_NOT_FOUND
    default_message = 'Certificate not found'
