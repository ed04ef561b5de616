"""
API Views for the Wallet app.

Views stay thin: they validate the request shape and hand off to the
wallet engine in services.py, which owns atomicity and locking.
"""

import logging

from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from . import services
from .exceptions import LedgerError
from .serializers import ErrorSerializer, WalletSerializer, WalletTransactionSerializer

logger = logging.getLogger(__name__)


def ledger_error_response(exc: LedgerError) -> Response:
    """Build the error response for a core error."""
    logger.warning('Request rejected: %s (%s)', exc, exc.code)
    payload = ErrorSerializer({'error': str(exc), 'code': exc.code}).data
    return Response(payload, status=exc.http_status)


class WalletBalanceView(APIView):
    """
    GET /api/wallet/balance/

    Get the current balance of the authenticated user's wallet.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        """Return the user's wallet balance."""
        balance = services.get_balance(request.user.id)
        serializer = WalletSerializer({
            'user_id': request.user.id,
            'username': request.user.username,
            'balance': balance,
        })
        return Response(serializer.data)


class DepositView(APIView):
    """
    POST /api/wallet/deposit/

    Deposit funds into the authenticated user's wallet.

    Request body:
        - amount (decimal): Amount to deposit (must be > 0, at most 2 decimals)

    Returns:
        - 200: Deposit successful, with the new balance
        - 400: Missing or invalid amount
        - 401/403: Authentication required
    """

    permission_classes = [IsAuthenticated]

    def post(self, request):
        """Handle deposit request."""
        try:
            balance = services.deposit(request.user.id, request.data.get('amount'))
        except LedgerError as e:
            return ledger_error_response(e)

        return Response({
            'message': 'Deposit successful',
            'balance': balance,
        })


class TransactionHistoryView(APIView):
    """
    GET /api/wallet/transactions/

    Get the ledger entries of the authenticated user's wallet, newest first.
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        """Return the user's transaction history."""
        transactions = services.transactions_for(request.user.id)
        data = WalletTransactionSerializer(transactions, many=True).data

        return Response({
            'transactions': data,
            'count': len(data),
        })
