"""
API Views for the Accounts app.
"""

from django.contrib.auth import get_user_model
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from wallet.exceptions import LedgerError
from wallet.views import ledger_error_response

from . import services
from .serializers import RoleChangeSerializer

User = get_user_model()


class _RoleChangeView(APIView):
    permission_classes = [IsAuthenticated]

    def _validated(self, request):
        serializer = RoleChangeSerializer(data=request.data)
        if not serializer.is_valid():
            return None, Response(
                {'error': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        user_id = serializer.validated_data['user_id']
        if not User.objects.filter(id=user_id).exists():
            return None, Response(
                {'error': 'User not found'},
                status=status.HTTP_400_BAD_REQUEST
            )
        return serializer.validated_data, None


class AssignRoleView(_RoleChangeView):
    """
    POST /api/accounts/roles/assign/

    Grant a role to a user. Admin only; granting an existing role is a no-op.
    """

    def post(self, request):
        data, error = self._validated(request)
        if error is not None:
            return error
        try:
            grant = services.assign_role(request.user.id, data['user_id'], data['role'])
        except LedgerError as e:
            return ledger_error_response(e)

        return Response({
            'message': 'Role assigned',
            'user_id': grant.user_id,
            'role': grant.role,
        })


class RevokeRoleView(_RoleChangeView):
    """
    POST /api/accounts/roles/revoke/

    Remove a role from a user. Admin only.
    """

    def post(self, request):
        data, error = self._validated(request)
        if error is not None:
            return error
        try:
            removed = services.revoke_role(request.user.id, data['user_id'], data['role'])
        except LedgerError as e:
            return ledger_error_response(e)

        return Response({
            'message': 'Role revoked' if removed else 'Role was not granted',
            'user_id': data['user_id'],
            'role': data['role'],
        })


class MyRolesView(APIView):
    """
    GET /api/accounts/roles/me/
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        return Response({
            'user_id': request.user.id,
            'roles': sorted(services.roles_for(request.user.id)),
        })
