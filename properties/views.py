"""
API Views for the Properties app.

Purchases and distributions are delegated to the purchase and distribution
engines, which run each request as one atomic, row-locked transaction.
"""

from django.core.exceptions import ValidationError
from django.shortcuts import get_object_or_404
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from wallet.exceptions import LedgerError
from wallet.views import ledger_error_response

from . import verification
from .certificates import attach_document_for_user
from .distributions import distribute_profit
from .models import Certificate, Property, TokenPurchase
from .purchases import purchase_tokens
from .serializers import (
    CertificateDocumentSerializer,
    CertificateSerializer,
    DistributionSerializer,
    PropertySerializer,
    PurchaseSerializer,
    TokenPurchaseSerializer,
)


def validation_error_response(exc: ValidationError) -> Response:
    errors = exc.message_dict if hasattr(exc, 'error_dict') else exc.messages
    return Response({'error': errors}, status=status.HTTP_400_BAD_REQUEST)


class PropertyListView(APIView):
    """
    GET  /api/properties/   List properties (anyone)
    POST /api/properties/   List a new property (verified sellers and admins)
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request):
        properties = Property.objects.all()
        if request.query_params.get('status'):
            properties = properties.filter(status=request.query_params['status'])
        return Response(PropertySerializer(properties, many=True).data)

    def post(self, request):
        serializer = PropertySerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            prop = verification.create_property(request.user.id, **serializer.validated_data)
        except LedgerError as e:
            return ledger_error_response(e)
        except ValidationError as e:
            return validation_error_response(e)

        return Response(PropertySerializer(prop).data, status=status.HTTP_201_CREATED)


class PropertyDetailView(APIView):
    """
    GET   /api/properties/<id>/   Property details (anyone)
    PATCH /api/properties/<id>/   Edit (owning seller or admin; is_verified admin only)
    """

    def get_permissions(self):
        if self.request.method == 'GET':
            return [AllowAny()]
        return [IsAuthenticated()]

    def get(self, request, pk):
        prop = get_object_or_404(Property, pk=pk)
        return Response(PropertySerializer(prop).data)

    def patch(self, request, pk):
        prop = get_object_or_404(Property, pk=pk)
        serializer = PropertySerializer(prop, data=request.data, partial=True)
        if not serializer.is_valid():
            return Response(
                {'error': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            prop = verification.update_property(request.user.id, pk, serializer.validated_data)
        except LedgerError as e:
            return ledger_error_response(e)
        except ValidationError as e:
            return validation_error_response(e)

        return Response(PropertySerializer(prop).data)


class PurchaseTokensView(APIView):
    """
    POST /api/properties/<id>/purchase/

    Buy tokens of a property with the authenticated user's wallet balance.

    Request body:
        - tokens (int): Number of tokens to buy (must be > 0)

    Returns:
        - 201: Purchase and certificate ids
        - 400: Invalid token count or insufficient funds
        - 404: Property missing or inactive
        - 409: Not enough tokens left
    """

    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        serializer = PurchaseSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            result = purchase_tokens(request.user.id, pk, serializer.validated_data['tokens'])
        except LedgerError as e:
            return ledger_error_response(e)

        return Response({
            'message': 'Purchase successful',
            'purchase_id': result.purchase_id,
            'certificate_id': result.certificate_id,
        }, status=status.HTTP_201_CREATED)


class DistributeProfitView(APIView):
    """
    POST /api/properties/<id>/distributions/

    Distribute profit to all holders of a property (admins, or the verified
    seller who owns it).
    """

    permission_classes = [IsAuthenticated]

    def post(self, request, pk):
        serializer = DistributionSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            distribution_id = distribute_profit(
                request.user.id,
                pk,
                serializer.validated_data['total_amount'],
                serializer.validated_data.get('notes'),
            )
        except LedgerError as e:
            return ledger_error_response(e)

        return Response({
            'message': 'Distribution successful',
            'distribution_id': distribution_id,
        }, status=status.HTTP_201_CREATED)


class PurchaseListView(APIView):
    """
    GET /api/properties/purchases/
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        purchases = TokenPurchase.objects.filter(buyer=request.user)
        return Response(TokenPurchaseSerializer(purchases, many=True).data)


class CertificateListView(APIView):
    """
    GET /api/properties/certificates/
    """

    permission_classes = [IsAuthenticated]

    def get(self, request):
        certificates = Certificate.objects.filter(owner=request.user)
        return Response(CertificateSerializer(certificates, many=True).data)


class CertificateDocumentView(APIView):
    """
    PATCH /api/properties/certificates/<id>/document/

    Attach a rendered document to a certificate and mark it issued.
    """

    permission_classes = [IsAuthenticated]

    def patch(self, request, pk):
        serializer = CertificateDocumentSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {'error': serializer.errors},
                status=status.HTTP_400_BAD_REQUEST
            )
        try:
            certificate = attach_document_for_user(
                request.user.id, pk, serializer.validated_data['document_url']
            )
        except LedgerError as e:
            return ledger_error_response(e)

        return Response(CertificateSerializer(certificate).data)
