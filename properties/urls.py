"""
URL configuration for the Properties app.
"""

from django.urls import path
from .views import (
    CertificateDocumentView,
    CertificateListView,
    DistributeProfitView,
    PropertyDetailView,
    PropertyListView,
    PurchaseListView,
    PurchaseTokensView,
)

app_name = 'properties'

urlpatterns = [
    path('', PropertyListView.as_view(), name='list'),
    path('purchases/', PurchaseListView.as_view(), name='purchases'),
    path('certificates/', CertificateListView.as_view(), name='certificates'),
    path(
        'certificates/<int:pk>/document/',
        CertificateDocumentView.as_view(),
        name='certificate-document',
    ),
    path('<int:pk>/', PropertyDetailView.as_view(), name='detail'),
    path('<int:pk>/purchase/', PurchaseTokensView.as_view(), name='purchase'),
    path('<int:pk>/distributions/', DistributeProfitView.as_view(), name='distribute'),
]
