"""
URL configuration for the Wallet app.
"""

from django.urls import path
from .views import (
    WalletBalanceView,
    DepositView,
    TransactionHistoryView,
)

app_name = 'wallet'

urlpatterns = [
    path('balance/', WalletBalanceView.as_view(), name='balance'),
    path('deposit/', DepositView.as_view(), name='deposit'),
    path('transactions/', TransactionHistoryView.as_view(), name='transactions'),
]
