"""
URL configuration for the Accounts app.
"""

from django.urls import path
from .views import AssignRoleView, MyRolesView, RevokeRoleView

app_name = 'accounts'

urlpatterns = [
    path('roles/assign/', AssignRoleView.as_view(), name='assign-role'),
    path('roles/revoke/', RevokeRoleView.as_view(), name='revoke-role'),
    path('roles/me/', MyRolesView.as_view(), name='my-roles'),
]
