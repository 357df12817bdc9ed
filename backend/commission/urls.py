from django.urls import path

from .views import CommissionListView, CommissionDetailView

urlpatterns = [
    path('commissions', CommissionListView.as_view(), name='commission-list'),
    path('commissions/<int:user_id>', CommissionDetailView.as_view(), name='commission-detail'),
]
