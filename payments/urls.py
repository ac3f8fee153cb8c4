from django.urls import path
from .views import (
    SubmitPaymentProofView, MyPaymentStatusView, CompanyPaymentStatusView,
    MyPaymentHistoryView, PaymentProofFileView
)

urlpatterns = [
    path('proofs/', SubmitPaymentProofView.as_view(), name='payment-proof-submit'),
    path('proofs/<int:pk>/file/', PaymentProofFileView.as_view(), name='payment-proof-file'),
    path('status/', MyPaymentStatusView.as_view(), name='payment-status'),
    path('history/', MyPaymentHistoryView.as_view(), name='payment-history'),
    path('companies/<int:company_id>/status/', CompanyPaymentStatusView.as_view(), name='company-payment-status'),
]
