from django.contrib import admin
from .models import PaymentProof


@admin.register(PaymentProof)
class PaymentProofAdmin(admin.ModelAdmin):
    list_display = ('reference_number', 'company', 'status', 'upload_date', 'reviewed_by')
    list_filter = ('status',)
    readonly_fields = ('status', 'reviewed_by', 'reviewed_at', 'verified_date')
