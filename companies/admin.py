from django.contrib import admin
from .models import Company


@admin.register(Company)
class CompanyAdmin(admin.ModelAdmin):
    list_display = ('name', 'owner', 'payment_verified', 'created_at')
    list_filter = ('payment_verified',)
    # Set only by approving a payment proof
    readonly_fields = ('payment_verified',)
