from django.contrib import admin
from .models import User


@admin.register(User)
class UserAdmin(admin.ModelAdmin):
    list_display = ('email', 'full_name', 'role', 'enabled', 'date_joined')
    list_filter = ('role', 'enabled')
    search_fields = ('email', 'full_name')
    readonly_fields = ('role',)
