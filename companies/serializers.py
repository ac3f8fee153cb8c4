from django.urls import reverse
from rest_framework import serializers
from .models import Company


class CompanySerializer(serializers.ModelSerializer):
    owner_name = serializers.CharField(source='owner.full_name', read_only=True)
    logo_url = serializers.SerializerMethodField()

    class Meta:
        model = Company
        fields = [
            'id', 'owner', 'owner_name', 'name', 'description', 'industry',
            'website', 'address', 'phone_number', 'logo', 'logo_url', 'payment_verified',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['owner', 'payment_verified', 'created_at', 'updated_at']
        extra_kwargs = {'logo': {'write_only': True}}

    def get_logo_url(self, obj):
        return reverse('company-logo', args=[obj.pk]) if obj.logo else None
