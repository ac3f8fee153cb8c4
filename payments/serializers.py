from django.urls import reverse
from rest_framework import serializers
from .models import PaymentProof


class PaymentProofSerializer(serializers.ModelSerializer):
    company_name = serializers.CharField(source='company.name', read_only=True)
    reviewed_by_email = serializers.CharField(source='reviewed_by.email', read_only=True, default=None)
    file_url = serializers.SerializerMethodField()

    class Meta:
        model = PaymentProof
        fields = [
            'id', 'company', 'company_name', 'reference_number', 'file', 'file_url', 'status',
            'admin_notes', 'reviewed_by_email', 'reviewed_at', 'upload_date', 'verified_date'
        ]
        read_only_fields = [
            'company', 'status', 'admin_notes', 'reviewed_at', 'upload_date', 'verified_date'
        ]
        extra_kwargs = {'file': {'write_only': True}}

    def get_file_url(self, obj):
        return reverse('payment-proof-file', args=[obj.pk])


class PaymentDecisionSerializer(serializers.Serializer):
    """
    Admin decision on a pending proof. Notes are mandatory when rejecting;
    that rule is enforced by the payment service.
    """
    status = serializers.ChoiceField(choices=[
        PaymentProof.Status.VERIFIED,
        PaymentProof.Status.REJECTED,
    ])
    admin_notes = serializers.CharField(required=False, allow_blank=True, default='')


class PaymentStatusSerializer(serializers.Serializer):
    company_id = serializers.IntegerField()
    payment_verified = serializers.BooleanField()
    current_proof = PaymentProofSerializer(allow_null=True)
