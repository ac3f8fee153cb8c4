from django.db import models
from django.conf import settings
from django.core.validators import FileExtensionValidator
from django.utils.translation import gettext_lazy as _

PROOF_EXTENSIONS = ['pdf', 'png', 'jpg', 'jpeg']


class PaymentProof(models.Model):
    """
    Evidence of the listing fee submitted by an employer.
    Immutable once decided: a rejected employer submits a new proof.
    """
    class Status(models.TextChoices):
        PENDING_REVIEW = 'PENDING_REVIEW', _('Pending Review')
        VERIFIED = 'VERIFIED', _('Verified')
        REJECTED = 'REJECTED', _('Rejected')

    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='payment_proofs'
    )
    reference_number = models.CharField(max_length=100)
    file = models.FileField(
        upload_to='payment_proofs/',
        validators=[FileExtensionValidator(PROOF_EXTENSIONS)]
    )
    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING_REVIEW
    )

    # Review trail
    admin_notes = models.TextField(blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_payment_proofs'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    verified_date = models.DateTimeField(null=True, blank=True)

    upload_date = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-upload_date', '-id']

    def __str__(self):
        return f"{self.reference_number} ({self.status})"
