from django.db import models
from django.conf import settings


class Company(models.Model):
    """
    The organisational profile of an employer. One per employer account.
    Posting jobs is locked until ``payment_verified`` is set by an admin
    approving a payment proof.
    """
    owner = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='company'
    )
    name = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    industry = models.CharField(max_length=100, blank=True)
    website = models.URLField(blank=True)
    address = models.CharField(max_length=255)
    phone_number = models.CharField(max_length=20, blank=True)
    logo = models.ImageField(upload_to='company_logos/', blank=True, null=True)

    # Only ever flipped to True by payments.services.PaymentService.decide
    payment_verified = models.BooleanField(default=False)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name_plural = "Companies"

    def __str__(self):
        return self.name
