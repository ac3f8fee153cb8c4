import logging

from django.contrib.auth import get_user_model
from django.db import transaction
from django.utils import timezone

from companies.services import CompanyService
from notifications.services import notify
from workflow.exceptions import InvalidTransition, NotFound, ValidationError, require_text
from .models import PaymentProof

logger = logging.getLogger(__name__)

User = get_user_model()

DECISIONS = (PaymentProof.Status.VERIFIED, PaymentProof.Status.REJECTED)


class PaymentService:
    """
    Payment proof state machine: PENDING_REVIEW -> VERIFIED | REJECTED.
    A verified proof unlocks job posting for its company, permanently.
    """

    @classmethod
    @transaction.atomic
    def submit_proof(cls, company, reference_number, file):
        reference_number = require_text(reference_number, "Reference number")
        if not file:
            raise ValidationError("Payment proof file is required.")

        proof = PaymentProof.objects.create(
            company=company,
            reference_number=reference_number,
            file=file,
            status=PaymentProof.Status.PENDING_REVIEW
        )

        admins = User.objects.filter(role=User.Roles.ADMIN, enabled=True).values_list('pk', flat=True)
        for admin_id in admins:
            notify(admin_id, 'NEW_PAYMENT', {
                'title': "New Payment Proof",
                'message': f"Employer {company.owner.email} uploaded payment proof for verification.",
                'link': "/admin/payments",
                'proof_id': proof.pk,
            })
        logger.info("Payment proof %s submitted for company %s", proof.pk, company.pk)
        return proof

    @classmethod
    def get_proof(cls, proof_id):
        try:
            return PaymentProof.objects.select_related('company', 'company__owner').get(pk=proof_id)
        except PaymentProof.DoesNotExist:
            raise NotFound("Payment proof not found.")

    @classmethod
    @transaction.atomic
    def decide(cls, proof_id, status, admin, admin_notes=''):
        if status not in DECISIONS:
            raise ValidationError("Status must be VERIFIED or REJECTED.")

        # Lock the proof row so two admins cannot both decide it
        try:
            proof = PaymentProof.objects.select_for_update().get(pk=proof_id)
        except PaymentProof.DoesNotExist:
            raise NotFound("Payment proof not found.")

        if proof.status != PaymentProof.Status.PENDING_REVIEW:
            raise InvalidTransition(
                f"Payment has already been processed. Current status: {proof.status}"
            )

        if status == PaymentProof.Status.REJECTED:
            admin_notes = require_text(admin_notes, "Rejection reason")

        now = timezone.now()
        proof.status = status
        proof.admin_notes = (admin_notes or '').strip()
        proof.reviewed_by = admin
        proof.reviewed_at = now
        if status == PaymentProof.Status.VERIFIED:
            proof.verified_date = now
        proof.save()

        company = proof.company
        if status == PaymentProof.Status.VERIFIED:
            CompanyService.mark_payment_verified(company.pk)
            notify(company.owner_id, 'PAYMENT_VERIFIED', {
                'title': "Payment Verified",
                'message': "Your payment proof has been verified. You can now post jobs.",
                'link': "/payments/status",
                'proof_id': proof.pk,
            })
        else:
            notify(company.owner_id, 'PAYMENT_REJECTED', {
                'title': "Payment Rejected",
                'message': f"Your payment proof has been rejected. {proof.admin_notes}",
                'link': "/payments/status",
                'proof_id': proof.pk,
            })

        logger.info("Payment proof %s marked %s by admin %s", proof.pk, status, admin.pk)
        return proof

    @classmethod
    def history(cls, company):
        return PaymentProof.objects.filter(company=company).order_by('-upload_date', '-id')

    @classmethod
    def current_proof(cls, company):
        """The most recently submitted proof is the one shown as current status."""
        return cls.history(company).first()

    @classmethod
    def get_status(cls, company):
        return {
            'company_id': company.pk,
            'payment_verified': company.payment_verified,
            'current_proof': cls.current_proof(company),
        }

    @classmethod
    def list_pending(cls):
        return (
            PaymentProof.objects
            .filter(status=PaymentProof.Status.PENDING_REVIEW)
            .select_related('company', 'company__owner')
            .order_by('upload_date', 'id')
        )
