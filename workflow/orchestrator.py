"""
Single entry point for every workflow operation.

Each method takes the acting ``Principal`` explicitly, checks it against the
capability table, resolves ownership of the target records and enforces the
Company -> PaymentProof -> Job -> Application ordering before handing over to
the state machine services. The services trust their caller and never
re-check authorization.
"""
import logging

from django.contrib.auth import get_user_model
from django.db import transaction

from companies.models import Company
from companies.services import CompanyService
from jobs import queries
from jobs.models import Application, Job, SeekerProfile
from jobs.services import ApplicationService, JobService
from notifications.services import NotificationService
from payments.services import PaymentService
from .authorization import Action, authorize
from .exceptions import JobNotAvailable, NotFound, PaymentNotVerified, Unauthorized, ValidationError

logger = logging.getLogger(__name__)

User = get_user_model()


class Workflow:

    # --- helpers ---

    @classmethod
    def _user(cls, principal):
        try:
            return User.objects.get(pk=principal.user_id)
        except User.DoesNotExist:
            raise NotFound("User not found.")

    @classmethod
    def _own_company(cls, principal):
        return CompanyService.get_company(principal.user_id)

    @classmethod
    def _owned_job(cls, principal, job_id):
        job = JobService.get_job(job_id)
        if not principal.owns(job.company.owner_id):
            raise Unauthorized("You do not own this job.")
        return job

    # --- companies ---

    @classmethod
    def create_company(cls, principal, profile):
        authorize(principal, Action.CREATE_COMPANY)
        return CompanyService.create_company(cls._user(principal), profile)

    @classmethod
    def update_company(cls, principal, profile):
        authorize(principal, Action.UPDATE_COMPANY)
        return CompanyService.update_company(cls._user(principal), profile)

    @classmethod
    def get_own_company(cls, principal):
        authorize(principal, Action.VIEW_OWN_COMPANY)
        return cls._own_company(principal)

    @classmethod
    def get_company_by_id(cls, company_id):
        return CompanyService.get_company_by_id(company_id)

    # --- payment verification ---

    @classmethod
    def submit_payment_proof(cls, principal, reference_number, file):
        authorize(principal, Action.SUBMIT_PAYMENT_PROOF)
        return PaymentService.submit_proof(cls._own_company(principal), reference_number, file)

    @classmethod
    def decide_payment_proof(cls, principal, proof_id, status, admin_notes=''):
        authorize(principal, Action.DECIDE_PAYMENT_PROOF)
        return PaymentService.decide(proof_id, status, cls._user(principal), admin_notes)

    @classmethod
    def get_payment_status(cls, principal, company_id):
        authorize(principal, Action.VIEW_PAYMENT_STATUS)
        company = CompanyService.get_company_by_id(company_id)
        if not (principal.is_admin or principal.owns(company.owner_id)):
            raise Unauthorized("You do not own this company.")
        return PaymentService.get_status(company)

    @classmethod
    def get_own_payment_status(cls, principal):
        authorize(principal, Action.VIEW_PAYMENT_STATUS)
        return PaymentService.get_status(cls._own_company(principal))

    @classmethod
    def get_own_payment_history(cls, principal):
        authorize(principal, Action.VIEW_PAYMENT_STATUS)
        return PaymentService.history(cls._own_company(principal))

    @classmethod
    def get_payment_proof(cls, principal, proof_id):
        authorize(principal, Action.VIEW_PAYMENT_PROOF)
        proof = PaymentService.get_proof(proof_id)
        if not (principal.is_admin or principal.owns(proof.company.owner_id)):
            raise Unauthorized("You do not own this payment proof.")
        return proof

    @classmethod
    def list_pending_payments(cls, principal):
        authorize(principal, Action.LIST_PENDING_PAYMENTS)
        return PaymentService.list_pending()

    # --- jobs ---

    @classmethod
    def create_job(cls, principal, data):
        authorize(principal, Action.CREATE_JOB)
        company = Company.objects.filter(owner_id=principal.user_id).first()
        if company is None:
            raise PaymentNotVerified("Register your company and verify payment before posting jobs.")
        return JobService.create_job(company, data)

    @classmethod
    def update_job(cls, principal, job_id, data):
        authorize(principal, Action.UPDATE_JOB)
        cls._owned_job(principal, job_id)
        return JobService.update_job(job_id, data)

    @classmethod
    def resubmit_job(cls, principal, job_id, data):
        authorize(principal, Action.RESUBMIT_JOB)
        cls._owned_job(principal, job_id)
        return JobService.resubmit_job(job_id, data)

    @classmethod
    def close_job(cls, principal, job_id):
        authorize(principal, Action.CLOSE_JOB)
        cls._owned_job(principal, job_id)
        return JobService.close_job(job_id)

    @classmethod
    def approve_job(cls, principal, job_id):
        authorize(principal, Action.APPROVE_JOB)
        return JobService.approve_job(job_id, cls._user(principal))

    @classmethod
    def reject_job(cls, principal, job_id, reason):
        authorize(principal, Action.REJECT_JOB)
        return JobService.reject_job(job_id, cls._user(principal), reason)

    @classmethod
    def get_job(cls, principal, job_id):
        """
        Anyone may read an ACTIVE job. Other states are visible to the owner
        and to admins only; everyone else gets NotFound.
        """
        job = JobService.get_job(job_id)
        if job.status == Job.Status.ACTIVE:
            return job
        if principal is not None and (principal.is_admin or principal.owns(job.company.owner_id)):
            return job
        raise NotFound("Job not found.")

    @classmethod
    def list_active_jobs(cls, **filters):
        return JobService.search_active(**filters)

    @classmethod
    def list_own_jobs(cls, principal):
        authorize(principal, Action.LIST_COMPANY_JOBS)
        return JobService.list_by_company(cls._own_company(principal))

    @classmethod
    def list_company_jobs(cls, principal, company_id):
        authorize(principal, Action.LIST_COMPANY_JOBS)
        company = CompanyService.get_company_by_id(company_id)
        if not (principal.is_admin or principal.owns(company.owner_id)):
            raise Unauthorized("You do not own this company.")
        return JobService.list_by_company(company)

    @classmethod
    def list_pending_jobs(cls, principal):
        authorize(principal, Action.LIST_PENDING_JOBS)
        return JobService.list_pending()

    # --- applications ---

    @classmethod
    def apply_to_job(cls, principal, job_id, resume=None, cover_letter=''):
        # A job that is not open fails the same way for every caller
        job = JobService.get_job(job_id)
        if job.status != Job.Status.ACTIVE:
            raise JobNotAvailable("Cannot apply to a job that is not active.")
        authorize(principal, Action.APPLY_TO_JOB)
        return ApplicationService.create_application(job_id, cls._user(principal), resume, cover_letter)

    @classmethod
    def update_application_status(cls, principal, application_id, new_status, employer_notes=''):
        authorize(principal, Action.UPDATE_APPLICATION_STATUS)
        application = ApplicationService.get_application(application_id)
        if not principal.owns(application.job.company.owner_id):
            raise Unauthorized("You do not own the job this application belongs to.")
        return ApplicationService.update_status(
            application_id, new_status, employer_notes, changed_by=cls._user(principal)
        )

    @classmethod
    def get_application(cls, principal, application_id):
        """The applicant, the employer who owns the job, or an admin."""
        authorize(principal, Action.VIEW_APPLICATION)
        application = ApplicationService.get_application(application_id)
        if not (
            principal.is_admin
            or principal.owns(application.job_seeker_id)
            or principal.owns(application.job.company.owner_id)
        ):
            raise Unauthorized("You cannot view this application.")
        return application

    @classmethod
    def list_job_applications(cls, principal, job_id):
        authorize(principal, Action.LIST_JOB_APPLICATIONS)
        job = JobService.get_job(job_id)
        if not (principal.is_admin or principal.owns(job.company.owner_id)):
            raise Unauthorized("You do not own this job.")
        return queries.list_by_job(job)

    @classmethod
    def list_own_applications(cls, principal):
        authorize(principal, Action.LIST_OWN_APPLICATIONS)
        return queries.list_by_job_seeker(principal.user_id)

    @classmethod
    def employer_pipeline(cls, principal):
        authorize(principal, Action.VIEW_PIPELINE)
        return (
            queries.list_all_for_employer(principal.user_id),
            queries.pipeline_summary(principal.user_id),
        )

    # --- seeker profile ---

    @classmethod
    def get_seeker_profile(cls, principal):
        authorize(principal, Action.VIEW_SEEKER_PROFILE)
        profile, _ = SeekerProfile.objects.get_or_create(user_id=principal.user_id)
        return profile

    @classmethod
    @transaction.atomic
    def update_seeker_profile(cls, principal, data):
        authorize(principal, Action.UPDATE_SEEKER_PROFILE)
        profile, _ = SeekerProfile.objects.select_for_update().get_or_create(user_id=principal.user_id)
        for field in ('resume', 'skills', 'portfolio_url'):
            if field in data:
                setattr(profile, field, data[field])
        profile.save()
        return profile

    # --- notifications ---

    @classmethod
    def mark_notification_read(cls, principal, notification_id):
        authorize(principal, Action.MARK_NOTIFICATION_READ)
        return NotificationService.mark_as_read(notification_id, principal.user_id)

    # --- administration ---

    @classmethod
    def list_users(cls, principal, role=None):
        authorize(principal, Action.LIST_USERS)
        users = User.objects.all().order_by('-date_joined')
        if role:
            users = users.filter(role=role)
        return users

    @classmethod
    @transaction.atomic
    def set_user_enabled(cls, principal, user_id, enabled):
        authorize(principal, Action.SET_USER_ENABLED)
        if principal.owns(user_id) and not enabled:
            raise ValidationError("You cannot disable your own account.")

        try:
            user = User.objects.select_for_update().get(pk=user_id)
        except User.DoesNotExist:
            raise NotFound("User not found.")

        user.enabled = enabled
        user.save(update_fields=['enabled', 'updated_at'])
        logger.info("User %s %s by admin %s", user.pk, "enabled" if enabled else "disabled", principal.user_id)
        return user

    @classmethod
    def system_stats(cls, principal):
        authorize(principal, Action.VIEW_STATS)
        return {
            'total_users': User.objects.count(),
            'total_employers': User.objects.filter(role=User.Roles.EMPLOYER).count(),
            'total_job_seekers': User.objects.filter(role=User.Roles.JOB_SEEKER).count(),
            'total_companies': Company.objects.count(),
            'verified_companies': Company.objects.filter(payment_verified=True).count(),
            'total_jobs': Job.objects.count(),
            'active_jobs': Job.objects.filter(status=Job.Status.ACTIVE).count(),
            'pending_jobs': Job.objects.filter(status=Job.Status.PENDING_APPROVAL).count(),
            'total_applications': Application.objects.count(),
        }
