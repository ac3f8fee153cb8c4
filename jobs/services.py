import logging

from django.db import IntegrityError, transaction
from django.db.models import Q
from django.utils import timezone

from notifications.services import notify
from workflow.exceptions import (
    DuplicateApplication, InvalidTransition, JobNotAvailable, NotFound,
    PaymentNotVerified, ValidationError, require_text
)
from .models import Application, ApplicationStatusChange, Job, SeekerProfile

logger = logging.getLogger(__name__)


class JobService:
    """
    Job posting state machine.

        PENDING_APPROVAL -> ACTIVE | REJECTED
        ACTIVE           -> CLOSED

    Every transition re-reads the row with ``select_for_update`` inside the
    transaction, so of two concurrent attempts only the first succeeds and the
    second observes InvalidTransition.
    """
    JOB_FIELDS = (
        'title', 'description', 'category', 'location', 'employment_type',
        'min_salary', 'max_salary', 'requirements', 'responsibilities'
    )

    @classmethod
    def _clean(cls, data):
        cleaned = {key: value for key, value in data.items() if key in cls.JOB_FIELDS}
        cleaned['title'] = require_text(cleaned.get('title'), "Job title")
        cleaned['category'] = require_text(cleaned.get('category'), "Category")
        cleaned['location'] = require_text(cleaned.get('location'), "Location")

        min_salary, max_salary = cleaned.get('min_salary'), cleaned.get('max_salary')
        if min_salary is not None and max_salary is not None and min_salary > max_salary:
            raise ValidationError("Minimum salary cannot exceed maximum salary.")
        return cleaned

    @classmethod
    def _lock(cls, job_id):
        try:
            return Job.objects.select_for_update().select_related('company').get(pk=job_id)
        except Job.DoesNotExist:
            raise NotFound("Job not found.")

    @classmethod
    def _require_status(cls, job, expected):
        if job.status != expected:
            raise InvalidTransition(f"Job cannot change from {job.status} here.")

    @classmethod
    def get_job(cls, job_id):
        try:
            return Job.objects.select_related('company', 'company__owner').get(pk=job_id)
        except Job.DoesNotExist:
            raise NotFound("Job not found.")

    @classmethod
    @transaction.atomic
    def create_job(cls, company, data):
        if not company.payment_verified:
            raise PaymentNotVerified()

        job = Job.objects.create(company=company, status=Job.Status.PENDING_APPROVAL, **cls._clean(data))
        logger.info("Job %s created for company %s", job.pk, company.pk)
        return job

    @classmethod
    @transaction.atomic
    def update_job(cls, job_id, data):
        """Owner edits are only accepted while the job still awaits review."""
        job = cls._lock(job_id)
        cls._require_status(job, Job.Status.PENDING_APPROVAL)

        for field, value in cls._clean(data).items():
            setattr(job, field, value)
        job.save()
        return job

    @classmethod
    @transaction.atomic
    def resubmit_job(cls, job_id, data):
        """
        Start a fresh review for a rejected posting.

        The rejected job keeps its status and reason; a new PENDING_APPROVAL
        job linked through ``resubmitted_from`` carries the revised details.
        """
        job = cls._lock(job_id)
        cls._require_status(job, Job.Status.REJECTED)
        if job.resubmissions.exists():
            raise InvalidTransition("This job has already been resubmitted.")
        if not job.company.payment_verified:
            raise PaymentNotVerified()

        fields = {field: getattr(job, field) for field in cls.JOB_FIELDS}
        fields.update(data)
        resubmission = Job.objects.create(
            company=job.company,
            status=Job.Status.PENDING_APPROVAL,
            resubmitted_from=job,
            **cls._clean(fields)
        )
        logger.info("Job %s resubmitted as job %s", job.pk, resubmission.pk)
        return resubmission

    @classmethod
    @transaction.atomic
    def approve_job(cls, job_id, admin):
        job = cls._lock(job_id)
        cls._require_status(job, Job.Status.PENDING_APPROVAL)

        job.status = Job.Status.ACTIVE
        job.rejection_reason = ''
        job.reviewed_by = admin
        job.reviewed_at = job.published_at = timezone.now()
        job.save()

        notify(job.company.owner_id, 'JOB_APPROVED', {
            'title': "Job Approved",
            'message': f"Your job posting '{job.title}' has been approved and is now live.",
            'link': f"/jobs/{job.pk}",
            'job_id': job.pk,
        })
        logger.info("Job %s approved by admin %s", job.pk, admin.pk)
        return job

    @classmethod
    @transaction.atomic
    def reject_job(cls, job_id, admin, reason):
        reason = require_text(reason, "Rejection reason")
        job = cls._lock(job_id)
        cls._require_status(job, Job.Status.PENDING_APPROVAL)

        job.status = Job.Status.REJECTED
        job.rejection_reason = reason
        job.reviewed_by = admin
        job.reviewed_at = timezone.now()
        job.save()

        notify(job.company.owner_id, 'JOB_REJECTED', {
            'title': "Job Rejected",
            'message': f"Your job posting '{job.title}' has been rejected. Reason: {reason}",
            'link': f"/jobs/{job.pk}",
            'job_id': job.pk,
        })
        logger.info("Job %s rejected by admin %s", job.pk, admin.pk)
        return job

    @classmethod
    @transaction.atomic
    def close_job(cls, job_id):
        job = cls._lock(job_id)
        cls._require_status(job, Job.Status.ACTIVE)

        job.status = Job.Status.CLOSED
        job.closed_at = timezone.now()
        job.save()
        logger.info("Job %s closed", job.pk)
        return job

    @classmethod
    def search_active(cls, keyword=None, category=None, location=None, min_salary=None, max_salary=None):
        """
        Public listing. Only ACTIVE jobs are ever returned.
        """
        jobs = Job.objects.filter(status=Job.Status.ACTIVE).select_related('company')
        if keyword:
            jobs = jobs.filter(Q(title__icontains=keyword) | Q(description__icontains=keyword))
        if category:
            jobs = jobs.filter(category__iexact=category)
        if location:
            jobs = jobs.filter(location__icontains=location)
        if min_salary is not None:
            jobs = jobs.filter(max_salary__gte=min_salary)
        if max_salary is not None:
            jobs = jobs.filter(min_salary__lte=max_salary)
        return jobs.order_by('-published_at', '-id')

    @classmethod
    def list_by_company(cls, company):
        return Job.objects.filter(company=company).order_by('-created_at', '-id')

    @classmethod
    def list_pending(cls):
        return (
            Job.objects
            .filter(status=Job.Status.PENDING_APPROVAL)
            .select_related('company', 'company__owner')
            .order_by('created_at', 'id')
        )


class ApplicationService:
    """
    Candidacy state machine.

        SUBMITTED   -> SHORTLISTED | REJECTED | HIRED
        SHORTLISTED -> REJECTED | HIRED

    HIRED and REJECTED are final. Every move is appended to the
    ``ApplicationStatusChange`` audit trail.
    """
    TRANSITIONS = {
        Application.Status.SUBMITTED: frozenset({
            Application.Status.SHORTLISTED,
            Application.Status.REJECTED,
            Application.Status.HIRED,
        }),
        Application.Status.SHORTLISTED: frozenset({
            Application.Status.REJECTED,
            Application.Status.HIRED,
        }),
        Application.Status.REJECTED: frozenset(),
        Application.Status.HIRED: frozenset(),
    }

    STATUS_MESSAGES = {
        Application.Status.SHORTLISTED: "shortlisted",
        Application.Status.REJECTED: "rejected",
        Application.Status.HIRED: "hired",
    }

    @classmethod
    def get_application(cls, application_id):
        try:
            return Application.objects.select_related(
                'job', 'job__company', 'job_seeker'
            ).get(pk=application_id)
        except Application.DoesNotExist:
            raise NotFound("Application not found.")

    @classmethod
    @transaction.atomic
    def create_application(cls, job_id, job_seeker, resume=None, cover_letter=''):
        # Lock the job so it cannot be closed while this application is being filed
        try:
            job = Job.objects.select_for_update().select_related('company').get(pk=job_id)
        except Job.DoesNotExist:
            raise NotFound("Job not found.")

        if job.status != Job.Status.ACTIVE:
            raise JobNotAvailable("Cannot apply to a job that is not active.")

        if Application.objects.filter(job=job, job_seeker=job_seeker).exists():
            raise DuplicateApplication()

        if not resume:
            # Fall back to the resume stored on the seeker profile
            profile = SeekerProfile.objects.filter(user=job_seeker).first()
            if profile is None or not profile.resume:
                raise ValidationError("Resume is required.")
            resume = profile.resume.name

        try:
            with transaction.atomic():
                application = Application.objects.create(
                    job=job,
                    job_seeker=job_seeker,
                    resume=resume,
                    cover_letter=cover_letter or '',
                    status=Application.Status.SUBMITTED
                )
        except IntegrityError:
            raise DuplicateApplication()

        notify(job.company.owner_id, 'NEW_APPLICATION', {
            'title': "New Application",
            'message': f"{job_seeker.full_name} applied to '{job.title}'",
            'link': f"/applications/{application.pk}",
            'application_id': application.pk,
        })
        logger.info("Application %s filed by user %s for job %s", application.pk, job_seeker.pk, job.pk)
        return application

    @classmethod
    @transaction.atomic
    def update_status(cls, application_id, new_status, employer_notes='', changed_by=None):
        if new_status not in Application.Status.values:
            raise ValidationError(f"Unknown application status: {new_status}")
        new_status = Application.Status(new_status)

        try:
            application = Application.objects.select_for_update().select_related('job').get(pk=application_id)
        except Application.DoesNotExist:
            raise NotFound("Application not found.")

        if new_status not in cls.TRANSITIONS[application.status]:
            raise InvalidTransition(
                f"Application cannot move from {application.status} to {new_status}."
            )

        notes = (employer_notes or '').strip()
        ApplicationStatusChange.objects.create(
            application=application,
            from_status=application.status,
            to_status=new_status,
            notes=notes,
            changed_by=changed_by
        )

        application.status = new_status
        if notes:
            application.employer_notes = notes
        application.save()

        notify(application.job_seeker_id, 'APPLICATION_STATUS_UPDATED', {
            'title': "Application Status Updated",
            'message': (
                f"Your application for '{application.job.title}' has been "
                f"{cls.STATUS_MESSAGES[new_status]}."
            ),
            'link': f"/applications/{application.pk}",
            'application_id': application.pk,
            'status': new_status.value,
        })
        logger.info("Application %s moved to %s", application.pk, new_status)
        return application
