from django.db import models
from django.conf import settings
from django.core.validators import FileExtensionValidator
from django.utils.translation import gettext_lazy as _

RESUME_EXTENSIONS = ['pdf', 'doc', 'docx']


class SeekerProfile(models.Model):
    """
    Extended profile for Job Seekers containing skills and a default resume.
    """
    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='seeker_profile'
    )
    resume = models.FileField(
        upload_to='resumes/',
        blank=True,
        null=True,
        validators=[FileExtensionValidator(RESUME_EXTENSIONS)]
    )
    skills = models.JSONField(default=list)  # e.g. ["Python", "SQL"]
    portfolio_url = models.URLField(blank=True, null=True)

    updated_at = models.DateTimeField(auto_now=True)

    def __str__(self):
        return f"Profile: {self.user.full_name}"


class Job(models.Model):
    """
    A posting owned by a company. Hidden from job seekers until an admin approves it.
    """
    class EmploymentType(models.TextChoices):
        FULL_TIME = 'FULL_TIME', _('Full Time')
        PART_TIME = 'PART_TIME', _('Part Time')
        CONTRACT = 'CONTRACT', _('Contract')
        INTERNSHIP = 'INTERNSHIP', _('Internship')
        FREELANCE = 'FREELANCE', _('Freelance/Gig')

    class Status(models.TextChoices):
        PENDING_APPROVAL = 'PENDING_APPROVAL', _('Pending Approval')
        ACTIVE = 'ACTIVE', _('Active')
        REJECTED = 'REJECTED', _('Rejected')
        CLOSED = 'CLOSED', _('Closed')

    company = models.ForeignKey(
        'companies.Company',
        on_delete=models.CASCADE,
        related_name='jobs'
    )
    title = models.CharField(max_length=255)
    description = models.TextField(blank=True)
    category = models.CharField(max_length=100)
    location = models.CharField(max_length=100)
    employment_type = models.CharField(
        max_length=20,
        choices=EmploymentType.choices,
        blank=True
    )

    # Financials
    min_salary = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    max_salary = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)

    requirements = models.TextField(blank=True)
    responsibilities = models.TextField(blank=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.PENDING_APPROVAL
    )

    # Review trail
    rejection_reason = models.TextField(blank=True)
    reviewed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='reviewed_jobs'
    )
    reviewed_at = models.DateTimeField(null=True, blank=True)
    published_at = models.DateTimeField(null=True, blank=True)
    closed_at = models.DateTimeField(null=True, blank=True)

    # Set when this posting was resubmitted after the linked one was rejected
    resubmitted_from = models.ForeignKey(
        'self',
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='resubmissions'
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at', '-id']
        indexes = [
            models.Index(fields=['status']),
            models.Index(fields=['category']),
            models.Index(fields=['location']),
        ]

    def __str__(self):
        return f"{self.title} ({self.status})"


class Application(models.Model):
    class Status(models.TextChoices):
        SUBMITTED = 'SUBMITTED', _('Submitted')
        SHORTLISTED = 'SHORTLISTED', _('Shortlisted')
        REJECTED = 'REJECTED', _('Rejected')
        HIRED = 'HIRED', _('Hired')

    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name='applications')
    job_seeker = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='job_applications'
    )
    resume = models.FileField(
        upload_to='application_resumes/',
        validators=[FileExtensionValidator(RESUME_EXTENSIONS)]
    )
    cover_letter = models.TextField(blank=True)

    status = models.CharField(
        max_length=20,
        choices=Status.choices,
        default=Status.SUBMITTED
    )
    employer_notes = models.TextField(blank=True)

    applied_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        unique_together = ('job', 'job_seeker')  # Prevent double applying
        ordering = ['-applied_at', '-id']

    def __str__(self):
        return f"{self.job_seeker.full_name} -> {self.job.title}"


class ApplicationStatusChange(models.Model):
    """
    Append-only trail of pipeline moves, with the notes given at each step.
    """
    application = models.ForeignKey(Application, on_delete=models.CASCADE, related_name='status_history')
    from_status = models.CharField(max_length=20, choices=Application.Status.choices)
    to_status = models.CharField(max_length=20, choices=Application.Status.choices)
    notes = models.TextField(blank=True)
    changed_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name='+'
    )
    changed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        ordering = ['changed_at', 'id']

    def __str__(self):
        return f"{self.application_id}: {self.from_status} -> {self.to_status}"
