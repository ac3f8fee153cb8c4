from django.db import models
from django.contrib.auth.models import AbstractUser, UserManager as DjangoUserManager
from django.utils.translation import gettext_lazy as _


class UserManager(DjangoUserManager):
    """
    Superusers created from the command line are platform administrators.
    """

    def create_superuser(self, username=None, email=None, password=None, **extra_fields):
        extra_fields.setdefault('role', User.Roles.ADMIN)
        return super().create_superuser(username, email, password, **extra_fields)


class User(AbstractUser):
    """
    Custom User Model for JobSphere.
    Every account carries exactly one immutable role: Job Seeker, Employer or Admin.
    """

    class Roles(models.TextChoices):
        JOB_SEEKER = 'JOB_SEEKER', _('Job Seeker')
        EMPLOYER = 'EMPLOYER', _('Employer')
        ADMIN = 'ADMIN', _('Admin')

    # Basic Info
    full_name = models.CharField(_("Full Name"), max_length=255)
    email = models.EmailField(_("Email Address"), unique=True)
    phone_number = models.CharField(max_length=20, blank=True, null=True)

    role = models.CharField(
        max_length=20,
        choices=Roles.choices,
        default=Roles.JOB_SEEKER
    )

    # Toggled by admins only. Disabled accounts keep their data but cannot write.
    enabled = models.BooleanField(default=True)

    updated_at = models.DateTimeField(auto_now=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = ['username', 'full_name']

    def __str__(self):
        return f"{self.email} ({self.role})"
