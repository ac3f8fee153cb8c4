"""Pytest configuration and fixtures."""

import pytest
from django.core.files.uploadedfile import SimpleUploadedFile
from rest_framework.test import APIClient

from workflow.orchestrator import Workflow
from workflow.principal import Principal

PASSWORD = "Sup3r-Secret-Pass!"


@pytest.fixture(autouse=True)
def media_root(settings, tmp_path):
    """Keep uploaded proofs and resumes out of the project tree."""
    settings.MEDIA_ROOT = str(tmp_path / "media")


def make_user(model, email, role, **extra):
    return model.objects.create_user(
        username=email,
        email=email,
        password=PASSWORD,
        full_name=email.split("@")[0].title(),
        role=role,
        **extra,
    )


def pdf(name="document.pdf"):
    return SimpleUploadedFile(name, b"%PDF-1.4 test", content_type="application/pdf")


def as_principal(user):
    user.refresh_from_db()
    return Principal.from_user(user)


@pytest.fixture
def admin(db, django_user_model):
    return make_user(django_user_model, "admin@jobsphere.test", "ADMIN", is_staff=True)


@pytest.fixture
def employer(db, django_user_model):
    return make_user(django_user_model, "employer@acme.test", "EMPLOYER")


@pytest.fixture
def other_employer(db, django_user_model):
    return make_user(django_user_model, "boss@globex.test", "EMPLOYER")


@pytest.fixture
def seeker(db, django_user_model):
    return make_user(django_user_model, "seeker@mail.test", "JOB_SEEKER")


@pytest.fixture
def other_seeker(db, django_user_model):
    return make_user(django_user_model, "another@mail.test", "JOB_SEEKER")


@pytest.fixture
def company_profile():
    return {
        "name": "Acme Corp",
        "description": "Widgets",
        "industry": "Manufacturing",
        "address": "1 Main Street",
    }


@pytest.fixture
def job_data():
    return {
        "title": "Backend Engineer",
        "description": "Build APIs in Python",
        "category": "Engineering",
        "location": "Lagos",
        "employment_type": "FULL_TIME",
    }


@pytest.fixture
def company(employer, company_profile):
    return Workflow.create_company(as_principal(employer), company_profile)


@pytest.fixture
def pending_proof(employer, company):
    return Workflow.submit_payment_proof(as_principal(employer), "REF-001", pdf("proof.pdf"))


@pytest.fixture
def verified_company(admin, company, pending_proof):
    Workflow.decide_payment_proof(as_principal(admin), pending_proof.pk, "VERIFIED", "")
    company.refresh_from_db()
    return company


@pytest.fixture
def pending_job(employer, verified_company, job_data):
    return Workflow.create_job(as_principal(employer), job_data)


@pytest.fixture
def active_job(admin, pending_job):
    return Workflow.approve_job(as_principal(admin), pending_job.pk)


@pytest.fixture
def application(seeker, active_job):
    return Workflow.apply_to_job(as_principal(seeker), active_job.pk, pdf("cv.pdf"), "Hire me")


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for(api_client):
    def _client(user):
        api_client.force_authenticate(user=user)
        return api_client
    return _client


@pytest.fixture
def principal():
    """Fresh Principal for a user, reflecting its current enabled flag."""
    return as_principal


@pytest.fixture
def upload():
    return pdf
