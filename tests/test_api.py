"""HTTP-level tests: routing, status codes and the error body."""

from decimal import Decimal

import pytest

from jobs.models import Application, Job
from payments.models import PaymentProof
from workflow.orchestrator import Workflow

pytestmark = pytest.mark.django_db

PASSWORD = "Fresh-Start-2024!"


class TestAuth:

    def test_register_and_login(self, api_client):
        response = api_client.post('/api/users/register/', {
            "email": "new@hire.test",
            "full_name": "New Hire",
            "password": PASSWORD,
            "role": "JOB_SEEKER",
        }, format='json')
        assert response.status_code == 201
        assert "password" not in response.data

        response = api_client.post('/api/users/login/', {
            "email": "new@hire.test", "password": PASSWORD
        }, format='json')
        assert response.status_code == 200
        assert "access" in response.data

    def test_cannot_self_register_as_admin(self, api_client):
        response = api_client.post('/api/users/register/', {
            "email": "sneaky@hire.test",
            "full_name": "Sneaky",
            "password": PASSWORD,
            "role": "ADMIN",
        }, format='json')
        assert response.status_code == 400

    def test_profile_requires_authentication(self, api_client):
        assert api_client.get('/api/users/profile/').status_code == 401

    def test_role_is_read_only_on_profile(self, seeker, client_for):
        response = client_for(seeker).patch('/api/users/profile/', {"role": "ADMIN", "full_name": "Renamed"}, format='json')
        assert response.status_code == 200
        seeker.refresh_from_db()
        assert seeker.role == "JOB_SEEKER"
        assert seeker.full_name == "Renamed"


class TestErrorBody:

    def test_workflow_errors_are_flattened(self, employer, client_for, job_data):
        response = client_for(employer).post('/api/jobs/', job_data, format='json')
        assert response.status_code == 403
        assert response.data["code"] == "payment_not_verified"
        assert response.data["error"]

    def test_disabled_account(self, employer, client_for, company_profile):
        employer.enabled = False
        employer.save()
        response = client_for(employer).post('/api/companies/my/', company_profile, format='json')
        assert response.status_code == 403
        assert response.data["code"] == "account_disabled"

    def test_wrong_role(self, seeker, client_for, company_profile):
        response = client_for(seeker).post('/api/companies/my/', company_profile, format='json')
        assert response.status_code == 403
        assert response.data["code"] == "unauthorized"

    def test_hidden_job_is_not_found(self, pending_job, api_client):
        response = api_client.get(f'/api/jobs/{pending_job.pk}/')
        assert response.status_code == 404
        assert response.data["code"] == "not_found"

    def test_serializer_errors_keep_field_detail(self, employer, client_for):
        response = client_for(employer).post('/api/companies/my/', {"description": "no name"}, format='json')
        assert response.status_code == 400
        assert "name" in response.data


class TestCompanyAndPayment:

    def test_register_company_once(self, employer, client_for, company_profile):
        client = client_for(employer)
        response = client.post('/api/companies/my/', company_profile, format='json')
        assert response.status_code == 201
        assert response.data["payment_verified"] is False

        response = client.post('/api/companies/my/', company_profile, format='json')
        assert response.status_code == 409
        assert response.data["code"] == "already_exists"

    def test_payment_verified_cannot_be_self_set(self, company, employer, client_for, company_profile):
        response = client_for(employer).put(
            '/api/companies/my/', {**company_profile, "payment_verified": True}, format='json'
        )
        assert response.status_code == 200
        company.refresh_from_db()
        assert company.payment_verified is False

    def test_submit_and_verify_proof(self, company, employer, admin, client_for, upload):
        client = client_for(employer)
        response = client.post('/api/payments/proofs/', {
            "reference_number": "TRX-99", "file": upload("receipt.pdf")
        }, format='multipart')
        assert response.status_code == 201
        assert response.data["status"] == "PENDING_REVIEW"
        proof_id = response.data["id"]

        client = client_for(admin)
        assert [p["id"] for p in client.get('/api/admin/payments/').data] == [proof_id]
        response = client.put(f'/api/admin/payments/{proof_id}/decide/', {"status": "VERIFIED"}, format='json')
        assert response.status_code == 200
        assert response.data["status"] == "VERIFIED"

        response = client_for(employer).get('/api/payments/status/')
        assert response.data["payment_verified"] is True
        assert response.data["current_proof"]["id"] == proof_id

    def test_wrong_file_type_rejected(self, company, employer, client_for, upload):
        response = client_for(employer).post('/api/payments/proofs/', {
            "reference_number": "TRX-99", "file": upload("receipt.exe")
        }, format='multipart')
        assert response.status_code == 400
        assert not PaymentProof.objects.exists()

    def test_deciding_twice_conflicts(self, pending_proof, admin, client_for):
        client = client_for(admin)
        client.put(f'/api/admin/payments/{pending_proof.pk}/decide/', {"status": "VERIFIED"}, format='json')
        response = client.put(
            f'/api/admin/payments/{pending_proof.pk}/decide/',
            {"status": "REJECTED", "admin_notes": "Oops"},
            format='json'
        )
        assert response.status_code == 409
        assert response.data["code"] == "invalid_transition"


class TestJobs:

    def test_public_listing_is_paginated_and_active_only(self, active_job, employer, principal, job_data, api_client):
        Workflow.create_job(principal(employer), {**job_data, "title": "Awaiting review"})

        response = api_client.get('/api/jobs/')
        assert response.status_code == 200
        assert response.data["count"] == 1
        assert [job["id"] for job in response.data["results"]] == [active_job.pk]

    def test_listing_filters(self, active_job, api_client):
        assert api_client.get('/api/jobs/', {"keyword": "backend"}).data["count"] == 1
        assert api_client.get('/api/jobs/', {"location": "Nairobi"}).data["count"] == 0

    def test_post_job_then_admin_review(self, verified_company, employer, admin, client_for, job_data):
        response = client_for(employer).post('/api/jobs/', job_data, format='json')
        assert response.status_code == 201
        assert response.data["status"] == "PENDING_APPROVAL"
        job_id = response.data["id"]

        client = client_for(admin)
        assert [job["id"] for job in client.get('/api/admin/jobs/pending/').data] == [job_id]
        response = client.put(f'/api/admin/jobs/{job_id}/reject/', {"reason": ""}, format='json')
        assert response.status_code == 400
        assert response.data["code"] == "validation_error"

        response = client.put(f'/api/admin/jobs/{job_id}/approve/')
        assert response.status_code == 200
        assert Job.objects.get(pk=job_id).status == Job.Status.ACTIVE

    def test_owner_sees_own_pending_job(self, pending_job, employer, client_for):
        response = client_for(employer).get(f'/api/jobs/{pending_job.pk}/')
        assert response.status_code == 200
        assert response.data["status"] == "PENDING_APPROVAL"

    def test_close_job(self, active_job, employer, other_employer, client_for):
        response = client_for(other_employer).put(f'/api/jobs/{active_job.pk}/close/')
        assert response.status_code == 403

        response = client_for(employer).put(f'/api/jobs/{active_job.pk}/close/')
        assert response.status_code == 200
        assert response.data["status"] == "CLOSED"


class TestApplications:

    def test_apply_with_upload(self, active_job, seeker, client_for, upload):
        client = client_for(seeker)
        response = client.post(f'/api/jobs/{active_job.pk}/apply/', {
            "resume": upload("cv.pdf"), "cover_letter": "Keen to join"
        }, format='multipart')
        assert response.status_code == 201
        assert response.data["status"] == "SUBMITTED"

        response = client.post(f'/api/jobs/{active_job.pk}/apply/', {"resume": upload("cv.pdf")}, format='multipart')
        assert response.status_code == 409
        assert response.data["code"] == "duplicate_application"

    def test_apply_to_pending_job(self, pending_job, seeker, client_for, upload):
        response = client_for(seeker).post(
            f'/api/jobs/{pending_job.pk}/apply/', {"resume": upload("cv.pdf")}, format='multipart'
        )
        assert response.status_code == 409
        assert response.data["code"] == "job_not_available"

    def test_employer_pipeline(self, application, employer, client_for):
        client = client_for(employer)
        response = client.get('/api/jobs/applications/received/')
        assert response.status_code == 200
        assert response.data["summary"]["SUBMITTED"] == 1
        assert response.data["applications"][0]["id"] == application.pk

        response = client.put(
            f'/api/jobs/applications/{application.pk}/status/', {"status": "INTERVIEWING"}, format='json'
        )
        assert response.status_code == 400
        assert response.data["code"] == "validation_error"

        response = client.put(
            f'/api/jobs/applications/{application.pk}/status/',
            {"status": "HIRED", "employer_notes": "Welcome aboard"},
            format='json'
        )
        assert response.status_code == 200
        assert Application.objects.get(pk=application.pk).status == Application.Status.HIRED

    def test_my_applications(self, application, seeker, client_for):
        response = client_for(seeker).get('/api/jobs/applications/my/')
        assert [row["id"] for row in response.data] == [application.pk]


class TestAdministration:

    def test_disable_user_blocks_writes(self, admin, employer, company, client_for, upload):
        response = client_for(admin).put(f'/api/admin/users/{employer.pk}/status/', {"enabled": False}, format='json')
        assert response.status_code == 200
        assert response.data["enabled"] is False

        employer.refresh_from_db()
        client = client_for(employer)
        response = client.post('/api/payments/proofs/', {
            "reference_number": "TRX-1", "file": upload("receipt.pdf")
        }, format='multipart')
        assert response.status_code == 403
        assert response.data["code"] == "account_disabled"

        assert client.get('/api/companies/my/').status_code == 200

    def test_admin_cannot_disable_self(self, admin, client_for):
        response = client_for(admin).put(f'/api/admin/users/{admin.pk}/status/', {"enabled": False}, format='json')
        assert response.status_code == 400

    def test_user_list_filtered_by_role(self, admin, employer, seeker, client_for):
        response = client_for(admin).get('/api/admin/users/', {"role": "EMPLOYER"})
        assert [row["email"] for row in response.data] == [employer.email]

    def test_stats(self, application, admin, seeker, client_for):
        response = client_for(admin).get('/api/admin/stats/')
        assert response.status_code == 200
        assert response.data["active_jobs"] == 1
        assert response.data["verified_companies"] == 1
        assert response.data["total_applications"] == 1

    def test_admin_routes_reject_non_admins(self, seeker, client_for):
        response = client_for(seeker).get('/api/admin/stats/')
        assert response.status_code == 403
        assert response.data["code"] == "unauthorized"


def _download(response):
    return b"".join(response.streaming_content)


class TestDownloads:

    def test_proof_file_for_owner_and_admin(self, pending_proof, employer, admin, client_for):
        for user in (employer, admin):
            response = client_for(user).get(f'/api/payments/proofs/{pending_proof.pk}/file/')
            assert response.status_code == 200
            assert response['Content-Disposition'].startswith('attachment')
            assert _download(response) == b"%PDF-1.4 test"

    def test_proof_file_hidden_from_other_employer(self, pending_proof, other_employer, client_for):
        response = client_for(other_employer).get(f'/api/payments/proofs/{pending_proof.pk}/file/')
        assert response.status_code == 403
        assert response.data["code"] == "unauthorized"

    def test_proof_file_requires_login(self, pending_proof, api_client):
        assert api_client.get(f'/api/payments/proofs/{pending_proof.pk}/file/').status_code == 401

    def test_serialized_proof_links_to_download(self, pending_proof, employer, client_for):
        data = client_for(employer).get('/api/payments/history/').data[0]
        assert "file" not in data
        assert data["file_url"] == f'/api/payments/proofs/{pending_proof.pk}/file/'

    def test_admin_proof_detail(self, pending_proof, admin, seeker, client_for):
        response = client_for(admin).get(f'/api/admin/payments/{pending_proof.pk}/')
        assert response.status_code == 200
        assert response.data["reference_number"] == "REF-001"

        assert client_for(seeker).get(f'/api/admin/payments/{pending_proof.pk}/').status_code == 403

    def test_resume_for_applicant_and_job_owner(self, application, seeker, employer, client_for):
        for user in (seeker, employer):
            response = client_for(user).get(f'/api/jobs/applications/{application.pk}/resume/')
            assert response.status_code == 200
            assert _download(response) == b"%PDF-1.4 test"

    def test_resume_hidden_from_other_seekers(self, application, other_seeker, other_employer, client_for):
        for user in (other_seeker, other_employer):
            response = client_for(user).get(f'/api/jobs/applications/{application.pk}/resume/')
            assert response.status_code == 403

    def test_serialized_application_links_to_download(self, application, seeker, client_for):
        row = client_for(seeker).get('/api/jobs/applications/my/').data[0]
        assert row["resume_url"] == f'/api/jobs/applications/{application.pk}/resume/'


class TestSearchAndOrdering:

    def test_keyword_matches_company_name(self, active_job, api_client):
        assert api_client.get('/api/jobs/', {"keyword": "acme"}).data["count"] == 1
        assert api_client.get('/api/jobs/', {"keyword": "globex"}).data["count"] == 0

    def test_ordering_by_salary(self, active_job, employer, admin, principal, job_data, api_client):
        cheap = Workflow.create_job(
            principal(employer), {**job_data, "title": "Intern", "min_salary": Decimal("100")}
        )
        Workflow.approve_job(principal(admin), cheap.pk)
        Job.objects.filter(pk=active_job.pk).update(min_salary=Decimal("900"))

        response = api_client.get('/api/jobs/', {"ordering": "-min_salary"})
        assert [job["id"] for job in response.data["results"]] == [active_job.pk, cheap.pk]
