"""Tests for best-effort notification delivery and the inbox."""

from unittest.mock import patch

import pytest
from django.db import DatabaseError

from notifications.models import Notification
from notifications.services import NotificationService, notify
from payments.models import PaymentProof
from workflow.exceptions import AccountDisabled, NotFound, Unauthorized, ValidationError
from workflow.orchestrator import Workflow

pytestmark = pytest.mark.django_db


class TestDelivery:

    def test_delivered_after_commit(self, employer, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            notify(employer.pk, 'JOB_APPROVED', {'title': "Job Approved", 'message': "Live", 'job_id': 7})
            assert not Notification.objects.exists()

        assert len(callbacks) == 1
        callbacks[0]()

        notice = Notification.objects.get(user=employer)
        assert notice.title == "Job Approved"
        assert notice.payload['job_id'] == 7
        assert notice.read is False

    def test_title_defaults_to_event(self, employer, django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks(execute=True):
            notify(employer.pk, 'PING', {})
        assert Notification.objects.get(user=employer).title == 'PING'

    def test_delivery_failure_does_not_undo_transition(self, pending_proof, admin, principal,
                                                       django_capture_on_commit_callbacks):
        with patch.object(Notification.objects, 'create', side_effect=DatabaseError("inbox down")), \
                patch('notifications.services.logger') as logger:
            with django_capture_on_commit_callbacks(execute=True):
                Workflow.decide_payment_proof(principal(admin), pending_proof.pk, "VERIFIED")

        pending_proof.refresh_from_db()
        assert pending_proof.status == PaymentProof.Status.VERIFIED
        assert logger.exception.called
        assert not Notification.objects.exists()

    def test_disabled_by_setting(self, settings, pending_proof, admin, principal,
                                 django_capture_on_commit_callbacks):
        settings.NOTIFICATIONS_ENABLED = False
        with django_capture_on_commit_callbacks() as callbacks:
            Workflow.decide_payment_proof(principal(admin), pending_proof.pk, "VERIFIED")
        assert callbacks == []

    def test_nothing_sent_when_transition_fails(self, pending_proof, admin, principal,
                                                django_capture_on_commit_callbacks):
        with django_capture_on_commit_callbacks() as callbacks:
            with pytest.raises(ValidationError):
                Workflow.decide_payment_proof(principal(admin), pending_proof.pk, "REJECTED", "")
        assert callbacks == []


class TestInbox:

    @pytest.fixture
    def notices(self, employer):
        return [
            Notification.objects.create(user=employer, event='JOB_APPROVED', title="Job Approved"),
            Notification.objects.create(user=employer, event='NEW_APPLICATION', title="New Application"),
        ]

    def test_unread_count(self, notices, employer):
        assert NotificationService.unread_count(employer.pk) == 2
        NotificationService.mark_as_read(notices[0].pk, employer.pk)
        assert NotificationService.unread_count(employer.pk) == 1

    def test_mark_as_read_twice(self, notices, employer):
        NotificationService.mark_as_read(notices[0].pk, employer.pk)
        notice = NotificationService.mark_as_read(notices[0].pk, employer.pk)
        assert notice.read is True

    def test_cannot_read_someone_elses(self, notices, seeker):
        with pytest.raises(Unauthorized):
            NotificationService.mark_as_read(notices[0].pk, seeker.pk)

    def test_unknown_notification(self, employer):
        with pytest.raises(NotFound):
            NotificationService.mark_as_read(999, employer.pk)

    def test_api(self, notices, employer, client_for):
        client = client_for(employer)

        response = client.get('/api/notifications/')
        assert response.status_code == 200
        assert len(response.data) == 2

        response = client.post(f'/api/notifications/{notices[1].pk}/read/')
        assert response.status_code == 200
        assert response.data['read'] is True

        assert client.get('/api/notifications/unread-count/').data == {"unread": 1}


class TestMarkReadIsAWrite:

    @pytest.fixture
    def notice(self, employer):
        return Notification.objects.create(user=employer, event='JOB_APPROVED', title="Job Approved")

    def test_through_workflow(self, notice, employer, principal):
        assert Workflow.mark_notification_read(principal(employer), notice.pk).read is True

    def test_disabled_account_cannot_mark_read(self, notice, employer, principal):
        employer.enabled = False
        employer.save()
        with pytest.raises(AccountDisabled):
            Workflow.mark_notification_read(principal(employer), notice.pk)
        notice.refresh_from_db()
        assert notice.read is False

    def test_disabled_account_over_http(self, notice, employer, client_for):
        employer.enabled = False
        employer.save()
        response = client_for(employer).post(f'/api/notifications/{notice.pk}/read/')
        assert response.status_code == 403
        assert response.data["code"] == "account_disabled"
