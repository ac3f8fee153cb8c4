import logging
from enum import Enum

from .exceptions import AccountDisabled, Unauthorized
from .principal import Role

logger = logging.getLogger(__name__)


class Action(str, Enum):
    # Company
    CREATE_COMPANY = 'create_company'
    UPDATE_COMPANY = 'update_company'
    VIEW_OWN_COMPANY = 'view_own_company'

    # Payment verification
    SUBMIT_PAYMENT_PROOF = 'submit_payment_proof'
    VIEW_PAYMENT_STATUS = 'view_payment_status'
    DECIDE_PAYMENT_PROOF = 'decide_payment_proof'
    LIST_PENDING_PAYMENTS = 'list_pending_payments'
    VIEW_PAYMENT_PROOF = 'view_payment_proof'

    # Jobs
    CREATE_JOB = 'create_job'
    UPDATE_JOB = 'update_job'
    RESUBMIT_JOB = 'resubmit_job'
    CLOSE_JOB = 'close_job'
    APPROVE_JOB = 'approve_job'
    REJECT_JOB = 'reject_job'
    LIST_COMPANY_JOBS = 'list_company_jobs'
    LIST_PENDING_JOBS = 'list_pending_jobs'

    # Applications
    APPLY_TO_JOB = 'apply_to_job'
    UPDATE_APPLICATION_STATUS = 'update_application_status'
    LIST_JOB_APPLICATIONS = 'list_job_applications'
    LIST_OWN_APPLICATIONS = 'list_own_applications'
    VIEW_PIPELINE = 'view_pipeline'
    VIEW_APPLICATION = 'view_application'
    VIEW_SEEKER_PROFILE = 'view_seeker_profile'
    UPDATE_SEEKER_PROFILE = 'update_seeker_profile'

    # Administration
    LIST_USERS = 'list_users'
    SET_USER_ENABLED = 'set_user_enabled'
    VIEW_STATS = 'view_stats'

    # Notifications
    MARK_NOTIFICATION_READ = 'mark_notification_read'


WRITE_ACTIONS = frozenset({
    Action.CREATE_COMPANY,
    Action.UPDATE_COMPANY,
    Action.SUBMIT_PAYMENT_PROOF,
    Action.DECIDE_PAYMENT_PROOF,
    Action.CREATE_JOB,
    Action.UPDATE_JOB,
    Action.RESUBMIT_JOB,
    Action.CLOSE_JOB,
    Action.APPROVE_JOB,
    Action.REJECT_JOB,
    Action.APPLY_TO_JOB,
    Action.UPDATE_APPLICATION_STATUS,
    Action.UPDATE_SEEKER_PROFILE,
    Action.SET_USER_ENABLED,
    Action.MARK_NOTIFICATION_READ,
})

CAPABILITIES = {
    Role.JOB_SEEKER: frozenset({
        Action.APPLY_TO_JOB,
        Action.LIST_OWN_APPLICATIONS,
        Action.VIEW_APPLICATION,
        Action.VIEW_SEEKER_PROFILE,
        Action.UPDATE_SEEKER_PROFILE,
        Action.MARK_NOTIFICATION_READ,
    }),
    Role.EMPLOYER: frozenset({
        Action.CREATE_COMPANY,
        Action.UPDATE_COMPANY,
        Action.VIEW_OWN_COMPANY,
        Action.SUBMIT_PAYMENT_PROOF,
        Action.VIEW_PAYMENT_STATUS,
        Action.VIEW_PAYMENT_PROOF,
        Action.CREATE_JOB,
        Action.UPDATE_JOB,
        Action.RESUBMIT_JOB,
        Action.CLOSE_JOB,
        Action.LIST_COMPANY_JOBS,
        Action.UPDATE_APPLICATION_STATUS,
        Action.LIST_JOB_APPLICATIONS,
        Action.VIEW_PIPELINE,
        Action.VIEW_APPLICATION,
        Action.MARK_NOTIFICATION_READ,
    }),
    Role.ADMIN: frozenset({
        Action.VIEW_PAYMENT_STATUS,
        Action.DECIDE_PAYMENT_PROOF,
        Action.LIST_PENDING_PAYMENTS,
        Action.VIEW_PAYMENT_PROOF,
        Action.APPROVE_JOB,
        Action.REJECT_JOB,
        Action.LIST_COMPANY_JOBS,
        Action.LIST_PENDING_JOBS,
        Action.LIST_JOB_APPLICATIONS,
        Action.LIST_USERS,
        Action.SET_USER_ENABLED,
        Action.VIEW_STATS,
        Action.VIEW_APPLICATION,
        Action.MARK_NOTIFICATION_READ,
    }),
}


def can(principal, action):
    return action in CAPABILITIES.get(principal.role, frozenset())


def authorize(principal, action):
    """
    Raise unless ``principal`` may perform ``action``.

    A disabled account is rejected for every write before its role is even
    considered.
    """
    if action in WRITE_ACTIONS and not principal.enabled:
        logger.info("Blocked %s by disabled user %s", action.value, principal.user_id)
        raise AccountDisabled()
    if not can(principal, action):
        logger.info("Denied %s to user %s with role %s", action.value, principal.user_id, principal.role)
        raise Unauthorized()
