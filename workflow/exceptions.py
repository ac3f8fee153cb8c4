"""
Business-rule errors raised by the workflow engine.

Each error is a DRF ``APIException`` so views can let it propagate and the
project exception handler renders it with the matching HTTP status.
None of these are transient: callers must not retry them.
"""
from rest_framework import status
from rest_framework.exceptions import APIException


class WorkflowError(APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'The request violates a workflow rule.'
    default_code = 'workflow_error'


class ValidationError(WorkflowError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'A required field is missing or malformed.'
    default_code = 'validation_error'


class NotFound(WorkflowError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'The referenced record does not exist.'
    default_code = 'not_found'


class AlreadyExists(WorkflowError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The record already exists.'
    default_code = 'already_exists'


class DuplicateApplication(AlreadyExists):
    default_detail = 'You have already applied to this job.'
    default_code = 'duplicate_application'


class InvalidTransition(WorkflowError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'The record is not in a state that permits this operation.'
    default_code = 'invalid_transition'


class Unauthorized(WorkflowError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'You are not allowed to perform this action.'
    default_code = 'unauthorized'


class AccountDisabled(WorkflowError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Your account has been disabled.'
    default_code = 'account_disabled'


class PaymentNotVerified(WorkflowError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Company payment must be verified before posting jobs.'
    default_code = 'payment_not_verified'


class JobNotAvailable(WorkflowError):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'This job is not accepting applications.'
    default_code = 'job_not_available'


def require_text(value, field_name):
    """Return ``value`` stripped, or raise ValidationError when it is blank."""
    if value is None or not str(value).strip():
        raise ValidationError(f"{field_name} is required.")
    return str(value).strip()
