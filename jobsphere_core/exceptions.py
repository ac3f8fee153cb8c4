import logging

from rest_framework.views import exception_handler

from workflow.exceptions import WorkflowError

logger = logging.getLogger(__name__)


def api_exception_handler(exc, context):
    """
    DRF's default handler, with workflow rule violations flattened to
    ``{"error": ..., "code": ...}`` for the frontend.
    """
    response = exception_handler(exc, context)
    if response is not None and isinstance(exc, WorkflowError):
        view = context.get('view')
        logger.info(
            "%s rejected in %s: %s",
            exc.default_code, view.__class__.__name__ if view else '-', exc.detail
        )
        response.data = {"error": str(exc.detail), "code": exc.get_codes()}
    return response
