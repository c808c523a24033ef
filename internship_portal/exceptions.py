import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _message_from_detail(detail):
    """Pick a single human readable message out of a DRF error detail."""
    if isinstance(detail, dict):
        if 'detail' in detail:
            return str(detail['detail'])
        for field, errors in detail.items():
            first = errors[0] if isinstance(errors, list) and errors else errors
            return f"{field}: {first}"
        return "Invalid request"
    if isinstance(detail, list):
        return str(detail[0]) if detail else "Invalid request"
    return str(detail)


def api_exception_handler(exc, context):
    """
    Render every API error as ``{"success": false, "message": ...}``.

    DRF's default handler decides the status code; anything it does not
    recognise is logged with its traceback and turned into a 500.
    """
    response = exception_handler(exc, context)
    request = context.get('request')
    route = f"{request.method} {request.path}" if request is not None else "unknown route"

    if response is None:
        logger.exception(f"[{route}] Unhandled error: {exc}")
        return Response(
            {'success': False, 'message': 'Internal server error'},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    body = {
        'success': False,
        'message': _message_from_detail(response.data),
    }
    if isinstance(response.data, dict) and 'detail' not in response.data:
        body['errors'] = response.data
    response.data = body
    return response
