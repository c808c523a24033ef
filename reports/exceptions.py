from rest_framework import exceptions, status


class ValidationError(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'invalid'


class NotFoundError(exceptions.NotFound):
    default_detail = 'Weekly report not found'


class AuthorizationError(exceptions.APIException):
    """
    The caller may not touch this report.

    Rendered exactly like ``NotFoundError`` so a guide cannot tell an
    unassigned report from a missing one.
    """
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = 'Weekly report not found or not assigned to you'
    default_code = 'not_found'
