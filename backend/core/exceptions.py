"""
Custom exception handling for the GoldFinch order desk.

Every error leaves the API as a plain message string:

    {"error": "Order not found."}

Domain exceptions may attach extra flags next to the message (for example
``edit_window_expired``) so the salesman UI can tell the rejection reasons
apart without parsing text. Unexpected errors are logged with the original
exception and answered with a generic 500.
"""

import logging
from rest_framework import status
from rest_framework.exceptions import APIException, ValidationError
from rest_framework.response import Response
from rest_framework.views import exception_handler

from .utils import get_client_ip

logger = logging.getLogger(__name__)
security_logger = logging.getLogger('goldfinch.security')


def custom_exception_handler(exc, context):
    response = exception_handler(exc, context)
    request = context.get('request')
    view = context.get('view')

    if response is None:
        # Not an API exception: persistence failure or a bug.
        logger.error(
            "Unhandled error in %s: %s",
            view.__class__.__name__ if view else 'unknown',
            exc,
            exc_info=exc,
        )
        return Response(
            {'error': _get_safe_message(exc, status.HTTP_500_INTERNAL_SERVER_ERROR)},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    body = {'error': _get_safe_message(exc, response.status_code)}

    if isinstance(exc, ValidationError) and isinstance(exc.detail, dict):
        body['fields'] = exc.detail

    if isinstance(exc, OrderDeskAPIException):
        body.update(exc.extra)

    if response.status_code in [401, 403, 429]:
        _log_security_event(exc, request, view, response.status_code)

    response.data = body
    return response


def _get_safe_message(exc, status_code):
    """
    Pick the message shown to the caller.

    API exceptions carry messages written for users; anything else only
    gets a generic sentence so internals never leak.
    """
    safe_messages = {
        400: 'Invalid request. Please check your input.',
        401: 'Authentication required.',
        403: 'You do not have permission to perform this action.',
        404: 'The requested resource was not found.',
        405: 'This method is not allowed.',
        429: 'Too many requests. Please try again later.',
        500: 'An internal error occurred. Please try again later.',
    }

    detail = getattr(exc, 'detail', None)
    if isinstance(exc, APIException) and detail is not None:
        message = _first_message(detail)
        if message:
            return message

    return safe_messages.get(status_code, 'An error occurred.')


def _first_message(detail):
    if isinstance(detail, dict):
        for errors in detail.values():
            message = _first_message(errors)
            if message:
                return message
        return None
    if isinstance(detail, (list, tuple)):
        for item in detail:
            message = _first_message(item)
            if message:
                return message
        return None
    return str(detail)


def _log_security_event(exc, request, view, status_code):
    user_info = 'anonymous'
    if request and hasattr(request, 'user') and request.user.is_authenticated:
        user_info = str(request.user.id)

    security_logger.warning(
        "Security event: status=%s, user=%s, ip=%s, view=%s, exception=%s",
        status_code,
        user_info,
        get_client_ip(request),
        view.__class__.__name__ if view else 'unknown',
        exc.__class__.__name__,
    )


class OrderDeskAPIException(APIException):
    """
    Base class for domain errors raised from services and views.

    ``extra`` is merged into the error body next to the message.
    """

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'An error occurred.'
    default_code = 'error'
    default_extra = {}

    def __init__(self, detail=None, code=None, extra=None):
        super().__init__(detail, code)
        self.extra = dict(self.default_extra)
        if extra:
            self.extra.update(extra)


class EditWindowExpired(OrderDeskAPIException):
    """Salesman tried to edit an order after the edit window closed."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'The edit window for this order has expired.'
    default_code = 'edit_window_expired'
    default_extra = {'edit_window_expired': True}


class OrderAlreadyProcessed(OrderDeskAPIException):
    """Salesman tried to edit an order that production already picked up."""
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'This order is already being processed and can no longer be edited.'
    default_code = 'order_processed'
    default_extra = {'order_processed': True}


class AccountBlocked(OrderDeskAPIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Account is blocked. Please contact support.'
    default_code = 'account_blocked'


class AccountPendingApproval(OrderDeskAPIException):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = 'Account is pending approval. Please wait for admin approval.'
    default_code = 'account_pending'
