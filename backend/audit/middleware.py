"""
Request audit middleware for the GoldFinch order desk.

Writes one line per API request to the ``goldfinch.audit`` logger.
"""

import logging
import time

from core.utils import get_client_ip

audit_logger = logging.getLogger('goldfinch.audit')

SKIP_PREFIXES = (
    '/static/',
    '/media/',
    '/health/',
    '/favicon.ico',
)


class AuditLoggingMiddleware:
    """
    Logs method, path, user, status code, duration and client IP.

    Level follows the response: 5xx as error, 4xx as warning, the rest as
    info. Order-level events are logged by the services themselves on
    ``goldfinch.orders``.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        start_time = time.monotonic()
        response = self.get_response(request)
        duration_ms = round((time.monotonic() - start_time) * 1000, 2)

        if not request.path.startswith(SKIP_PREFIXES):
            self._log_request(request, response, duration_ms)

        return response

    def _log_request(self, request, response, duration_ms):
        user_id = 'anonymous'
        user_role = 'none'

        # DRF copies the JWT user onto the Django request after authenticating
        user = getattr(request, 'user', None)
        if user is not None and user.is_authenticated:
            user_id = str(user.id)
            user_role = getattr(user, 'role', 'none')

        if response.status_code >= 500:
            level = logging.ERROR
        elif response.status_code >= 400:
            level = logging.WARNING
        else:
            level = logging.INFO

        audit_logger.log(
            level,
            "%s %s status=%s user=%s role=%s duration_ms=%s ip=%s agent=%s",
            request.method,
            request.path,
            response.status_code,
            user_id,
            user_role,
            duration_ms,
            get_client_ip(request),
            request.META.get('HTTP_USER_AGENT', '')[:200],
        )
