"""
Request helpers shared by middleware, authentication and error handling.

Kept free of rest_framework imports: DRF's settings import the
authentication backend, which needs these helpers.
"""


def get_client_ip(request):
    """Client IP, honouring X-Forwarded-For from the reverse proxy."""
    if not request:
        return 'unknown'

    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    if x_forwarded_for:
        return x_forwarded_for.split(',')[0].strip()
    return request.META.get('REMOTE_ADDR', 'unknown')
