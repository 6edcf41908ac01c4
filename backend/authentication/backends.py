"""
JWT authentication backend for the GoldFinch order desk.

Tokens are issued at login and carry the user's role. Account state can
change after a token is issued (an admin blocks a salesman, a request is
rejected), so it is re-checked against the database on every request.
"""

import logging
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

from core.utils import get_client_ip

security_logger = logging.getLogger('goldfinch.security')


class AccountStateJWTAuthentication(JWTAuthentication):
    """
    Standard bearer-token authentication plus account state checks.

    Raises:
        InvalidToken: if the account is blocked, inactive or not approved
    """

    def authenticate(self, request):
        result = super().authenticate(request)

        if result is None:
            return None

        user, validated_token = result
        self._check_user_status(user, request)
        return (user, validated_token)

    def _check_user_status(self, user, request):
        if user.is_blocked:
            security_logger.warning(
                "Blocked user attempted access: %s from %s", user.id, get_client_ip(request)
            )
            raise InvalidToken({
                'detail': 'Account is blocked. Please contact support.',
                'code': 'account_blocked'
            })

        if not user.is_active:
            raise InvalidToken({
                'detail': 'Your account is not active.',
                'code': 'account_inactive'
            })

        if not user.can_log_in:
            raise InvalidToken({
                'detail': 'Account is pending approval.',
                'code': 'account_pending'
            })
