"""
users/authentication.py

OptionalJWTAuthentication
- Same as SimpleJWT's JWTAuthentication, except a bad/expired token does not
  fail the request: the caller simply continues as anonymous.
- Used on public endpoints (announcement feed, prayer times) where the admin
  dashboard sends its token to see unpublished rows, and a stale token in the
  browser must not break the public screen.
- Protected actions still require a valid token through IsAuthenticated.
"""
import logging

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

logger = logging.getLogger(__name__)


class OptionalJWTAuthentication(JWTAuthentication):
    def authenticate(self, request):
        try:
            return super().authenticate(request)
        except (InvalidToken, AuthenticationFailed) as exc:
            logger.debug("Ignoring invalid bearer token on public endpoint: %s", exc)
            return None
