"""WebSocket authentication middleware: JWT in the query string, session cookies otherwise."""

import logging
from urllib.parse import parse_qs

from channels.db import database_sync_to_async
from channels.middleware import BaseMiddleware
from channels.auth import AuthMiddlewareStack
from django.contrib.auth import get_user_model
from django.contrib.auth.models import AnonymousUser
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import AccessToken

User = get_user_model()
logger = logging.getLogger(__name__)


@database_sync_to_async
def get_user_for_token(raw_token: str):
    """Resolve an access token to its user, AnonymousUser when invalid."""
    try:
        access = AccessToken(raw_token)
        return User.objects.get(id=access["user_id"])
    except (TokenError, KeyError, User.DoesNotExist) as e:
        logger.debug("JWT auth failed: %s", e)
        return AnonymousUser()


class JWTAuthMiddleware(BaseMiddleware):
    """
    Authenticate with ``?token=<access>`` (mobile clients).

    Without a token the scope user set by the session middleware (browser) is kept.
    """

    async def __call__(self, scope, receive, send):
        params = parse_qs(scope.get("query_string", b"").decode())
        token_list = params.get("token")

        if token_list:
            scope["user"] = await get_user_for_token(token_list[0])
        elif "user" not in scope:
            scope["user"] = AnonymousUser()

        return await super().__call__(scope, receive, send)


def JWTOrCookieAuthMiddleware(inner):
    """Session/cookie auth first, then let a query-string JWT override it."""
    return AuthMiddlewareStack(JWTAuthMiddleware(inner))
