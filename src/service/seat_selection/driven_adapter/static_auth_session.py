"""Auth session backed by a fixed bearer token (configured or handed over after login)"""

from pydantic import SecretStr

from src.service.seat_selection.app.interface import IAuthSession


class StaticAuthSession(IAuthSession):
    def __init__(self, token: SecretStr | str | None = None):
        if isinstance(token, SecretStr):
            token = token.get_secret_value()
        self._token = token or None

    def get_access_token(self) -> str | None:
        return self._token
