"""Auth Session Interface - supplies the bearer token for seat API calls"""

from abc import ABC, abstractmethod


class IAuthSession(ABC):
    @abstractmethod
    def get_access_token(self) -> str | None:
        pass
