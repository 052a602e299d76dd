"""Abstract interface for application users."""

from abc import ABC, abstractmethod

from src.core.entities.user import AppUser


class IUserStore(ABC):
    @abstractmethod
    async def get_by_email(self, email: str) -> AppUser | None:
        pass

    @abstractmethod
    async def add(self, user: AppUser) -> AppUser:
        pass
