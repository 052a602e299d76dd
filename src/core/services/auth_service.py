"""Login provisioning and user lookup."""

from src.config import get_logger
from src.core.entities.user import AppUser, Role
from src.core.exceptions import InvalidArgumentError, UserNotFoundError
from src.core.interfaces.unit_of_work import UnitOfWorkFactory

logger = get_logger(__name__)


class AuthService:
    """Maps an identity-provider login onto a local AppUser."""

    def __init__(
        self, uow_factory: UnitOfWorkFactory, admin_emails: list[str] | None = None
    ) -> None:
        self._uow_factory = uow_factory
        self._admin_emails = {e.strip().lower() for e in (admin_emails or []) if e.strip()}

    def role_for(self, email: str) -> Role:
        return Role.ADMIN if email.lower() in self._admin_emails else Role.USER

    async def register_login(self, email: str | None, name: str | None = None) -> AppUser:
        """Return the user for `email`, creating it on first login."""
        if email is None or not email.strip():
            raise InvalidArgumentError("email", "Email must be provided", email)
        email = email.strip().lower()

        async with self._uow_factory() as uow:
            user = await uow.users.get_by_email(email)
            if user is not None:
                return user
            user = await uow.users.add(
                AppUser(
                    email=email,
                    name=(name or "").strip() or email,
                    role=self.role_for(email),
                )
            )

        logger.info("app_user_registered", user_id=user.id, email=email, role=user.role.value)
        return user

    async def get_current_user(self, email: str) -> AppUser:
        async with self._uow_factory(read_only=True) as uow:
            user = await uow.users.get_by_email(email.strip().lower())
        if user is None:
            raise UserNotFoundError(email)
        return user
