import logging
from typing import Optional

from app.constants.constants import MIN_PASSWORD_LENGTH, UserRole
from app.core.errors import AlreadyExists, ValidationFailed
from app.core.security import hash_password, verify_password
from app.schemas.userSchema import Session, User
from app.services.CampusState import CampusState

logger = logging.getLogger(__name__)


class AuthService:
    """Credential checks and registration against the campus user collection."""

    def __init__(
        self,
        state: CampusState,
        admin_identifier: str = "admin1",
        admin_password: str = "123456",
        admin_name: str = "Admin Fasilkom",
    ):
        self.state = state
        self.admin_identifier = admin_identifier
        self.admin_password = admin_password
        self.admin_name = admin_name

    def admin_session(self) -> Session:
        return Session(
            user_identifier=self.admin_identifier,
            name=self.admin_name,
            role=UserRole.admin,
        )

    def is_admin_identifier(self, identifier: str) -> bool:
        return (identifier or "").lower() == self.admin_identifier.lower()

    def find_user(self, identifier: str) -> Optional[User]:
        """Registered user with a case-insensitive identifier match."""
        needle = (identifier or "").strip().lower()
        for user in self.state.users:
            if user.user_identifier.lower() == needle:
                return user
        return None

    def login(self, identifier: str, password: str) -> Optional[Session]:
        """
        Check credentials and open a session.

        The reserved admin pair wins over registered users. Returns None for an
        unknown identifier and for a wrong password alike.
        """
        if identifier == self.admin_identifier and password == self.admin_password:
            logger.info("🔑 Admin logged in")
            return self.admin_session()

        user = self.find_user(identifier)
        if user and verify_password(password, user.password_hash):
            logger.info(f"🔑 User {user.user_identifier} logged in")
            return Session(user_identifier=user.user_identifier, name=user.name, role=user.role)

        logger.info("Login rejected: credentials incorrect")
        return None

    async def register(
        self,
        name: str,
        user_identifier: str,
        password: str,
        confirm_password: Optional[str] = None,
        role: UserRole = UserRole.mahasiswa,
    ) -> User:
        """
        Register a new non-admin user.

        Raises:
            ValidationFailed: blank fields, password mismatch, short password,
                or an attempt to register the Admin role or identifier.
            AlreadyExists: the identifier is taken, ignoring case.
        """
        name = (name or "").strip()
        user_identifier = (user_identifier or "").strip()
        role = UserRole(role)

        if not name or not user_identifier or not password:
            raise ValidationFailed("Nama, Email/Username, dan Kata sandi tidak boleh kosong.")
        if confirm_password is not None and password != confirm_password:
            raise ValidationFailed("Kata sandi tidak cocok.")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationFailed(f"Kata sandi minimal harus {MIN_PASSWORD_LENGTH} karakter.")
        if role == UserRole.admin or self.is_admin_identifier(user_identifier):
            raise ValidationFailed("Akun admin tidak dapat didaftarkan.")
        if self.find_user(user_identifier):
            raise AlreadyExists("Email / Username sudah terdaftar.")

        user = User(
            name=name,
            user_identifier=user_identifier,
            password_hash=hash_password(password),
            role=role,
        )
        self.state.users.append(user)
        await self.state.persist_users()
        logger.info(f"👤 Registered {user.user_identifier} as {role.value}")
        return user
