"""
Autenticación de usuarios y administradores, y favoritos.

La sesión actual se guarda en los buckets `user` / `admin` y se
restaura al construir el servicio. Los passwords se guardan
hasheados (ver safr.services.passwords).
"""

from dataclasses import dataclass
from typing import Callable, Optional

import structlog
from pydantic import ValidationError

from safr.config import get_settings
from safr.database import AdminRepository, KeyValueStore, UserRepository, get_store
from safr.models import AdminUser, StoredAdmin, StoredUser, User
from safr.services.events import EventEmitter
from safr.services.passwords import hash_password, verify_password
from safr.services.result import FailureKind, OperationResult, handles_store_errors

logger = structlog.get_logger()


@dataclass
class AuthState:
    """Estado de sesión de un visitante."""

    user: Optional[User] = None

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None


@dataclass
class AdminAuthState:
    """Estado de sesión del panel de administración."""

    admin: Optional[AdminUser] = None

    @property
    def is_authenticated(self) -> bool:
        return self.admin is not None


class AuthService:
    """
    Registro, login y favoritos de visitantes.

    Los listeners reciben el AuthState después de cada cambio
    (login, logout, registro, favoritos).
    """

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.user_repo = UserRepository(store or get_store())
        self.events: EventEmitter[AuthState] = EventEmitter("auth")
        self._state = AuthState(user=self.user_repo.get_session())

    def subscribe(self, listener: Callable[[AuthState], None]) -> Callable[[], None]:
        return self.events.subscribe(listener)

    def get_auth_state(self) -> AuthState:
        return self._state

    def _set_user(self, user: Optional[User]) -> None:
        self._state = AuthState(user=user)
        if user:
            self.user_repo.save_session(user)
        else:
            self.user_repo.clear_session()
        self.events.emit(self._state)

    @handles_store_errors("Failed to create account")
    def register(self, email: str, password: str, name: str) -> OperationResult:
        """Crea la cuenta y abre sesión."""
        if not email or not password or not name:
            return OperationResult.fail(FailureKind.VALIDATION, "Please fill all fields")

        email = email.strip().lower()
        if self.user_repo.get_by_email(email):
            return OperationResult.fail(
                FailureKind.CONFLICT, "User already exists with this email"
            )

        try:
            stored = StoredUser(
                email=email,
                name=name.strip(),
                password_hash=hash_password(password),
            )
        except ValidationError:
            return OperationResult.fail(FailureKind.VALIDATION, "Invalid email or name")

        self.user_repo.create(stored)
        logger.info("Usuario registrado", user_id=stored.id)

        self._set_user(stored.to_public())
        return OperationResult.ok("Account created successfully", user_id=stored.id)

    @handles_store_errors("Failed to log in")
    def login(self, email: str, password: str) -> OperationResult:
        if not email or not password:
            return OperationResult.fail(
                FailureKind.VALIDATION, "Please enter email and password"
            )

        stored = self.user_repo.get_by_email(email)
        if not stored or not verify_password(password, stored.password_hash):
            logger.info("Login fallido", email=email)
            return OperationResult.fail(
                FailureKind.AUTHORIZATION, "Invalid email or password"
            )

        self._set_user(stored.to_public())
        logger.info("Login exitoso", user_id=stored.id)
        return OperationResult.ok("Login successful", user_id=stored.id)

    @handles_store_errors("Failed to log out")
    def logout(self) -> OperationResult:
        self._set_user(None)
        return OperationResult.ok("Logged out")

    # ------------------------------------------------------------------
    # Favoritos
    # ------------------------------------------------------------------

    def get_favorites(self) -> list[str]:
        return list(self._state.user.favorites) if self._state.user else []

    def is_favorite(self, house_id: str) -> bool:
        return house_id in self.get_favorites()

    def _save_favorites(self, favorites: list[str]) -> OperationResult:
        user = self._state.user.model_copy(update={"favorites": favorites})
        self.user_repo.update_favorites(user.id, favorites)
        self._set_user(user)
        return OperationResult.ok("Favorites updated", favorites=favorites)

    @handles_store_errors("Failed to update favorites")
    def add_to_favorites(self, house_id: str) -> OperationResult:
        if not self._state.user:
            return OperationResult.fail(
                FailureKind.AUTHORIZATION, "Please log in to save favorites"
            )
        favorites = self.get_favorites()
        if house_id in favorites:
            return OperationResult.ok("Already in favorites", changed=False, favorites=favorites)
        return self._save_favorites(favorites + [house_id])

    @handles_store_errors("Failed to update favorites")
    def remove_from_favorites(self, house_id: str) -> OperationResult:
        if not self._state.user:
            return OperationResult.fail(
                FailureKind.AUTHORIZATION, "Please log in to save favorites"
            )
        favorites = self.get_favorites()
        if house_id not in favorites:
            return OperationResult.ok("Not in favorites", changed=False, favorites=favorites)
        return self._save_favorites([f for f in favorites if f != house_id])

    def toggle_favorite(self, house_id: str) -> OperationResult:
        if self.is_favorite(house_id):
            return self.remove_from_favorites(house_id)
        return self.add_to_favorites(house_id)


class AdminAuthService:
    """Login del panel de administración."""

    def __init__(self, store: Optional[KeyValueStore] = None):
        self.settings = get_settings()
        self.admin_repo = AdminRepository(store or get_store())
        self.events: EventEmitter[AdminAuthState] = EventEmitter("admin_auth")
        self._state = AdminAuthState(admin=self.admin_repo.get_session())

    def subscribe(
        self, listener: Callable[[AdminAuthState], None]
    ) -> Callable[[], None]:
        return self.events.subscribe(listener)

    def get_auth_state(self) -> AdminAuthState:
        return self._state

    def _set_admin(self, admin: Optional[AdminUser]) -> None:
        self._state = AdminAuthState(admin=admin)
        if admin:
            self.admin_repo.save_session(admin)
        else:
            self.admin_repo.clear_session()
        self.events.emit(self._state)

    def ensure_default_admin(self) -> Optional[AdminUser]:
        """
        Crea el super-admin inicial si no hay ningún admin.

        Returns:
            El admin creado, o None si ya había admins o falta el password
        """
        if not self.admin_repo.is_empty():
            return None

        password = self.settings.default_admin_password
        if not password:
            logger.warning(
                "Sin admins y sin DEFAULT_ADMIN_PASSWORD: no se crea el admin inicial"
            )
            return None

        admin = StoredAdmin(
            id=self.settings.default_admin_id,
            username=self.settings.default_admin_username,
            email=self.settings.default_admin_email,
            role="super-admin",
            password_hash=hash_password(password),
        )
        self.admin_repo.create(admin)
        logger.info("Admin inicial creado", username=admin.username)
        return admin.to_public()

    @handles_store_errors("Failed to log in")
    def login(self, username: str, password: str) -> OperationResult:
        if not username or not password:
            return OperationResult.fail(
                FailureKind.VALIDATION, "Please enter username and password"
            )

        stored = self.admin_repo.get_by_username(username)
        if not stored or not verify_password(password, stored.password_hash):
            logger.warning("Login de admin fallido", username=username)
            return OperationResult.fail(
                FailureKind.AUTHORIZATION, "Invalid username or password"
            )

        self._set_admin(stored.to_public())
        logger.info("Login de admin", admin_id=stored.id)
        return OperationResult.ok("Login successful", admin_id=stored.id)

    @handles_store_errors("Failed to log out")
    def logout(self) -> OperationResult:
        self._set_admin(None)
        return OperationResult.ok("Logged out")

    def require_admin(self) -> OperationResult:
        """Falla de autorización si no hay un admin con sesión abierta."""
        if not self._state.is_authenticated:
            return OperationResult.fail(
                FailureKind.AUTHORIZATION, "Administrator login required"
            )
        return OperationResult.ok("Authorized", changed=False, admin_id=self._state.admin.id)
