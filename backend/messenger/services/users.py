"""User directory over the users collection: accounts, login state and profiles."""

import logging
from datetime import datetime, timezone
from typing import Optional

from messenger.core.config import settings
from messenger.models.user import User
from messenger.services.storage.base import BaseCollectionStore

logger = logging.getLogger(__name__)

USERS = "users"
ROLES = ("admin", "member")

DEFAULT_ADMINS = [
    {"username": "advan", "password": "advan", "profile_photo": None},
    {"username": "admin", "password": "admin", "profile_photo": "python.png"},
]


class UserError(Exception):
    status_code = 400


class MissingFields(UserError):
    pass


class PasswordMismatch(UserError):
    pass


class UsernameTaken(UserError):
    pass


class InvalidRole(UserError):
    pass


class PermissionDenied(UserError):
    status_code = 403


class InvalidCredentials(UserError):
    status_code = 401


class UserNotFound(UserError):
    status_code = 404


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class UserDirectory:
    def __init__(self, store: BaseCollectionStore):
        self.store = store

    def _load(self) -> list[dict]:
        return self.store.read(USERS, [])

    def list_users(self) -> list[User]:
        return [User.model_validate(u) for u in self._load()]

    def find_user_by_username(self, username: str) -> Optional[User]:
        for u in self._load():
            if u.get("username") == username:
                return User.model_validate(u)
        return None

    def avatar_for(self, username: str) -> str:
        user = self.find_user_by_username(username)
        if user and user.profile_photo:
            return f"/uploads/{user.profile_photo}"
        return settings.default_avatar

    def _insert(self, user: User) -> User:
        with self.store.locked(USERS):
            users = self._load()
            if any(u.get("username") == user.username for u in users):
                raise UsernameTaken("Username already exists")
            users.append(user.model_dump())
            self.store.write(USERS, users)
        logger.info(f"Created {user.role} account {user.username}")
        return user

    def register(
        self,
        username: str,
        password: str,
        confirm_password: str,
        profile_photo: Optional[str] = None,
    ) -> User:
        if not username or not password:
            raise MissingFields("Username and password are required")
        if password != confirm_password:
            raise PasswordMismatch("Passwords do not match")
        return self._insert(User(username=username, password=password, profile_photo=profile_photo))

    def add_user(
        self,
        username: str,
        password: str,
        confirm_password: str,
        role: str,
        added_by: Optional[str] = None,
        profile_photo: Optional[str] = None,
    ) -> User:
        """Create an account on behalf of another user. Only admins may create admins."""
        if not username or not password or not confirm_password or not role:
            raise MissingFields("All fields are required")
        if password != confirm_password:
            raise PasswordMismatch("Passwords do not match")
        if role not in ROLES:
            raise InvalidRole("Invalid role")
        if self.find_user_by_username(username):
            raise UsernameTaken("Username already exists")
        if role == "admin":
            adder = self.find_user_by_username(added_by) if added_by else None
            if not adder or adder.role != "admin":
                raise PermissionDenied("Only an admin can add another admin")
        return self._insert(
            User(username=username, password=password, profile_photo=profile_photo, role=role)
        )

    def _update(self, username: str, **changes) -> User:
        with self.store.locked(USERS):
            users = self._load()
            for u in users:
                if u.get("username") == username:
                    u.update(changes)
                    self.store.write(USERS, users)
                    return User.model_validate(u)
        raise UserNotFound("User not found")

    def login(self, username: str, password: str) -> User:
        user = self.find_user_by_username(username)
        if not user or user.password != password:
            raise InvalidCredentials("Wrong username or password")
        user = self._update(username, lastLogin=_now())
        logger.info(f"Login user: {user.username} role: {user.role}")
        return user

    def logout(self, username: str) -> User:
        return self._update(username, lastLogout=_now())

    def delete_account(self, username: str) -> User:
        """Remove the account and return the removed record."""
        with self.store.locked(USERS):
            users = self._load()
            for i, u in enumerate(users):
                if u.get("username") == username:
                    removed = users.pop(i)
                    self.store.write(USERS, users)
                    logger.info(f"Deleted account {username}")
                    return User.model_validate(removed)
        raise UserNotFound("User not found")

    def get_profile(self, username: str) -> dict:
        user = self.find_user_by_username(username)
        if not user:
            raise UserNotFound("User not found")
        return {"whatsapp": user.whatsapp or None, "instagram": user.instagram or None}

    def update_profile(
        self, username: str, whatsapp: Optional[str], instagram: Optional[str]
    ) -> User:
        return self._update(username, whatsapp=whatsapp or None, instagram=instagram or None)

    def update_profile_photo(self, username: str, filename: str) -> Optional[str]:
        """Point the user at a new photo. Returns the previous photo file name."""
        with self.store.locked(USERS):
            previous = self.find_user_by_username(username)
            if not previous:
                raise UserNotFound("User not found")
            self._update(username, profile_photo=filename)
        return previous.profile_photo

    def ensure_default_admins(self) -> None:
        with self.store.locked(USERS):
            users = self._load()
            existing = {u.get("username") for u in users}
            missing = [a for a in DEFAULT_ADMINS if a["username"] not in existing]
            if not missing:
                return
            for admin in missing:
                users.append(User(role="admin", **admin).model_dump())
            self.store.write(USERS, users)
        logger.info(f"Seeded default admins: {', '.join(a['username'] for a in missing)}")
