"""Email-keyed user records persisted as one JSON list under the ``users`` key."""

from __future__ import annotations

import json
import logging
from typing import List

from pydantic import ValidationError

from careerpath.core.errors import AccountError
from careerpath.core.models import UserRecord

from .storage import KeyValueStore

LOGGER = logging.getLogger(__name__)

USERS_KEY = "users"
MIN_PASSWORD_LENGTH = 6


def dump_user(user: UserRecord) -> dict:
    return user.model_dump(mode="json", by_alias=True)


def load_user(raw: object) -> UserRecord:
    try:
        return UserRecord.model_validate(raw)
    except ValidationError as exc:
        raise ValueError(f"Stored user record is invalid: {exc.error_count()} error(s)") from exc


class UserDirectory:
    """CRUD over the serialized user list.

    Emails are compared with exact, case-sensitive equality.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def all(self) -> List[UserRecord]:
        raw = self.store.get(USERS_KEY)
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON stored under '{USERS_KEY}'") from exc
        if not isinstance(payload, list):
            raise ValueError(f"'{USERS_KEY}' must hold a JSON list")
        return [load_user(entry) for entry in payload]

    def _write(self, users: List[UserRecord]) -> None:
        self.store.set(USERS_KEY, json.dumps([dump_user(user) for user in users]))

    def find_by_email(self, email: str) -> UserRecord | None:
        for user in self.all():
            if user.email == email:
                return user
        return None

    def upsert(self, user: UserRecord) -> None:
        """Replace the record with the same email in place, or append it."""
        users = self.all()
        for index, existing in enumerate(users):
            if existing.email == user.email:
                users[index] = user
                break
        else:
            users.append(user)
        self._write(users)

    def register(self, name: str, email: str, password: str, confirm_password: str) -> UserRecord:
        if not name.strip() or not email.strip():
            raise AccountError("Name and email are required.")
        if password != confirm_password:
            raise AccountError("Passwords do not match.")
        if len(password) < MIN_PASSWORD_LENGTH:
            raise AccountError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long.")
        if self.find_by_email(email) is not None:
            raise AccountError("User with this email already exists.")

        user = UserRecord(name=name, email=email, password=password)
        self.upsert(user)
        LOGGER.info("Registered user", extra={"email": email})
        return user

    def authenticate(self, email: str, password: str) -> UserRecord:
        user = self.find_by_email(email)
        if user is None or user.password != password:
            raise AccountError("Invalid email or password. Please try again.")
        return user


__all__ = ["MIN_PASSWORD_LENGTH", "USERS_KEY", "UserDirectory", "dump_user", "load_user"]
