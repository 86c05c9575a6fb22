"""Current-user / current-step pointers and the explicit session context."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import List

from pydantic import ValidationError

from careerpath.core.errors import AccountError
from careerpath.core.models import CareerStep, UserRecord

from .directory import UserDirectory, dump_user, load_user
from .storage import KeyValueStore

CURRENT_USER_KEY = "currentUser"
CURRENT_STEP_KEY = "currentStep"
CAREER_STEPS_KEY = "careerSteps"


@dataclass
class SessionContext:
    """Snapshot of the session handed to views and services."""

    user: UserRecord | None
    steps: List[CareerStep] = field(default_factory=list)
    current_step: CareerStep | None = None

    @property
    def career(self) -> str | None:
        return self.user.selected_career if self.user else None

    def is_completed(self, index: int) -> bool:
        return bool(self.user and self.user.has_completed(index))

    @property
    def progress_percent(self) -> float:
        if not self.steps or self.user is None:
            return 0.0
        done = sum(1 for index in self.user.completed_steps if index < len(self.steps))
        return done / len(self.steps) * 100


class SessionHolder:
    def __init__(self, store: KeyValueStore, directory: UserDirectory | None = None) -> None:
        self.store = store
        self.directory = directory or UserDirectory(store)

    # ------------------------------------------------------------------

    def _read_json(self, key: str) -> object | None:
        raw = self.store.get(key)
        if not raw:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ValueError(f"Invalid JSON stored under '{key}'") from exc

    def set_current(self, user: UserRecord) -> None:
        self.store.set(CURRENT_USER_KEY, json.dumps(dump_user(user)))

    def get_current(self) -> UserRecord | None:
        payload = self._read_json(CURRENT_USER_KEY)
        return load_user(payload) if payload is not None else None

    def clear_current(self) -> None:
        self.store.remove(CURRENT_USER_KEY)

    def set_current_step(self, step: CareerStep) -> None:
        self.store.set(CURRENT_STEP_KEY, step.model_dump_json(by_alias=True))

    def get_current_step(self) -> CareerStep | None:
        payload = self._read_json(CURRENT_STEP_KEY)
        if payload is None:
            return None
        try:
            return CareerStep.model_validate(payload)
        except ValidationError as exc:
            raise ValueError(f"Invalid step stored under '{CURRENT_STEP_KEY}'") from exc

    def set_steps(self, steps: List[CareerStep]) -> None:
        self.store.set(CAREER_STEPS_KEY, json.dumps([step.model_dump(mode="json", by_alias=True) for step in steps]))

    def get_steps(self) -> List[CareerStep]:
        payload = self._read_json(CAREER_STEPS_KEY)
        if not isinstance(payload, list):
            return []
        try:
            return [CareerStep.model_validate(entry) for entry in payload]
        except ValidationError as exc:
            raise ValueError(f"Invalid steps stored under '{CAREER_STEPS_KEY}'") from exc

    def load_context(self) -> SessionContext:
        return SessionContext(
            user=self.get_current(),
            steps=self.get_steps(),
            current_step=self.get_current_step(),
        )

    # ------------------------------------------------------------------

    def signup(self, name: str, email: str, password: str, confirm_password: str) -> UserRecord:
        user = self.directory.register(name, email, password, confirm_password)
        self.set_current(user)
        return user

    def login(self, email: str, password: str) -> UserRecord:
        user = self.directory.authenticate(email, password)
        self.set_current(user)
        return user

    def logout(self) -> None:
        self.clear_current()

    def require_current(self) -> UserRecord:
        user = self.get_current()
        if user is None:
            raise AccountError("Not logged in.")
        return user

    def _save(self, user: UserRecord) -> UserRecord:
        self.set_current(user)
        self.directory.upsert(user)
        return user

    def select_career(self, career: str) -> UserRecord:
        user = self.require_current()
        if user.selected_career != career:
            self.store.remove(CAREER_STEPS_KEY)
            self.store.remove(CURRENT_STEP_KEY)
        return self._save(user.model_copy(update={"selected_career": career}))

    def complete_step(self, index: int) -> UserRecord:
        if index < 0:
            raise ValueError("step index must be non-negative")
        user = self.require_current()
        completed = sorted(set(user.completed_steps) | {index})
        return self._save(user.model_copy(update={"completed_steps": completed}))


__all__ = [
    "CAREER_STEPS_KEY",
    "CURRENT_STEP_KEY",
    "CURRENT_USER_KEY",
    "SessionContext",
    "SessionHolder",
]
