import json
import tempfile
import unittest
from pathlib import Path

from careerpath.core.errors import AccountError
from careerpath.core.models import CareerStep, UserRecord
from user_store import MemoryKeyValueStore, SessionHolder, SQLiteKeyValueStore, UserDirectory
from user_store.directory import USERS_KEY, dump_user, load_user
from user_store.session import CAREER_STEPS_KEY, CURRENT_STEP_KEY, CURRENT_USER_KEY


def _steps(count: int) -> list[CareerStep]:
    return [
        CareerStep(stepNumber=index + 1, title=f"Step {index + 1}", duration="1 week", description="d", skills=["s"])
        for index in range(count)
    ]


class SQLiteKeyValueStoreTests(unittest.TestCase):
    def test_creates_parent_directory_and_round_trips_values(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "nested" / "store.sqlite"
            store = SQLiteKeyValueStore(db_path)

            store.set("users", "[]")
            store.set("users", '[{"email": "a@x"}]')
            store.set("currentStep", "{}")

            self.assertTrue(db_path.exists())
            self.assertEqual(store.get("users"), '[{"email": "a@x"}]')
            self.assertEqual(store.keys(), ["currentStep", "users"])

            store.remove("currentStep")
            store.remove("never-set")
            self.assertIsNone(store.get("currentStep"))

    def test_values_survive_a_new_store_instance(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            db_path = Path(tmpdir) / "store.sqlite"
            SQLiteKeyValueStore(db_path).set("currentUser", "{}")

            self.assertEqual(SQLiteKeyValueStore(db_path).get("currentUser"), "{}")


class UserDirectoryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryKeyValueStore()
        self.directory = UserDirectory(self.store)

    def test_register_persists_user_with_defaults(self) -> None:
        user = self.directory.register("Ada", "ada@example.com", "secret1", "secret1")

        self.assertIsNone(user.selected_career)
        self.assertEqual(user.completed_steps, [])
        stored = json.loads(self.store.get(USERS_KEY) or "[]")
        self.assertEqual(stored[0]["email"], "ada@example.com")
        self.assertIn("joinDate", stored[0])
        self.assertIn("completedSteps", stored[0])

    def test_register_rules(self) -> None:
        self.directory.register("Ada", "ada@example.com", "secret1", "secret1")
        cases = [
            (("", "b@example.com", "secret1", "secret1"), "Name and email are required."),
            (("Bo", "b@example.com", "secret1", "secret2"), "Passwords do not match."),
            (("Bo", "b@example.com", "short", "short"), "Password must be at least 6 characters long."),
            (("Ada Again", "ada@example.com", "secret1", "secret1"), "User with this email already exists."),
        ]
        for args, message in cases:
            with self.subTest(message=message):
                with self.assertRaises(AccountError) as ctx:
                    self.directory.register(*args)
                self.assertEqual(str(ctx.exception), message)
        self.assertEqual(len(self.directory.all()), 1)

    def test_email_match_is_case_sensitive(self) -> None:
        self.directory.register("Ada", "ada@example.com", "secret1", "secret1")

        self.assertIsNone(self.directory.find_by_email("ADA@example.com"))
        self.directory.register("Ada Upper", "ADA@example.com", "secret1", "secret1")
        self.assertEqual(len(self.directory.all()), 2)

    def test_authenticate(self) -> None:
        self.directory.register("Ada", "ada@example.com", "secret1", "secret1")

        self.assertEqual(self.directory.authenticate("ada@example.com", "secret1").name, "Ada")
        for email, password in (("ada@example.com", "wrong!!"), ("nobody@example.com", "secret1")):
            with self.assertRaises(AccountError) as ctx:
                self.directory.authenticate(email, password)
            self.assertEqual(str(ctx.exception), "Invalid email or password. Please try again.")

    def test_upsert_replaces_in_place_and_appends(self) -> None:
        for name in ("A", "B", "C"):
            self.directory.register(name, f"{name.lower()}@example.com", "secret1", "secret1")

        updated = self.directory.find_by_email("b@example.com").model_copy(update={"selected_career": "data-science"})
        self.directory.upsert(updated)
        self.directory.upsert(UserRecord(name="D", email="d@example.com", password="secret1"))

        users = self.directory.all()
        self.assertEqual([user.email for user in users], ["a@example.com", "b@example.com", "c@example.com", "d@example.com"])
        self.assertEqual(users[1].selected_career, "data-science")

    def test_record_round_trip_is_lossless(self) -> None:
        user = UserRecord(
            name="Ada",
            email="ada@example.com",
            password="secret1",
            selectedCareer="web-development",
            completedSteps=[2, 0, 2],
        )

        restored = load_user(json.loads(json.dumps(dump_user(user))))

        self.assertEqual(restored, user)
        self.assertEqual(restored.completed_steps, [0, 2])

    def test_corrupt_users_payload_raises(self) -> None:
        self.store.set(USERS_KEY, "{not json")
        with self.assertRaises(ValueError):
            self.directory.all()

        self.store.set(USERS_KEY, '{"email": "a@x"}')
        with self.assertRaises(ValueError):
            self.directory.all()


class SessionHolderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.store = MemoryKeyValueStore()
        self.session = SessionHolder(self.store)

    def test_signup_sets_current_user(self) -> None:
        self.session.signup("Ada", "ada@example.com", "secret1", "secret1")

        current = self.session.get_current()
        self.assertIsNotNone(current)
        self.assertEqual(current.email, "ada@example.com")
        self.assertIn(CURRENT_USER_KEY, self.store.keys())

    def test_login_and_logout(self) -> None:
        self.session.signup("Ada", "ada@example.com", "secret1", "secret1")
        self.session.logout()
        self.assertIsNone(self.session.get_current())
        with self.assertRaises(AccountError):
            self.session.require_current()

        self.session.login("ada@example.com", "secret1")
        self.assertEqual(self.session.require_current().name, "Ada")

    def test_select_career_updates_both_copies(self) -> None:
        self.session.signup("Ada", "ada@example.com", "secret1", "secret1")

        self.session.select_career("data-science")

        self.assertEqual(self.session.get_current().selected_career, "data-science")
        self.assertEqual(self.session.directory.find_by_email("ada@example.com").selected_career, "data-science")

    def test_changing_career_clears_saved_path(self) -> None:
        self.session.signup("Ada", "ada@example.com", "secret1", "secret1")
        self.session.select_career("web-development")
        steps = _steps(3)
        self.session.set_steps(steps)
        self.session.set_current_step(steps[1])

        self.session.select_career("web-development")
        self.assertEqual(len(self.session.get_steps()), 3)

        self.session.select_career("data-science")
        self.assertEqual(self.session.get_steps(), [])
        self.assertIsNone(self.session.get_current_step())
        self.assertNotIn(CAREER_STEPS_KEY, self.store.keys())
        self.assertNotIn(CURRENT_STEP_KEY, self.store.keys())

    def test_complete_step_and_progress(self) -> None:
        self.session.signup("Ada", "ada@example.com", "secret1", "secret1")
        self.session.select_career("web-development")
        self.session.set_steps(_steps(4))

        self.session.complete_step(1)
        self.session.complete_step(1)
        self.session.complete_step(3)
        self.session.complete_step(9)

        context = self.session.load_context()
        self.assertEqual(context.user.completed_steps, [1, 3, 9])
        self.assertTrue(context.is_completed(3))
        self.assertFalse(context.is_completed(0))
        self.assertEqual(context.progress_percent, 50.0)
        self.assertEqual(context.career, "web-development")
        stored = self.session.directory.find_by_email("ada@example.com")
        self.assertEqual(stored.completed_steps, [1, 3, 9])

    def test_complete_step_rejects_negative_index(self) -> None:
        self.session.signup("Ada", "ada@example.com", "secret1", "secret1")
        with self.assertRaises(ValueError):
            self.session.complete_step(-1)

    def test_empty_context(self) -> None:
        context = self.session.load_context()

        self.assertIsNone(context.user)
        self.assertIsNone(context.career)
        self.assertEqual(context.progress_percent, 0.0)

    def test_current_step_round_trip(self) -> None:
        step = _steps(1)[0]
        self.session.set_current_step(step)

        self.assertEqual(self.session.get_current_step(), step)
        self.assertEqual(json.loads(self.store.get(CURRENT_STEP_KEY))["stepNumber"], 1)


if __name__ == "__main__":
    unittest.main()
