import json
from datetime import datetime

from forefix import history
from forefix.auth import Auth
from forefix.catalog import Category
from forefix.diagnostics import evaluate
from forefix.storage import KeyValueStore, Repository, open_repository
from forefix.theme import current_theme, toggle_theme


def test_missing_keys_default_to_empty(tmp_path):
    repository = open_repository(tmp_path / "data")
    assert repository.users() == []
    assert repository.session() is None
    assert repository.history() == []
    assert repository.theme() is None


def test_corrupt_record_is_treated_as_missing(tmp_path):
    (tmp_path / "history.json").write_text("{not json", encoding="utf-8")
    store = KeyValueStore(tmp_path)
    assert store.get("history", []) == []


def test_store_writes_whole_record_and_removes(tmp_path):
    store = KeyValueStore(tmp_path)
    store.set("theme", "dark")
    assert json.loads((tmp_path / "theme.json").read_text(encoding="utf-8")) == "dark"
    assert list(tmp_path.glob("*.tmp")) == []
    store.remove("theme")
    assert not store.contains("theme")


def test_signup_rejects_duplicate_email(tmp_path):
    repository = open_repository(tmp_path)
    auth = Auth(repository)
    assert auth.signup("Ada", "ada@example.com", "secret")
    assert not auth.signup("Other Ada", "ada@example.com", "different")
    users = repository.users()
    assert len(users) == 1
    assert users[0].name == "Ada"
    assert users[0].role == "user"


def test_login_stores_session_without_password(tmp_path):
    repository = open_repository(tmp_path)
    auth = Auth(repository)
    auth.signup("Ada", "ada@example.com", "secret")

    assert auth.login("ada@example.com", "secret")
    assert auth.is_authenticated()
    assert auth.current_user().email == "ada@example.com"
    stored = json.loads((tmp_path / "session.json").read_text(encoding="utf-8"))
    assert "password" not in stored


def test_login_requires_exact_match(tmp_path):
    auth = Auth(open_repository(tmp_path))
    auth.signup("Ada", "ada@example.com", "secret")
    assert not auth.login("ada@example.com", "Secret")
    assert not auth.login("ADA@example.com", "secret")
    assert not auth.is_authenticated()


def test_logout_clears_session(tmp_path):
    auth = Auth(open_repository(tmp_path))
    auth.signup("Ada", "ada@example.com", "secret")
    auth.login("ada@example.com", "secret")
    auth.logout()
    assert auth.current_user() is None
    assert not auth.is_authenticated()


def test_history_is_most_recent_first(tmp_path):
    repository = open_repository(tmp_path)
    first = evaluate(Category.LAPTOP, ["fan"])
    second = evaluate(Category.WEBAPP, ["layout"])
    history.record(repository, Category.LAPTOP, {"fan": True}, first, timestamp=datetime(2024, 1, 1, 9, 0))
    history.record(repository, Category.WEBAPP, {"layout": True}, second, timestamp=datetime(2024, 1, 2, 9, 0))

    entries = history.load(repository)
    assert [entry.category for entry in entries] == [Category.WEBAPP, Category.LAPTOP]
    assert entries[0].report == second
    assert entries[1].timestamp == datetime(2024, 1, 1, 9, 0)
    assert entries[1].input_selection == [("fan", True)]


def test_history_clear(tmp_path):
    repository = open_repository(tmp_path)
    history.record(repository, Category.LAPTOP, {"fan": True}, evaluate(Category.LAPTOP, ["fan"]))
    history.clear(repository)
    assert history.load(repository) == []


def test_theme_defaults_to_preference_and_toggles(tmp_path):
    repository = Repository(KeyValueStore(tmp_path))
    assert current_theme(repository) == "light"
    assert current_theme(repository, preferred="dark") == "dark"

    assert toggle_theme(repository) == "dark"
    assert current_theme(repository) == "dark"
    assert toggle_theme(repository) == "light"


def test_unknown_stored_theme_falls_back(tmp_path):
    repository = open_repository(tmp_path)
    repository.save_theme("sepia")
    assert current_theme(repository, preferred="dark") == "dark"


def test_saved_records_use_camel_case_keys(tmp_path):
    repository = open_repository(tmp_path)
    auth = Auth(repository)
    auth.signup("Ada", "ada@example.com", "secret")
    auth.login("ada@example.com", "secret")
    history.record(repository, Category.LAPTOP, {"fan": True}, evaluate(Category.LAPTOP, ["fan"]))

    users = json.loads((tmp_path / "users.json").read_text(encoding="utf-8"))
    assert sorted(users[0]) == ["email", "id", "joinedAt", "name", "password", "role"]
    session = json.loads((tmp_path / "session.json").read_text(encoding="utf-8"))
    assert sorted(session) == ["email", "id", "joinedAt", "name", "role"]
    entries = json.loads((tmp_path / "history.json").read_text(encoding="utf-8"))
    assert sorted(entries[0]) == ["category", "inputSelection", "report", "timestamp"]
    assert entries[0]["inputSelection"] == [["fan", True]]
    assert repository.users()[0].joined_at == users[0]["joinedAt"]


def test_corrupt_session_is_not_authenticated(tmp_path):
    (tmp_path / "session.json").write_text("{bad", encoding="utf-8")
    auth = Auth(open_repository(tmp_path))
    assert auth.current_user() is None
    assert not auth.is_authenticated()
