"""Record Store: tests for the in-memory keyed collection.

Tests cover:
    - save/find round trip and insertion order
    - Reads return copies (callers cannot mutate stored records)
    - update() overwrites in place or inserts (upsert)
    - update() with a new email is found under the new email only
    - delete_by_email() reports whether anything was removed
    - Concurrent upserts on one email never duplicate or lose the record
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import date

from users_api.infrastructure.user_store import InMemoryUserStore


def test_save_returns_user_unchanged(make_user):
    store = InMemoryUserStore()
    user = make_user()
    assert store.save(user) is user
    assert store.find_by_email(user.email) == user


def test_find_all_keeps_insertion_order(make_user):
    store = InMemoryUserStore()
    for email in ("c@example.com", "a@example.com", "b@example.com"):
        store.save(make_user(email))
    assert [u.email for u in store.find_all()] == [
        "c@example.com", "a@example.com", "b@example.com",
    ]


def test_find_all_is_a_snapshot(make_user):
    store = InMemoryUserStore()
    store.save(make_user())
    snapshot = store.find_all()
    snapshot.clear()
    assert store.count() == 1


def test_returned_records_are_copies(make_user):
    store = InMemoryUserStore()
    store.save(make_user())
    found = store.find_by_email("jane.doe@example.com")
    found.first_name = "Mutated"
    store.find_all()[0].last_name = "Mutated"
    stored = store.find_by_email("jane.doe@example.com")
    assert stored.first_name == "Jane"
    assert stored.last_name == "Doe"


def test_saved_object_is_not_shared(make_user):
    store = InMemoryUserStore()
    user = make_user()
    store.save(user)
    user.first_name = "Changed"
    assert store.find_by_email(user.email).first_name == "Jane"


def test_find_missing_returns_none():
    assert InMemoryUserStore().find_by_email("nobody@example.com") is None


def test_update_existing_overwrites_every_field_in_place(make_user):
    store = InMemoryUserStore()
    store.save(make_user("first@example.com"))
    store.save(make_user("second@example.com"))
    replacement = make_user(
        "first@example.com", first_name="John", last_name="Roe",
        date_of_birth=date(1970, 1, 1), address=None, phone_number=None,
    )
    result = store.update("first@example.com", replacement)
    assert result == replacement
    assert store.count() == 2
    assert store.find_all()[0] == replacement


def test_update_absent_inserts(make_user):
    store = InMemoryUserStore()
    new_user = make_user("new@example.com")
    result = store.update("missing@example.com", new_user)
    assert result == new_user
    assert store.count() == 1
    assert store.find_by_email("new@example.com") == new_user
    assert store.find_by_email("missing@example.com") is None


def test_update_with_changed_email_is_found_under_new_email(make_user):
    store = InMemoryUserStore()
    store.save(make_user("old@example.com"))
    store.update("old@example.com", make_user("new@example.com"))
    assert store.find_by_email("old@example.com") is None
    assert store.find_by_email("new@example.com") is not None
    assert store.count() == 1


def test_delete_reports_removal(make_user):
    store = InMemoryUserStore()
    store.save(make_user())
    assert store.delete_by_email("jane.doe@example.com") is True
    assert store.delete_by_email("jane.doe@example.com") is False
    assert store.count() == 0


def test_delete_missing_leaves_store_unchanged(make_user):
    store = InMemoryUserStore()
    store.save(make_user())
    assert store.delete_by_email("other@example.com") is False
    assert store.count() == 1


def test_concurrent_upserts_on_one_email_keep_single_record(make_user):
    store = InMemoryUserStore()
    store.save(make_user())

    def upsert(i: int):
        return store.update(
            "jane.doe@example.com", make_user(first_name=f"Jane{i}"),
        )

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(upsert, range(200)))

    users = store.find_all()
    assert len(users) == 1
    assert users[0].first_name.startswith("Jane")
