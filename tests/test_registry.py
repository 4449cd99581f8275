from __future__ import annotations

import threading

import pytest

from qcregistry.core import (
    AlreadyRegistered,
    ErrorKind,
    InMemoryRegistry,
    NotFound,
    Record,
    Unauthorized,
)


def test_register_assigns_dense_ids_starting_at_one() -> None:
    reg = InMemoryRegistry()

    ids = [reg.register(50, "user1") for _ in range(5)]

    assert ids == [1, 2, 3, 4, 5]


def test_register_stores_record_available_by_default() -> None:
    reg = InMemoryRegistry()

    rid = reg.register(50, "user1")

    assert reg.get_record(rid) == Record(id=1, owner="user1", capacity=50, available=True)


def test_identical_registrations_get_distinct_ids() -> None:
    reg = InMemoryRegistry()

    a = reg.register(50, "user1")
    b = reg.register(50, "user1")

    assert (a, b) == (1, 2)
    assert reg.get_record(a) is not None
    assert reg.get_record(b) is not None


def test_register_accepts_any_integer_capacity() -> None:
    reg = InMemoryRegistry()

    assert reg.get_record(reg.register(0, "u")).capacity == 0  # type: ignore[union-attr]
    assert reg.get_record(reg.register(-3, "u")).capacity == -3  # type: ignore[union-attr]


@pytest.mark.parametrize("capacity", [True, 1.5, "50", None])
def test_register_rejects_non_integer_capacity(capacity: object) -> None:
    reg = InMemoryRegistry()

    with pytest.raises(ValueError):
        reg.register(capacity, "user1")  # type: ignore[arg-type]
    assert reg.get_record(1) is None


@pytest.mark.parametrize("owner", [None, "", "   ", 7])
def test_register_rejects_missing_owner(owner: object) -> None:
    reg = InMemoryRegistry()

    with pytest.raises(ValueError):
        reg.register(50, owner)  # type: ignore[arg-type]
    # Rejected input does not consume an id.
    assert reg.register(50, "user1") == 1


def test_register_collision_guard_consumes_the_id() -> None:
    reg = InMemoryRegistry()
    reg.register(50, "user1")

    # Force the counter back so the next computed id collides.
    reg._next_id = 0

    with pytest.raises(AlreadyRegistered) as exc_info:
        reg.register(10, "user2")
    assert exc_info.value.kind is ErrorKind.ALREADY_REGISTERED
    assert exc_info.value.record_id == 1
    assert reg.get_record(1) == Record(id=1, owner="user1", capacity=50, available=True)

    assert reg.register(10, "user2") == 2


def test_get_record_unknown_id_is_absent_not_an_error() -> None:
    reg = InMemoryRegistry()

    assert reg.get_record(1) is None
    assert reg.get_record(-1) is None


@pytest.mark.parametrize("value", [False, True])
def test_owner_can_update_availability_idempotently(value: bool) -> None:
    reg = InMemoryRegistry()
    rid = reg.register(50, "user1")

    assert reg.update_availability(rid, value, "user1") is True
    first = reg.get_record(rid)
    assert reg.update_availability(rid, value, "user1") is True

    assert first is not None
    assert first.available is value
    assert reg.get_record(rid) == first


def test_update_availability_keeps_other_fields() -> None:
    reg = InMemoryRegistry()
    rid = reg.register(64, "user1")

    reg.update_availability(rid, False, "user1")

    assert reg.get_record(rid) == Record(id=rid, owner="user1", capacity=64, available=False)


def test_records_handed_out_are_snapshots() -> None:
    reg = InMemoryRegistry()
    rid = reg.register(50, "user1")
    before = reg.get_record(rid)

    reg.update_availability(rid, False, "user1")

    assert before is not None
    assert before.available is True


def test_non_owner_cannot_update_availability() -> None:
    reg = InMemoryRegistry()
    rid = reg.register(50, "user1")

    with pytest.raises(Unauthorized) as exc_info:
        reg.update_availability(rid, False, "user2")

    assert exc_info.value.kind is ErrorKind.UNAUTHORIZED
    assert reg.get_record(rid).available is True  # type: ignore[union-attr]


def test_admin_is_not_an_owner() -> None:
    reg = InMemoryRegistry()
    rid = reg.register(50, "user1")

    with pytest.raises(Unauthorized):
        reg.update_availability(rid, False, reg.admin)


def test_update_unknown_record_is_not_found() -> None:
    reg = InMemoryRegistry()

    with pytest.raises(NotFound) as exc_info:
        reg.update_availability(42, False, "user1")
    assert exc_info.value.kind is ErrorKind.NOT_FOUND
    assert exc_info.value.record_id == 42


def test_not_found_is_checked_before_authorization() -> None:
    reg = InMemoryRegistry()
    reg.register(50, "user1")

    with pytest.raises(NotFound):
        reg.update_availability(2, False, "somebody-else")


def test_update_availability_requires_a_boolean() -> None:
    reg = InMemoryRegistry()
    rid = reg.register(50, "user1")

    with pytest.raises(ValueError):
        reg.update_availability(rid, 0, "user1")  # type: ignore[arg-type]
    assert reg.get_record(rid).available is True  # type: ignore[union-attr]


def test_set_admin_hands_over_the_role() -> None:
    reg = InMemoryRegistry()
    assert reg.admin == "owner"

    assert reg.set_admin("newOwner", "owner") is True
    assert reg.admin == "newOwner"

    with pytest.raises(Unauthorized):
        reg.set_admin("x", "owner")
    assert reg.set_admin("x", "newOwner") is True
    assert reg.admin == "x"


def test_non_admin_cannot_set_admin() -> None:
    reg = InMemoryRegistry()

    with pytest.raises(Unauthorized) as exc_info:
        reg.set_admin("x", "user1")

    assert exc_info.value.kind is ErrorKind.UNAUTHORIZED
    assert reg.admin == "owner"


def test_set_admin_rejects_empty_identity_without_changing_admin() -> None:
    reg = InMemoryRegistry()

    with pytest.raises(ValueError):
        reg.set_admin("", "owner")
    assert reg.admin == "owner"


def test_unauthorized_set_admin_wins_over_invalid_new_admin() -> None:
    reg = InMemoryRegistry()

    with pytest.raises(Unauthorized):
        reg.set_admin("", "user1")


def test_custom_initial_admin() -> None:
    reg = InMemoryRegistry(admin="root")

    with pytest.raises(Unauthorized):
        reg.set_admin("x", "owner")
    assert reg.set_admin("x", "root") is True

    with pytest.raises(ValueError):
        InMemoryRegistry(admin="")


def test_revision_tracks_successful_mutations_only() -> None:
    reg = InMemoryRegistry()
    assert reg.revision() == 0

    rid = reg.register(50, "user1")
    assert reg.revision() == 1

    reg.update_availability(rid, False, "user1")
    assert reg.revision() == 2

    with pytest.raises(Unauthorized):
        reg.update_availability(rid, True, "user2")
    with pytest.raises(Unauthorized):
        reg.set_admin("x", "user2")
    reg.get_record(rid)
    assert reg.revision() == 2

    reg.set_admin("x", "owner")
    assert reg.revision() == 3


def test_reset_restores_initial_state() -> None:
    reg = InMemoryRegistry(admin="root")
    reg.register(50, "user1")
    reg.set_admin("x", "root")
    rev = reg.revision()

    reg.reset()

    assert reg.get_record(1) is None
    assert reg.admin == "root"
    assert reg.register(10, "user2") == 1
    assert reg.revision() > rev


def test_registries_do_not_share_state() -> None:
    a = InMemoryRegistry()
    b = InMemoryRegistry()

    a.register(50, "user1")
    a.set_admin("x", "owner")

    assert b.get_record(1) is None
    assert b.admin == "owner"
    assert b.register(1, "u") == 1


def test_concurrent_registrations_never_reuse_ids() -> None:
    reg = InMemoryRegistry()
    results: list[int] = []
    results_lock = threading.Lock()

    def worker() -> None:
        for _ in range(50):
            rid = reg.register(1, "user1")
            with results_lock:
                results.append(rid)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert sorted(results) == list(range(1, 401))


def test_reference_scenario() -> None:
    reg = InMemoryRegistry()

    assert reg.register(50, "user1") == 1
    assert reg.get_record(1) == Record(id=1, owner="user1", capacity=50, available=True)
    assert reg.register(50, "user1") == 2

    assert reg.update_availability(1, False, "user1") is True
    assert reg.get_record(1).available is False  # type: ignore[union-attr]

    with pytest.raises(Unauthorized):
        reg.update_availability(1, False, "user2")

    assert reg.set_admin("newOwner", "owner") is True
    assert reg.admin == "newOwner"

    with pytest.raises(Unauthorized):
        reg.set_admin("x", "user1")
