"""Tests for session state and teardown."""

from daily_folder.core.session import SessionRegistry
from tests.unit.fakes import FakeStore, FakeTreeView


def test_teardown_releases_in_reverse_order() -> None:
    registry = SessionRegistry()
    session = registry.attach("win-1")
    released: list[str] = []
    for label in ["button", "popup", "listener"]:
        session.acquire(lambda label=label: released.append(label), label)

    registry.detach("win-1")

    assert released == ["listener", "popup", "button"]
    assert "win-1" not in registry


def test_failing_release_does_not_block_the_rest() -> None:
    session = SessionRegistry().attach("win-1")
    released: list[str] = []

    def broken() -> None:
        raise RuntimeError("already removed")

    session.acquire(lambda: released.append("first"), "first")
    session.acquire(broken, "broken")
    session.acquire(lambda: released.append("last"), "last")

    session.teardown()

    assert released == ["last", "first"]


def test_second_teardown_is_a_noop() -> None:
    session = SessionRegistry().attach("win-1")
    released: list[str] = []
    session.acquire(lambda: released.append("x"))

    session.teardown()
    session.teardown()

    assert released == ["x"]


def test_attach_returns_same_session_and_sets_view() -> None:
    registry = SessionRegistry()
    first = registry.attach("win-1")
    view = FakeTreeView(FakeStore())

    second = registry.attach("win-1", view)

    assert first is second
    assert second.view is view
    assert len(registry) == 1


def test_teardown_drops_view_and_existing_cache() -> None:
    registry = SessionRegistry()
    session = registry.attach("win-1", FakeTreeView(FakeStore()))
    session.existing = {"2025-03-07"}

    registry.detach("win-1")

    assert session.view is None
    assert session.existing == set()


def test_detach_unknown_session_is_a_noop() -> None:
    registry = SessionRegistry()
    registry.detach("missing")
    assert len(registry) == 0


def test_detach_all_tears_down_every_session() -> None:
    registry = SessionRegistry()
    released: list[str] = []
    for name in ["a", "b"]:
        registry.attach(name).acquire(lambda name=name: released.append(name))

    registry.detach_all()

    assert sorted(released) == ["a", "b"]
    assert len(registry) == 0
