"""Per-session state with explicit teardown."""

from collections.abc import Callable
from dataclasses import dataclass, field

from loguru import logger

from daily_folder.protocols import TreeViewProtocol


@dataclass
class Session:
    """State owned by one attached caller (a window, a CLI run, an MCP server).

    Release callbacks run in reverse acquisition order on teardown. A failing
    callback is logged and the remaining ones still run.
    """

    session_id: str
    view: TreeViewProtocol | None = None
    existing: set[str] = field(default_factory=set)
    _releases: list[tuple[str, Callable[[], None]]] = field(default_factory=list)

    def acquire(self, release: Callable[[], None], label: str = "resource") -> None:
        """Register a callback releasing a resource held by this session."""
        self._releases.append((label, release))

    def teardown(self) -> None:
        releases, self._releases = self._releases, []
        for label, release in reversed(releases):
            try:
                release()
            except Exception:
                logger.exception("Error releasing {} of session {}", label, self.session_id)
        self.view = None
        self.existing = set()


class SessionRegistry:
    """Sessions keyed by an explicit id; the owner calls detach() when done."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}

    def attach(self, session_id: str, view: TreeViewProtocol | None = None) -> Session:
        """Return the session for session_id, creating it on first attach."""
        session = self._sessions.get(session_id)
        if session is None:
            session = Session(session_id=session_id)
            self._sessions[session_id] = session
            logger.debug("Attached session {}", session_id)
        if view is not None:
            session.view = view
        return session

    def get(self, session_id: str) -> Session | None:
        return self._sessions.get(session_id)

    def detach(self, session_id: str) -> None:
        session = self._sessions.pop(session_id, None)
        if session is None:
            return
        session.teardown()
        logger.debug("Detached session {}", session_id)

    def detach_all(self) -> None:
        for session_id in list(self._sessions):
            self.detach(session_id)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._sessions

    def __len__(self) -> int:
        return len(self._sessions)
