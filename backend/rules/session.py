from __future__ import annotations

import logging
import secrets
import threading
from dataclasses import dataclass, field
from enum import Enum

from rules.framing import ContestFrame
from rules.validation import ValidationError, require_text

logger = logging.getLogger(__name__)

SESSION_ID_ALPHABET = "ABCDEFGHJKMNPQRSTUVWXYZ23456789"
SESSION_ID_LENGTH = 6


class SessionError(LookupError):
    pass


class ParticipantRole(str, Enum):
    GM = "GM"
    PLAYER = "Player"


class SessionState(str, Enum):
    WAITING_FOR_PLAYERS = "WaitingForPlayers"
    FRAMING_CONTEST = "FramingContest"
    AWAITING_PLAYER_ABILITY = "AwaitingPlayerAbility"
    RESOLVING_CONTEST = "ResolvingContest"
    SHOWING_OUTCOME = "ShowingOutcome"


@dataclass(frozen=True)
class Participant:
    name: str
    role: ParticipantRole

    def __post_init__(self) -> None:
        require_text(self.name, "Participant name")


@dataclass
class Session:
    id: str
    gm: Participant
    players: list[Participant] = field(default_factory=list)
    state: SessionState = SessionState.WAITING_FOR_PLAYERS

    def add_player(self, player: Participant) -> None:
        if player.role is not ParticipantRole.PLAYER:
            raise ValidationError("Only players can join as participants.")
        self.players.append(player)

    def transition_to(self, state: SessionState) -> None:
        logger.debug("Session %s: %s -> %s", self.id, self.state.value, state.value)
        self.state = state

    def participant_names(self) -> list[str]:
        return [self.gm.name] + [player.name for player in self.players]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "gm": self.gm.name,
            "players": [player.name for player in self.players],
            "state": self.state.value,
        }


def generate_session_id() -> str:
    return "".join(
        secrets.choice(SESSION_ID_ALPHABET) for _ in range(SESSION_ID_LENGTH)
    )


class SessionCoordinator:
    """In-memory registry of live sessions keyed by their join code."""

    def __init__(self) -> None:
        self._sessions: dict[str, Session] = {}
        self._lock = threading.Lock()

    def create_session(self, gm_name: str) -> Session:
        gm = Participant(name=gm_name, role=ParticipantRole.GM)
        with self._lock:
            session_id = generate_session_id()
            while session_id in self._sessions:
                session_id = generate_session_id()
            session = Session(id=session_id, gm=gm)
            self._sessions[session_id] = session
        logger.info("Created session %s for GM %r", session_id, gm.name)
        return session

    def get_session(self, session_id: str) -> Session | None:
        with self._lock:
            return self._sessions.get(session_id)

    def require_session(self, session_id: str) -> Session:
        session = self.get_session(session_id)
        if session is None:
            raise SessionError(f"Session '{session_id}' not found")
        return session

    def join_session(self, session_id: str, player_name: str) -> Session:
        session = self.require_session(session_id)
        session.add_player(Participant(name=player_name, role=ParticipantRole.PLAYER))
        logger.info("Player %r joined session %s", player_name, session_id)
        return session

    def participant_names(self, session_id: str) -> list[str]:
        session = self.get_session(session_id)
        if session is None:
            return []
        return session.participant_names()


class ContestFrameStore:
    """Holds the in-flight contest frame for each session."""

    def __init__(self) -> None:
        self._frames: dict[str, ContestFrame] = {}
        self._lock = threading.Lock()

    def set_frame(self, session_id: str, frame: ContestFrame) -> None:
        with self._lock:
            self._frames[session_id] = frame

    def get_frame(self, session_id: str) -> ContestFrame | None:
        with self._lock:
            return self._frames.get(session_id)

    def clear_frame(self, session_id: str) -> None:
        with self._lock:
            self._frames.pop(session_id, None)
