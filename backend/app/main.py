import logging

from fastapi import Body, FastAPI, HTTPException
from pydantic import BaseModel

from app.config import Settings, configure_logging
from rules.core import DiceRoller, DiceRolls
from rules.framing import ContestFrame
from rules.modifiers import Modifier, ModifierType
from rules.outcome import interpret_outcome
from rules.rating import TargetNumber, parse_rating
from rules.resolution import ContestResolver, StateError
from rules.session import (
    ContestFrameStore,
    Session,
    SessionCoordinator,
    SessionError,
    SessionState,
)
from rules.validation import ValidationError

settings = Settings.from_env()
configure_logging(settings)
logger = logging.getLogger(__name__)
logger.debug("Loaded settings %s", settings.redacted())

coordinator = SessionCoordinator()
frame_store = ContestFrameStore()
resolver = ContestResolver(DiceRoller(seed=settings.dice_seed))

app = FastAPI(
    title="questworlds-contest API",
    version="0.1.0",
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}


class SessionCreate(BaseModel):
    gm_name: str


class PlayerJoinRequest(BaseModel):
    player_name: str


class ContestFrameRequest(BaseModel):
    prize: str
    resistance: str


class AbilityRequest(BaseModel):
    ability_name: str
    rating: str


class ModifierRequest(BaseModel):
    type: str
    value: int


class ResolveRequest(BaseModel):
    player_roll: int | None = None
    resistance_roll: int | None = None


class ContestResolveRequest(ResolveRequest):
    prize: str
    resistance: str
    ability_name: str
    rating: str
    modifiers: list[ModifierRequest] = []


def _require_session(session_id: str) -> Session:
    try:
        return coordinator.require_session(session_id)
    except SessionError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc


def _require_frame(session_id: str) -> ContestFrame:
    frame = frame_store.get_frame(session_id)
    if frame is None:
        raise HTTPException(status_code=404, detail="No contest has been framed")
    return frame


def _bad_request(exc: Exception) -> HTTPException:
    logger.warning("Rejected request: %s", exc)
    return HTTPException(status_code=400, detail=str(exc))


def _requested_rolls(payload: ResolveRequest) -> DiceRolls | None:
    supplied = (payload.player_roll, payload.resistance_roll)
    if supplied == (None, None):
        return None
    if None in supplied:
        raise ValidationError("Supply both rolls or neither.")
    return DiceRolls(
        player_roll=payload.player_roll, resistance_roll=payload.resistance_roll
    )


def _build_modifier(payload: ModifierRequest) -> Modifier:
    return Modifier(type=ModifierType.parse(payload.type), value=payload.value)


@app.post("/sessions")
def create_session(payload: SessionCreate) -> dict:
    try:
        session = coordinator.create_session(payload.gm_name)
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    return session.to_dict()


@app.get("/sessions/{session_id}")
def get_session(session_id: str) -> dict:
    return _require_session(session_id).to_dict()


@app.post("/sessions/{session_id}/players")
def join_session(session_id: str, payload: PlayerJoinRequest) -> dict:
    _require_session(session_id)
    try:
        session = coordinator.join_session(session_id, payload.player_name)
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    return session.to_dict()


@app.post("/sessions/{session_id}/contest/start")
def start_contest(session_id: str) -> dict:
    session = _require_session(session_id)
    frame_store.clear_frame(session_id)
    session.transition_to(SessionState.FRAMING_CONTEST)
    return session.to_dict()


@app.post("/sessions/{session_id}/contest")
def frame_contest(session_id: str, payload: ContestFrameRequest) -> dict:
    session = _require_session(session_id)
    try:
        resistance = TargetNumber.from_rating(parse_rating(payload.resistance))
        frame = ContestFrame(payload.prize, resistance)
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    frame_store.set_frame(session_id, frame)
    session.transition_to(SessionState.AWAITING_PLAYER_ABILITY)
    return {"session": session.to_dict(), "frame": frame.to_dict()}


@app.get("/sessions/{session_id}/contest")
def get_contest(session_id: str) -> dict:
    _require_session(session_id)
    return _require_frame(session_id).to_dict()


@app.post("/sessions/{session_id}/contest/ability")
def submit_ability(session_id: str, payload: AbilityRequest) -> dict:
    session = _require_session(session_id)
    frame = _require_frame(session_id)
    try:
        frame.set_player_ability(payload.ability_name, parse_rating(payload.rating))
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    session.transition_to(SessionState.RESOLVING_CONTEST)
    return {"session": session.to_dict(), "frame": frame.to_dict()}


@app.post("/sessions/{session_id}/contest/modifiers")
def apply_modifier(session_id: str, payload: ModifierRequest) -> dict:
    _require_session(session_id)
    frame = _require_frame(session_id)
    try:
        frame.apply_modifier(_build_modifier(payload))
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    return frame.to_dict()


@app.post("/sessions/{session_id}/contest/resolve")
def resolve_session_contest(
    session_id: str, payload: ResolveRequest | None = Body(default=None)
) -> dict:
    session = _require_session(session_id)
    frame = _require_frame(session_id)
    try:
        rolls = _requested_rolls(payload or ResolveRequest())
        result = resolver.resolve(frame, rolls)
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    except StateError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc

    outcome = interpret_outcome(result, frame)
    frame_store.clear_frame(session_id)
    session.transition_to(SessionState.SHOWING_OUTCOME)
    return outcome.to_dict()


@app.post("/contests/resolve")
def resolve_contest(payload: ContestResolveRequest) -> dict:
    try:
        resistance = TargetNumber.from_rating(parse_rating(payload.resistance))
        frame = ContestFrame(payload.prize, resistance)
        frame.set_player_ability(payload.ability_name, parse_rating(payload.rating))
        for modifier in payload.modifiers:
            frame.apply_modifier(_build_modifier(modifier))
        result = resolver.resolve(frame, _requested_rolls(payload))
    except ValidationError as exc:
        raise _bad_request(exc) from exc
    return interpret_outcome(result, frame).to_dict()
