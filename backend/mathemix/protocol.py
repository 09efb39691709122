"""Wire protocol between clients and the room coordinator.

Inbound payloads are validated here into one frozen dataclass per event,
so the coordinator only ever sees well-formed commands. Coordinator
handlers answer with an `Outcome`: what happened and which notifications
the socket layer must deliver, in order.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional


# ---- Inbound events ----

CREATE_ROOM = 'createRoom'
JOIN_ROOM = 'joinRoom'
START_GAME = 'startGame'
NEXT_ROUND = 'nextRound'
SUBMIT_ANSWER = 'submitAnswer'

# ---- Outbound events ----

ROOM_CREATED = 'roomCreated'
JOINED_ROOM = 'joinedRoom'
UPDATE_PLAYERS = 'updatePlayers'
NEW_QUESTION = 'newQuestion'
UPDATE_LEADERBOARD = 'updateLeaderboard'
REVEAL_ANSWER = 'revealAnswer'
ANSWER_RESULT = 'answerResult'
ERROR = 'error'

# ---- Notification targets ----

SENDER = 'sender'    # only the connection that sent the event
OTHERS = 'others'    # the room, excluding the sender
ROOM = 'room'        # every member of the room

# ---- Outcome statuses and reasons ----

APPLIED = 'applied'
REJECTED = 'rejected'
IGNORED = 'ignored'

ROOM_NOT_FOUND = 'room_not_found'
GAME_IN_PROGRESS = 'game_in_progress'
INVALID_PAYLOAD = 'invalid_payload'
UNAUTHORIZED = 'unauthorized'
DUPLICATE_SUBMISSION = 'duplicate_submission'
UNKNOWN_PLAYER = 'unknown_player'
NO_ACTIVE_QUESTION = 'no_active_question'
NOT_STARTED = 'not_started'
UNKNOWN_CATEGORY = 'unknown_category'
ALREADY_MEMBER = 'already_member'

ERROR_MESSAGES = {
    ROOM_NOT_FOUND: 'Room not found. Check the code and try again.',
    GAME_IN_PROGRESS: 'Game is already in progress. Cannot join.',
    INVALID_PAYLOAD: 'Invalid request.',
}


class InvalidPayload(ValueError):
    pass


@dataclass(frozen=True)
class CreateRoom:
    nickname: str


@dataclass(frozen=True)
class JoinRoom:
    room_code: str
    nickname: str


@dataclass(frozen=True)
class StartGame:
    room_code: str
    category: str


@dataclass(frozen=True)
class NextRound:
    room_code: str


@dataclass(frozen=True)
class SubmitAnswer:
    room_code: str
    answer: str


def normalize_room_code(code: str) -> str:
    return code.strip().upper()


def _require_str(data, key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise InvalidPayload(f"{key} must be a string")
    return value


def _nickname(data, max_length: int) -> str:
    nickname = _require_str(data, 'nickname').strip()
    if not nickname or len(nickname) > max_length:
        raise InvalidPayload(f"nickname must be 1-{max_length} characters")
    return nickname


def _room_code(data) -> str:
    code = normalize_room_code(_require_str(data, 'roomCode'))
    if not code:
        raise InvalidPayload("roomCode is required")
    return code


def parse_event(name: str, data, max_nickname_length: int = 20):
    """Build the typed command for inbound event `name` from its raw payload.

    Raises InvalidPayload when the payload does not match the event's schema.
    """
    if not isinstance(data, dict):
        raise InvalidPayload(f"{name} payload must be an object")
    if name == CREATE_ROOM:
        return CreateRoom(nickname=_nickname(data, max_nickname_length))
    if name == JOIN_ROOM:
        return JoinRoom(room_code=_room_code(data), nickname=_nickname(data, max_nickname_length))
    if name == START_GAME:
        return StartGame(room_code=_room_code(data), category=_require_str(data, 'category'))
    if name == NEXT_ROUND:
        return NextRound(room_code=_room_code(data))
    if name == SUBMIT_ANSWER:
        return SubmitAnswer(room_code=_room_code(data), answer=_require_str(data, 'answer'))
    raise InvalidPayload(f"unknown event {name}")


# ---- Outbound ----

@dataclass(frozen=True)
class Notification:
    event: str
    payload: Any
    target: str
    room: Optional[str] = None


@dataclass
class Outcome:
    status: str
    reason: Optional[str] = None
    notifications: List[Notification] = field(default_factory=list)
    joined: Optional[str] = None  # broadcast group the sender enters
    left: Optional[str] = None    # broadcast group the sender leaves

    @property
    def ignored(self) -> bool:
        return self.status == IGNORED

    def events(self, target: Optional[str] = None) -> List[str]:
        return [n.event for n in self.notifications if target is None or n.target == target]


def applied(*notifications: Notification, joined=None, left=None) -> Outcome:
    return Outcome(status=APPLIED, notifications=list(notifications), joined=joined, left=left)


def ignored(reason: str) -> Outcome:
    return Outcome(status=IGNORED, reason=reason)


def rejected(reason: str) -> Outcome:
    return Outcome(
        status=REJECTED,
        reason=reason,
        notifications=[Notification(ERROR, ERROR_MESSAGES[reason], SENDER)],
    )
