import logging
import time
from typing import Callable, List, Optional

from mathemix.models import Player, Room, generate_room_code
from mathemix.protocol import (
    ALREADY_MEMBER, ANSWER_RESULT, DUPLICATE_SUBMISSION, GAME_IN_PROGRESS,
    JOINED_ROOM, NEW_QUESTION, NO_ACTIVE_QUESTION, NOT_STARTED, OTHERS,
    REVEAL_ANSWER, ROOM, ROOM_CREATED, ROOM_NOT_FOUND, SENDER, UNAUTHORIZED,
    UNKNOWN_CATEGORY, UNKNOWN_PLAYER, UPDATE_LEADERBOARD, UPDATE_PLAYERS,
    CreateRoom, JoinRoom, NextRound, Notification, Outcome, StartGame,
    SubmitAnswer, applied, ignored, rejected,
)
from .questions import QuestionBank
from .scoring import answer_mask, grade, round_score
from .store import RoomStore

logger = logging.getLogger(__name__)


class RoomCoordinator:
    """Room/session state machine.

    Each handler validates a command against the current room state, mutates
    it, and returns an `Outcome` describing what the room must be told.
    Handlers never block and must be called one at a time; the socket layer
    serialises them.
    """

    def __init__(self, store: RoomStore, questions: QuestionBank,
                 default_category: str = 'Number & Algebra',
                 room_code_length: int = 5,
                 clock: Callable[[], float] = time.time):
        self.store = store
        self.questions = questions
        self.default_category = default_category
        self.room_code_length = room_code_length
        self._clock = clock
        self._handlers = {
            CreateRoom: self.create_room,
            JoinRoom: self.join_room,
            StartGame: self.start_game,
            NextRound: self.next_round,
            SubmitAnswer: self.submit_answer,
        }

    def handle(self, sid: str, command) -> Outcome:
        return self._handlers[type(command)](sid, command)

    # ---- Room lifecycle ----

    def create_room(self, sid: str, command: CreateRoom) -> Outcome:
        departure, left = self._depart(sid)
        code = generate_room_code(self.store, length=self.room_code_length)
        room = Room(code=code, host_id=sid, category=self.default_category)
        room.players.append(Player(id=sid, nickname=command.nickname))
        self.store.add(room)
        self.store.bind(sid, code)
        logger.info(f"[room-created] room={code} host={sid} nickname={command.nickname!r}")
        return applied(
            *departure,
            Notification(ROOM_CREATED, {'roomCode': code, 'players': room.players_to_dict()}, SENDER),
            joined=code,
            left=left,
        )

    def join_room(self, sid: str, command: JoinRoom) -> Outcome:
        code = command.room_code
        room = self.store.get(code)
        if not room:
            logger.info(f"[join-rejected] room={code} sid={sid} reason=not_found")
            return rejected(ROOM_NOT_FOUND)
        if room.started:
            logger.info(f"[join-rejected] room={code} sid={sid} reason=in_progress")
            return rejected(GAME_IN_PROGRESS)
        if self.store.room_code_for(sid) == code:
            return self._ignore(ALREADY_MEMBER, sid, code)

        departure, left = self._depart(sid)
        room.players.append(Player(id=sid, nickname=command.nickname))
        self.store.bind(sid, code)
        logger.info(f"[room-joined] room={code} sid={sid} nickname={command.nickname!r} players={len(room.players)}")
        players = room.players_to_dict()
        return applied(
            *departure,
            Notification(JOINED_ROOM, {'roomCode': code, 'players': players}, SENDER),
            Notification(UPDATE_PLAYERS, players, OTHERS, room=code),
            joined=code,
            left=left,
        )

    # ---- Rounds ----

    def start_game(self, sid: str, command: StartGame) -> Outcome:
        room = self.store.get(command.room_code)
        if not room or room.host_id != sid:
            return self._ignore(UNAUTHORIZED, sid, command.room_code)
        if not self.questions.has_category(command.category):
            return self._ignore(UNKNOWN_CATEGORY, sid, command.room_code)

        room.started = True
        room.category = command.category
        logger.info(f"[game-started] room={room.code} category={room.category!r}")
        return applied(
            self._dispatch_question(room),
            Notification(UPDATE_LEADERBOARD, room.players_to_dict(), ROOM, room=room.code),
        )

    def next_round(self, sid: str, command: NextRound) -> Outcome:
        room = self.store.get(command.room_code)
        if not room or room.host_id != sid:
            return self._ignore(UNAUTHORIZED, sid, command.room_code)
        if not room.started:
            return self._ignore(NOT_STARTED, sid, command.room_code)
        return applied(
            self._dispatch_question(room),
            Notification(REVEAL_ANSWER, None, ROOM, room=room.code),
        )

    def _dispatch_question(self, room: Room) -> Notification:
        question = self.questions.get_random_question(room.category)
        room.current_question = question
        room.round_started_at = self._clock()
        room.answered.clear()
        room.revealed = False
        logger.info(f"[round-dispatched] room={room.code} answer_length={len(question.answer)}")
        return Notification(NEW_QUESTION, {
            'definition': question.definition,
            'answerLength': len(question.answer),
            'answerMask': answer_mask(question.answer),
        }, ROOM, room=room.code)

    # ---- Answers ----

    def submit_answer(self, sid: str, command: SubmitAnswer) -> Outcome:
        room = self.store.get(command.room_code)
        if not room:
            return self._ignore(ROOM_NOT_FOUND, sid, command.room_code)
        if not room.current_question:
            return self._ignore(NO_ACTIVE_QUESTION, sid, room.code)
        if sid in room.answered:
            return self._ignore(DUPLICATE_SUBMISSION, sid, room.code)
        player = room.get_player(sid)
        if not player:
            return self._ignore(UNKNOWN_PLAYER, sid, room.code)

        room.answered.add(sid)
        if grade(command.answer, room.current_question.answer):
            points = round_score(self._clock() - room.round_started_at)
            player.score += points
            result = {'correct': True, 'scoreAdded': points}
        else:
            result = {'correct': False, 'scoreAdded': 0}
        logger.info(f"[answer] room={room.code} sid={sid} correct={result['correct']} points={result['scoreAdded']}")

        notifications = [
            Notification(ANSWER_RESULT, result, SENDER),
            Notification(UPDATE_LEADERBOARD, room.players_to_dict(), ROOM, room=room.code),
        ]
        reveal = self._reveal_if_complete(room)
        if reveal:
            notifications.append(reveal)
        return applied(*notifications)

    def _reveal_if_complete(self, room: Room) -> Optional[Notification]:
        if not room.current_question or room.revealed or not room.all_answered():
            return None
        room.revealed = True
        logger.info(f"[answer-revealed] room={room.code}")
        return Notification(REVEAL_ANSWER, room.current_question.answer, ROOM, room=room.code)

    # ---- Departures ----

    def disconnect(self, sid: str) -> Outcome:
        departure, left = self._depart(sid)
        return applied(*departure, left=left)

    def _depart(self, sid: str):
        """Remove `sid` from whatever room it is in.

        Returns the notifications for the room left behind and the code of
        that room (None if the connection was in no room).
        """
        code = self.store.unbind(sid)
        room = self.store.get(code) if code else None
        if not room:
            return [], None

        room.remove_player(sid)
        if not room.players:
            self.store.remove(code)
            return [], code

        notifications: List[Notification] = [
            Notification(UPDATE_PLAYERS, room.players_to_dict(), ROOM, room=code),
        ]
        if room.host_id == sid:
            room.host_id = room.players[0].id
            logger.info(f"[host-promoted] room={code} host={room.host_id}")
            notifications.append(Notification(UPDATE_PLAYERS, room.players_to_dict(), ROOM, room=code))
        reveal = self._reveal_if_complete(room)
        if reveal:
            notifications.append(reveal)
        logger.info(f"[player-left] room={code} sid={sid} players={len(room.players)}")
        return notifications, code

    def _ignore(self, reason: str, sid: str, code: Optional[str]) -> Outcome:
        logger.debug(f"[ignored] room={code} sid={sid} reason={reason}")
        return ignored(reason)
