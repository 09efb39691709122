from flask_socketio import join_room, leave_room, emit
from flask import current_app, request
from mathemix import socketio
from mathemix.protocol import (
    CREATE_ROOM, JOIN_ROOM, NEXT_ROUND, OTHERS, SENDER, START_GAME,
    SUBMIT_ANSWER, INVALID_PAYLOAD, InvalidPayload, Outcome, parse_event, rejected,
)
import logging
import threading

logger = logging.getLogger(__name__)

# Every coordinator call and the delivery of its notifications happen under
# this lock, so no two events are ever applied to the room table at once.
_lock = threading.Lock()


def _coordinator():
    return current_app.extensions['mathemix']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _deliver(outcome: Outcome) -> None:
    """Apply broadcast-group changes, then emit notifications in order."""
    if outcome.left:
        leave_room(outcome.left)
    if outcome.joined:
        join_room(outcome.joined)
    for note in outcome.notifications:
        # Wrap in a tuple so a None payload still goes out as a single null argument
        args = (note.payload,)
        if note.target == SENDER:
            emit(note.event, args)
        elif note.target == OTHERS:
            emit(note.event, args, to=note.room, include_self=False)
        else:
            emit(note.event, args, to=note.room)


def handle_connect():
    logger.info(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    logger.info(f"[disconnect] sid={sid} reason={reason}")
    with _lock:
        _deliver(_coordinator().disconnect(sid))


def _command_handler(event_name: str):
    def handler(data=None, *extra):
        sid = _get_sid()
        try:
            if extra:
                raise InvalidPayload(f"{event_name} takes a single payload")
            command = parse_event(event_name, data, current_app.config.get('MAX_NICKNAME_LENGTH', 20))
        except InvalidPayload as exc:
            logger.info(f"[invalid-payload] event={event_name} sid={sid} error={exc}")
            _deliver(rejected(INVALID_PAYLOAD))
            return
        with _lock:
            _deliver(_coordinator().handle(sid, command))
    handler.__name__ = f"handle_{event_name}"
    return handler


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on `namespace`."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    for event_name in (CREATE_ROOM, JOIN_ROOM, START_GAME, NEXT_ROUND, SUBMIT_ANSWER):
        socketio.on_event(event_name, _command_handler(event_name), namespace=namespace)
