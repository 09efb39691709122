import logging
from typing import Dict, Optional

from mathemix.models import Room

logger = logging.getLogger(__name__)


class RoomStore:
    """In-memory table of live rooms, keyed by code.

    Also indexes which room each connection belongs to so a connection can
    only ever be a member of one room, and disconnects need no scan.
    """

    def __init__(self):
        self._rooms: Dict[str, Room] = {}
        self._membership: Dict[str, str] = {}

    def __contains__(self, code) -> bool:
        return code in self._rooms

    def __len__(self) -> int:
        return len(self._rooms)

    def get(self, code) -> Optional[Room]:
        return self._rooms.get(code)

    def add(self, room: Room) -> None:
        if room.code in self._rooms:
            raise ValueError(f"Room code {room.code} already in use")
        self._rooms[room.code] = room

    def remove(self, code: str) -> Optional[Room]:
        room = self._rooms.pop(code, None)
        if room:
            for player in room.players:
                self._membership.pop(player.id, None)
            logger.info(f"[room-removed] room={code}")
        return room

    def bind(self, sid: str, code: str) -> None:
        self._membership[sid] = code

    def unbind(self, sid: str) -> Optional[str]:
        return self._membership.pop(sid, None)

    def room_code_for(self, sid: str) -> Optional[str]:
        return self._membership.get(sid)
