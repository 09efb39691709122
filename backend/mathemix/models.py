import random
import string
from dataclasses import dataclass, field
from typing import Container, List, Optional, Set


@dataclass(frozen=True)
class Question:
    definition: str
    answer: str


@dataclass
class Player:
    id: str
    nickname: str
    score: int = 0

    def to_dict(self):
        return {
            'id': self.id,
            'nickname': self.nickname,
            'score': self.score,
        }


@dataclass
class Room:
    code: str
    host_id: str
    category: str
    players: List[Player] = field(default_factory=list)  # join order
    started: bool = False
    current_question: Optional[Question] = None
    round_started_at: float = 0.0
    answered: Set[str] = field(default_factory=set)
    revealed: bool = False

    def get_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def remove_player(self, player_id: str) -> Optional[Player]:
        player = self.get_player(player_id)
        if player:
            self.players.remove(player)
            self.answered.discard(player_id)
        return player

    def all_answered(self) -> bool:
        return bool(self.players) and all(p.id in self.answered for p in self.players)

    def players_to_dict(self):
        return [p.to_dict() for p in self.players]


def generate_room_code(taken: Container[str], length=5):
    """Generate a short room code not present in `taken`."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if code not in taken:
            return code
