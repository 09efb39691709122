import json
import logging
import random
from typing import Dict, List, Optional

from mathemix.models import Question

logger = logging.getLogger(__name__)


class UnknownCategory(KeyError):
    pass


class QuestionBank:
    """Fixed corpus of questions grouped by category.

    Selection is uniform random with replacement, so the same question can
    come up twice in a game.
    """

    def __init__(self, corpus: Dict[str, List[dict]], rng: Optional[random.Random] = None):
        self._questions: Dict[str, List[Question]] = {}
        for category, records in corpus.items():
            if not records:
                raise ValueError(f"Category {category!r} has no questions")
            questions = []
            for record in records:
                try:
                    questions.append(Question(definition=str(record['definition']), answer=str(record['answer'])))
                except (KeyError, TypeError) as exc:
                    raise ValueError(f"Malformed question in category {category!r}: {record!r}") from exc
            self._questions[category] = questions
        self._rng = rng or random.Random()

    @classmethod
    def from_file(cls, path: str, rng: Optional[random.Random] = None) -> 'QuestionBank':
        with open(path, encoding='utf-8') as fh:
            corpus = json.load(fh)
        bank = cls(corpus, rng=rng)
        logger.info(f"[questions-loaded] path={path} categories={len(bank.categories())}")
        return bank

    def categories(self) -> List[str]:
        return list(self._questions)

    def has_category(self, category) -> bool:
        return category in self._questions

    def get_random_question(self, category: str) -> Question:
        try:
            questions = self._questions[category]
        except KeyError:
            raise UnknownCategory(category) from None
        return self._rng.choice(questions)
