import json
import random

import pytest

from config import Config
from mathemix.models import Question, generate_room_code
from mathemix.services.games.questions import QuestionBank, UnknownCategory


def test_packaged_corpus_loads():
    bank = QuestionBank.from_file(Config.QUESTIONS_PATH)
    assert Config.DEFAULT_CATEGORY in bank.categories()
    for category in bank.categories():
        question = bank.get_random_question(category)
        assert question.answer == question.answer.upper()


def test_from_file(tmp_path):
    path = tmp_path / 'questions.json'
    path.write_text(json.dumps({'Sums': [{'definition': 'One plus one.', 'answer': '2'}]}))

    bank = QuestionBank.from_file(str(path))

    assert bank.categories() == ['Sums']
    assert bank.get_random_question('Sums') == Question(definition='One plus one.', answer='2')


def test_unknown_category_raises():
    bank = QuestionBank({'Sums': [{'definition': 'One plus one.', 'answer': '2'}]})
    assert not bank.has_category('Astrology')
    with pytest.raises(UnknownCategory):
        bank.get_random_question('Astrology')
    with pytest.raises(KeyError):
        bank.get_random_question('Astrology')


def test_selection_uses_injected_rng():
    corpus = {'Sums': [{'definition': str(n), 'answer': str(n)} for n in range(10)]}
    first = QuestionBank(corpus, rng=random.Random(7))
    second = QuestionBank(corpus, rng=random.Random(7))
    draws = [first.get_random_question('Sums') for _ in range(20)]
    assert draws == [second.get_random_question('Sums') for _ in range(20)]
    # drawn with replacement from a pool of ten
    assert len(draws) > len(set(draws))


@pytest.mark.parametrize('corpus', [
    {'Empty': []},
    {'Broken': [{'definition': 'No answer here.'}]},
    {'Broken': ['not a record']},
])
def test_bad_corpus_is_rejected(corpus):
    with pytest.raises(ValueError):
        QuestionBank(corpus)


def test_generate_room_code_skips_taken_codes(monkeypatch):
    draws = iter(['ABCDE', 'ABCDE', 'FGH12'])
    monkeypatch.setattr('mathemix.models.random.choices', lambda population, k: list(next(draws)))

    assert generate_room_code({'ABCDE'}) == 'FGH12'


def test_generate_room_code_shape():
    code = generate_room_code(set(), length=5)
    assert len(code) == 5
    assert all(c.isdigit() or c.isupper() for c in code)
