import pytest

from mathemix.services.games.scoring import answer_mask, grade, round_score


@pytest.mark.parametrize('elapsed, expected', [
    (0, 100),
    (0.49, 100),
    (0.5, 99),
    (10, 80),
    (44.9, 11),
    (45, 10),
    (50, 10),
    (3600, 10),
    (-3, 100),
])
def test_round_score_decays_to_floor(elapsed, expected):
    assert round_score(elapsed) == expected


def test_grade_ignores_case():
    assert grade('prime', 'PRIME')
    assert grade('Sample Space', 'SAMPLE SPACE')
    assert grade('42', '42')
    assert not grade('41', '42')


def test_grade_does_not_trim_whitespace():
    assert not grade(' 42', '42')


@pytest.mark.parametrize('answer, mask', [
    ('AB 12', '__ __'),
    ('X(1)', '____'),
    ('(0, 0)', '__, __'),
    ('MUTUALLY-EXCLUSIVE', '________-_________'),
    ('pie chart', '___ _____'),
    ('straße', '____ß_'),
    ('ﬁx', 'ﬁ_'),
])
def test_answer_mask_hides_letters_digits_and_parens(answer, mask):
    assert answer_mask(answer) == mask
    assert len(answer_mask(answer)) == len(answer)
