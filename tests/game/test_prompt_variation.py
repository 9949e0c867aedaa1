import random

from lexiquiz.game.questions.prompt_variation import expand_prompt_variations


class _FirstChoice:
    def choice(self, seq):
        return seq[0]


def test_each_group_is_replaced_by_one_trimmed_alternative() -> None:
    result = expand_prompt_variations("Write about { sea | mountains } in {spring|autumn}.", _FirstChoice())

    assert result == "Write about sea in spring."


def test_empty_alternatives_are_dropped() -> None:
    assert expand_prompt_variations("a {| |b} c", _FirstChoice()) == "a b c"
    assert expand_prompt_variations("a { | } c", _FirstChoice()) == "a  c"


def test_template_without_groups_is_unchanged() -> None:
    assert expand_prompt_variations("plain text", random.Random(3)) == "plain text"


def test_random_choice_stays_within_alternatives() -> None:
    rng = random.Random(11)
    results = {expand_prompt_variations("{x|y|z}", rng) for _ in range(60)}

    assert results <= {"x", "y", "z"}
    assert len(results) > 1
