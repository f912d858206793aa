"""Tests for the quiz answer lifecycle."""

from itertools import permutations
import random

import pytest

from ballot_quiz.core.models import Feedback, OptionStatus
from ballot_quiz.core.services.quiz_session import (
    NoAnswerSelectedError,
    QuizSession,
    QuizStateError,
)
from conftest import capitals_question, make_question, sample_questions

CAPITAL_KEYS = ["q-capital:1", "q-capital:3"]
MULTI_KEYS = ["q-multi:1", "q-multi:2", "q-multi:3", "q-multi:5"]


def _option_draws(seed, *key_lists):
    """Option orders an rng seeded with ``seed`` yields for consecutive questions."""
    rng = random.Random(seed)
    draws = []
    for keys in key_lists:
        order = list(keys)
        rng.shuffle(order)
        draws.append(order)
    return draws


def _shuffling_seed(accept, *key_lists):
    # Starts at 11 and skips seeds whose draws would also pass with a fixed order.
    return next(seed for seed in range(11, 111) if accept(_option_draws(seed, *key_lists)))


@pytest.fixture
def session():
    quiz = QuizSession(random.Random(1))
    quiz.load_questions(sample_questions())
    return quiz


class TestLoading:
    def test_starts_at_first_question(self, session):
        assert session.get_position() == 0
        assert session.get_current_question().id == "q-capital"
        assert session.get_selected_answers() == frozenset()
        assert not session.is_submitted()
        assert session.get_feedback() is None

    def test_empty_quiz_has_no_current_question(self):
        quiz = QuizSession()
        quiz.load_questions([])
        assert quiz.get_current_question() is None
        assert quiz.get_options() == []
        assert not quiz.is_finished()

    def test_reload_resets_progress_and_score(self, session):
        session.set_answer("3")
        session.submit()
        session.next_question()

        session.load_questions(sample_questions())

        assert session.get_position() == 0
        assert session.get_score() == 0
        assert not session.is_submitted()

    def test_unrenderable_quiz_leaves_previous_one_in_place(self, session):
        session.set_answer("3")
        session.submit()
        broken = make_question("broken", {1: 42}, "1")

        with pytest.raises(AttributeError):
            session.load_questions([broken])

        assert session.get_current_question().id == "q-capital"
        assert session.get_question_count() == 3
        assert session.get_score() == 1
        assert session.is_submitted()
        assert session.get_selected_answers() == {"3"}
        assert [o.value for o in session.get_options()] == ["1", "3"]

    def test_question_shuffle_is_seeded_permutation(self):
        questions = sample_questions() + [make_question(f"extra-{n}", {1: "A"}, "1") for n in range(5)]
        expected = list(questions)
        random.Random(3).shuffle(expected)

        quiz = QuizSession(random.Random(3), shuffle_questions=True)
        quiz.load_questions(questions)

        assert quiz.get_questions() == expected
        assert sorted(q.id for q in quiz.get_questions()) == sorted(q.id for q in questions)


class TestOptions:
    def test_only_filled_slots_in_slot_order(self, session):
        options = session.get_options()
        assert [(o.value, o.label) for o in options] == [("1", "Paris"), ("3", "London")]
        assert [o.key for o in options] == ["q-capital:1", "q-capital:3"]

    def test_blank_slots_are_skipped(self):
        quiz = QuizSession()
        quiz.load_questions([make_question("q", {1: "  ", 2: "Real"}, "2")])
        assert [o.value for o in quiz.get_options()] == ["2"]

    def test_question_without_options_yields_empty_list(self):
        quiz = QuizSession()
        quiz.load_questions([make_question("bare", {}, "1")])
        assert quiz.get_current_question() is not None
        assert quiz.get_options() == []

    def test_option_shuffle_is_seeded_permutation(self):
        question = make_question("q", {1: "a", 2: "b", 3: "c", 4: "d", 5: "e"}, "1")
        expected = [f"q:{slot}" for slot in range(1, 6)]
        random.Random(7).shuffle(expected)

        quiz = QuizSession(random.Random(7), shuffle_options=True)
        quiz.load_questions([question])

        assert [o.key for o in quiz.get_options()] == expected

    def test_next_question_reshuffles_its_own_options(self):
        seed = _shuffling_seed(lambda draws: draws[1] != MULTI_KEYS, CAPITAL_KEYS, MULTI_KEYS)
        first, second = _option_draws(seed, CAPITAL_KEYS, MULTI_KEYS)

        quiz = QuizSession(random.Random(seed), shuffle_options=True)
        quiz.load_questions(sample_questions())
        assert [o.key for o in quiz.get_options()] == first
        quiz.next_question()

        assert [o.key for o in quiz.get_options()] == second

    def test_reloading_draws_a_fresh_option_order(self):
        seed = _shuffling_seed(lambda draws: draws[0] != draws[1], MULTI_KEYS, MULTI_KEYS)
        first, second = _option_draws(seed, MULTI_KEYS, MULTI_KEYS)
        question = sample_questions()[1]

        quiz = QuizSession(random.Random(seed), shuffle_options=True)
        quiz.load_questions([question])
        assert [o.key for o in quiz.get_options()] == first
        quiz.load_questions([question])

        assert [o.key for o in quiz.get_options()] == second

    def test_no_tagging_before_submission(self, session):
        session.set_answer("1")
        assert all(o.status is OptionStatus.NONE for o in session.get_options())

    def test_tagging_after_wrong_submission(self, session):
        session.set_answer("1")
        session.submit()
        statuses = {o.value: o.status for o in session.get_options()}
        assert statuses == {"1": OptionStatus.WRONG, "3": OptionStatus.CORRECT}
        assert session.get_options()[1].css_class == "option-item correct-answer"


class TestAnswers:
    def test_single_answer_replaces_selection(self, session):
        session.set_answer("1")
        session.set_answer("3")
        assert session.get_selected_answers() == {"3"}

    @pytest.mark.parametrize("is_add", [True, False])
    def test_single_answer_ignores_is_add(self, session, is_add):
        session.set_answer("1")
        session.set_answer("3", is_add=is_add)
        assert session.get_selected_answers() == {"3"}

    def test_multiple_answers_add_and_remove(self, session):
        session.next_question()
        session.set_answer("1")
        session.set_answer("3")
        session.set_answer("2")
        session.set_answer("2", is_add=False)
        assert session.get_selected_answers() == {"1", "3"}

    def test_unknown_value_is_rejected(self, session):
        with pytest.raises(ValueError):
            session.set_answer("2")

    def test_answer_after_submission_is_rejected(self, session):
        session.set_answer("3")
        session.submit()
        with pytest.raises(QuizStateError):
            session.set_answer("1")
        assert session.get_selected_answers() == {"3"}


class TestSubmit:
    def test_capital_scenario(self):
        quiz = QuizSession()
        quiz.load_questions([capitals_question()])
        quiz.set_answer("1")
        quiz.set_answer("3")

        assert quiz.get_selected_answers() == {"3"}
        assert quiz.submit() is Feedback.CORRECT
        assert quiz.get_score() == 1

    def test_empty_submission_changes_nothing(self, session):
        with pytest.raises(NoAnswerSelectedError):
            session.submit()
        assert not session.is_submitted()
        assert session.get_score() == 0
        assert session.get_feedback() is None

    def test_wrong_answer_keeps_score(self, session):
        session.set_answer("1")
        assert session.submit() is Feedback.INCORRECT
        assert session.get_score() == 0
        assert session.is_submitted()

    def test_grading_is_order_independent(self):
        question = make_question(
            "q", {1: "a", 2: "b", 3: "c", 4: "d"}, "4;1;3", allow_multiple=True
        )
        for order in permutations(["1", "3", "4"]):
            quiz = QuizSession()
            quiz.load_questions([question])
            for value in order:
                quiz.set_answer(value)
            assert quiz.submit() is Feedback.CORRECT

    def test_partial_selection_is_incorrect(self, session):
        session.next_question()
        session.set_answer("1")
        assert session.submit() is Feedback.INCORRECT

    def test_duplicate_correct_entries_act_as_a_set(self):
        quiz = QuizSession()
        quiz.load_questions([make_question("q", {1: "a", 3: "c"}, "3;3")])
        quiz.set_answer("3")
        assert quiz.submit() is Feedback.CORRECT

    def test_double_submission_is_rejected(self, session):
        session.set_answer("3")
        session.submit()
        with pytest.raises(QuizStateError):
            session.submit()
        assert session.get_score() == 1


class TestProgression:
    def test_next_clears_question_state(self, session):
        session.set_answer("3")
        session.submit()
        question = session.next_question()

        assert question.id == "q-multi"
        assert session.get_position() == 1
        assert session.get_selected_answers() == frozenset()
        assert not session.is_submitted()
        assert session.get_feedback() is None

    def test_past_last_question_is_terminal(self, session):
        session.set_answer("3")
        session.submit()
        session.next_question()
        session.next_question()
        assert session.next_question() is None

        assert session.get_current_question() is None
        assert session.is_finished()
        position = session.get_position()

        assert session.next_question() is None
        assert session.next_question() is None
        assert session.get_position() == position
        assert session.get_score() == 1

    def test_commands_at_terminal_state_raise(self, session):
        for _ in range(3):
            session.next_question()
        with pytest.raises(QuizStateError):
            session.set_answer("1")
        with pytest.raises(QuizStateError):
            session.submit()
