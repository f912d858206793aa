"""Quiz-related constants shared across the player and the API layer."""

OPTION_SLOT_COUNT: int = 5
OPTION_VALUES: tuple[str, ...] = tuple(str(slot) for slot in range(1, OPTION_SLOT_COUNT + 1))
CORRECT_ANSWER_DELIMITER: str = ";"

DEFAULT_QUIZ_TITLE: str = "Quiz"
FEEDBACK_CORRECT_MESSAGE: str = "✅ Correct!"
FEEDBACK_INCORRECT_MESSAGE: str = "❌ Incorrect!"
NO_ANSWER_SELECTED_MESSAGE: str = "Please select an answer before submitting."
ALREADY_SUBMITTED_MESSAGE: str = "This question has already been submitted."
NO_QUIZ_SELECTED_MESSAGE: str = "Please choose a quiz first."
QUIZ_COMPLETE_MESSAGE: str = "You have reached the end of the quiz."

OPTION_BASE_CLASS: str = "option-item"
OPTION_CORRECT_CLASS: str = "correct-answer"
OPTION_WRONG_CLASS: str = "wrong-answer"
