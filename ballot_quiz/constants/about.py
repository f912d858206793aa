"""Static metadata describing BallotQuiz."""

APP_NAME = "BallotQuiz"
APP_VERSION = "0.1"
APP_LICENSE = "MIT License"
APP_ABOUT_TEXT = (
    "BallotQuiz hosts two browser widgets: a multi-question quiz player and a "
    "senatorial candidate picker limited to twelve choices."
)
