"""Constants for the candidate picker."""

SELECTION_CAPACITY: int = 12
CAPACITY_EXCEEDED_TEMPLATE: str = "You can only select up to {capacity} candidates."

# (max viewport width, candidates per column), checked in order.
COLUMN_BREAKPOINTS: tuple[tuple[int, int], ...] = (
    (480, 33),
    (768, 22),
    (1024, 17),
)
DEFAULT_COLUMN_SIZE: int = 14

EXPORT_FILE_NAME: str = "selected_senatorial_candidates.txt"

DEFAULT_CANDIDATE_COMMENTS: dict[int, str] = {
    11: " — Budots pa rin sa 2025.",
    22: " — Sure ka na dyan?",
    35: " — 🎬📽️🎞️",
    39: " — Team itim?",
    50: " — 🥊💥",
    53: " — OH, C'MON!",
    55: " — For REAL?",
    58: " — Ipe!!!",
    66: " — Camille--yahh",
}
