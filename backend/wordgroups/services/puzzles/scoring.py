BASE_SCORE = 100
PENALTY_PER_INCORRECT_GUESS = 10
MIN_SCORE = 10


def calculate_score(completed: bool, incorrect_guesses: int) -> int:
    """Score for one puzzle.

    100 for a clean solve, minus 10 per incorrect guess, never below 10.
    An unfinished puzzle is worth nothing.
    """
    if not completed:
        return 0
    if incorrect_guesses < 0:
        raise ValueError(f"incorrect_guesses must be non-negative, got {incorrect_guesses}")
    return max(BASE_SCORE - PENALTY_PER_INCORRECT_GUESS * incorrect_guesses, MIN_SCORE)
