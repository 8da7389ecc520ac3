from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from wordgroups import db
from wordgroups.errors import InternalFailure
from wordgroups.models import Attempt, Member
from .scoring import calculate_score

# Largest count the 32-bit incorrect_guesses column holds; the score has
# already hit its floor long before this.
MAX_STORED_GUESSES = 2 ** 31 - 1


@dataclass(frozen=True)
class CompletionResult:
    attempt_id: int
    score: int
    # False when the puzzle had already been credited and nothing was written
    newly_scored: bool


class _CompletionRace(Exception):
    """Another transaction completed the attempt between our read and write."""


def _find_attempt(member_id: int, puzzle_id: int) -> Optional[Attempt]:
    # Row lock where the backend supports it; a missing row is covered by
    # the (member_id, puzzle_id) unique constraint instead.
    return (
        Attempt.query
        .filter_by(member_id=member_id, puzzle_id=puzzle_id)
        .with_for_update()
        .first()
    )


def _record_once(member_id: int, puzzle_id: int, incorrect_guesses: int, score: int) -> CompletionResult:
    attempt = _find_attempt(member_id, puzzle_id)
    if attempt is not None and attempt.completed:
        return CompletionResult(attempt_id=attempt.id, score=attempt.score, newly_scored=False)

    now = datetime.now(timezone.utc)
    if attempt is None:
        attempt = Attempt(
            member_id=member_id,
            puzzle_id=puzzle_id,
            completed=True,
            incorrect_guesses=incorrect_guesses,
            score=score,
            completed_at=now,
        )
        db.session.add(attempt)
        db.session.flush()
    else:
        updated = (
            Attempt.query
            .filter_by(id=attempt.id, completed=False)
            .update({
                Attempt.completed: True,
                Attempt.incorrect_guesses: incorrect_guesses,
                Attempt.score: score,
                Attempt.completed_at: now,
            }, synchronize_session=False)
        )
        if updated != 1:
            raise _CompletionRace()

    Member.query.filter_by(id=member_id).update(
        {Member.score: Member.score + score}, synchronize_session=False
    )
    return CompletionResult(attempt_id=attempt.id, score=score, newly_scored=True)


def record_completion(member_id: int, puzzle_id: int, incorrect_guesses: int) -> CompletionResult:
    """Credit a finished puzzle to a member at most once.

    The attempt write and the member's score increment commit together or
    not at all. A repeated signal for an already completed attempt writes
    nothing and returns the stored score. If a concurrent completion wins the
    race (unique constraint violation or a lost conditional update) the
    transaction is rolled back and re-run, which then observes the completed
    attempt.
    """
    score = calculate_score(True, incorrect_guesses)
    stored_guesses = min(incorrect_guesses, MAX_STORED_GUESSES)
    retries = int(current_app.config.get('SOLVE_TRANSACTION_RETRIES', 2))
    for attempt_no in range(retries + 1):
        try:
            result = _record_once(member_id, puzzle_id, stored_guesses, score)
            db.session.commit()
        except (IntegrityError, _CompletionRace):
            db.session.rollback()
            current_app.logger.info(
                f"[solve-retry] member={member_id} puzzle={puzzle_id} try={attempt_no + 1}"
            )
            continue
        except SQLAlchemyError as exc:
            db.session.rollback()
            current_app.logger.exception(f"[solve-fail] member={member_id} puzzle={puzzle_id}")
            raise InternalFailure('Failed to record solution') from exc
        current_app.logger.info(
            f"[solve] member={member_id} puzzle={puzzle_id} guesses={stored_guesses} "
            f"score={result.score} scored={result.newly_scored}"
        )
        return result

    current_app.logger.error(f"[solve-fail] member={member_id} puzzle={puzzle_id} retries exhausted")
    raise InternalFailure('Failed to record solution')
