from typing import List

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import selectinload

from wordgroups import db
from wordgroups.errors import InternalFailure, NotFound
from wordgroups.models import Attempt, Category, Member, Puzzle, Word
from wordgroups.schemas import PuzzleCreate


def get_puzzle(group_id: int, puzzle_id: int) -> Puzzle:
    puzzle = Puzzle.query.filter_by(id=puzzle_id, group_id=group_id).first()
    if puzzle is None:
        raise NotFound('Puzzle not found')
    return puzzle


def list_puzzles(group_id: int) -> List[Puzzle]:
    """All puzzles of a group, newest first, with categories, words and attempts loaded."""
    return (
        Puzzle.query
        .filter_by(group_id=group_id)
        .options(
            selectinload(Puzzle.author),
            selectinload(Puzzle.categories).selectinload(Category.words),
            selectinload(Puzzle.attempts).selectinload(Attempt.member),
        )
        .order_by(Puzzle.created_at.desc(), Puzzle.id.desc())
        .all()
    )


def create_puzzle(author: Member, data: PuzzleCreate) -> Puzzle:
    """Write a puzzle with its four categories and sixteen words in one transaction."""
    puzzle = Puzzle(author_id=author.id, group_id=author.group_id, difficulty=data.difficulty)
    for position, category in enumerate(data.categories):
        puzzle.categories.append(Category(
            name=category.name,
            color=category.color,
            position=position,
            words=[Word(text=text) for text in category.words],
        ))
    try:
        db.session.add(puzzle)
        db.session.commit()
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.exception(f"[puzzle-create-fail] group={author.group_id} author={author.id}")
        raise InternalFailure('Failed to create puzzle') from exc
    current_app.logger.info(
        f"[puzzle-create] group={author.group_id} puzzle={puzzle.id} author={author.id} difficulty={puzzle.difficulty}"
    )
    return puzzle
