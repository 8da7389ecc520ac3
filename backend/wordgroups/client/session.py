"""Puzzle-solving session engine.

Drives one member's attempt at one puzzle: selecting words, checking a
group of four against the categories, and signalling completion once every
category is found. State is owned by a single caller and mutated only by the
public operations below.
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple, TypeVar

from .api import ApiError

T = TypeVar('T')

IDLE = 'idle'
SOLVING = 'solving'
COMPLETE = 'complete'

UNSELECTED = 'unselected'
SELECTED = 'selected'
CORRECT = 'correct'

MAX_SELECTION = 4

INCORRECT_MESSAGE = "Incorrect. These words don't belong to the same category."


@dataclass(frozen=True)
class WordView:
    id: int
    text: str


@dataclass(frozen=True)
class CategoryView:
    id: int
    name: str
    color: str
    words: Tuple[WordView, ...]

    @property
    def texts(self) -> frozenset:
        return frozenset(w.text for w in self.words)


@dataclass(frozen=True)
class PuzzleView:
    """A puzzle as delivered by the group puzzle listing."""

    id: int
    difficulty: str
    categories: Tuple[CategoryView, ...]
    author_name: Optional[str] = None
    completed_by: Tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_payload(cls, payload: dict) -> 'PuzzleView':
        categories = tuple(
            CategoryView(
                id=c['id'],
                name=c['name'],
                color=c.get('color', ''),
                words=tuple(WordView(id=w['id'], text=w['text']) for w in c.get('words', [])),
            )
            for c in payload.get('categories', [])
        )
        completed_by = tuple(
            a['member']['name'] for a in payload.get('attempts', [])
            if a.get('completed') and a.get('member')
        )
        return cls(
            id=payload['id'],
            difficulty=payload.get('difficulty', ''),
            categories=categories,
            author_name=(payload.get('author') or {}).get('name'),
            completed_by=completed_by,
        )

    @property
    def words(self) -> List[WordView]:
        return [w for c in self.categories for w in c.words]


def shuffle(items: Sequence[T], rng: Optional[random.Random] = None) -> List[T]:
    """Uniform Fisher-Yates shuffle into a new list."""
    rng = rng or random
    shuffled = list(items)
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
    return shuffled


CompletionSignal = Callable[[int, int], int]


class SolveSession:
    """Interactive state for solving one puzzle at a time.

    ``on_complete(puzzle_id, incorrect_guesses)`` is called once when the
    last category is found and must return the authoritative score. An
    ``ApiError`` from it is kept as a dismissible ``error`` and leaves the
    session intact so ``retry_completion`` can send it again.
    """

    def __init__(self, on_complete: Optional[CompletionSignal] = None,
                 rng: Optional[random.Random] = None) -> None:
        self._on_complete = on_complete
        self._rng = rng or random.Random()
        self._reset(None)

    def _reset(self, puzzle: Optional[PuzzleView]) -> None:
        self.puzzle = puzzle
        self.phase = IDLE if puzzle is None else SOLVING
        self.solved_categories: List[str] = []
        self.word_states: Dict[str, str] = {}
        self.selection: List[str] = []
        self.incorrect_guesses = 0
        self.message = ''
        self.error = ''
        self.score: Optional[int] = None
        self.shuffled_words: List[WordView] = []

    @property
    def is_complete(self) -> bool:
        return self.phase == COMPLETE

    def select_puzzle(self, puzzle: PuzzleView) -> None:
        self._reset(puzzle)
        for word in puzzle.words:
            self.word_states[word.text] = UNSELECTED
        self.shuffled_words = shuffle(puzzle.words, self._rng)

    def toggle_word(self, text: str) -> None:
        if self.phase != SOLVING:
            return
        state = self.word_states.get(text)
        if state is None or state == CORRECT:
            return
        if state == SELECTED:
            self.selection.remove(text)
            self.word_states[text] = UNSELECTED
        elif len(self.selection) < MAX_SELECTION:
            self.selection.append(text)
            self.word_states[text] = SELECTED
        self.message = ''

    def _matching_category(self) -> Optional[CategoryView]:
        chosen = frozenset(self.selection)
        for category in self.puzzle.categories:
            if category.texts == chosen:
                return category
        return None

    def submit_selection(self) -> Optional[CategoryView]:
        """Check the current four words; returns the matched category, if any."""
        if self.phase != SOLVING or len(self.selection) != MAX_SELECTION:
            return None

        category = self._matching_category()
        if category is None:
            self.incorrect_guesses += 1
            self.message = INCORRECT_MESSAGE
            return None

        for text in self.selection:
            self.word_states[text] = CORRECT
        self.solved_categories.append(category.name)
        self.selection = []
        self.message = f'Correct! You found the "{category.name}" category.'
        solved = set(self.solved_categories)
        remaining = [
            w for c in self.puzzle.categories if c.name not in solved
            for w in c.words
        ]
        self.shuffled_words = shuffle(remaining, self._rng)

        if len(self.solved_categories) == len(self.puzzle.categories):
            self.phase = COMPLETE
            self._signal_completion()
        return category

    def _signal_completion(self) -> None:
        if self._on_complete is None:
            self.message = 'Congratulations! You solved all categories.'
            return
        try:
            score = self._on_complete(self.puzzle.id, self.incorrect_guesses)
        except ApiError as exc:
            self.error = exc.message
            return
        self.error = ''
        self.score = score
        self.message = f'Congratulations! You solved all categories with {score} points.'

    def retry_completion(self) -> None:
        """Re-send a completion whose first delivery failed."""
        if self.phase == COMPLETE and self.score is None:
            self._signal_completion()

    def dismiss_error(self) -> None:
        self.error = ''
