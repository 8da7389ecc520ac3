from flask import Blueprint, jsonify, request

from wordgroups.auth import require_member
from wordgroups.schemas import PuzzleCreate, SolveRequest, parse_payload
from wordgroups.services.puzzles.attempts import record_completion
from wordgroups.services.puzzles.catalog import create_puzzle, get_puzzle, list_puzzles
from wordgroups.socketio_events import notify_group


puzzles = Blueprint('puzzles', __name__)


@puzzles.route('/<int:group_id>/puzzles', methods=['GET'])
def get_puzzles(group_id):
    require_member(group_id)
    return jsonify([p.to_dict() for p in list_puzzles(group_id)])


@puzzles.route('/<int:group_id>/puzzles', methods=['POST'])
def submit_puzzle(group_id):
    author = require_member(group_id, 'Not authorized to create puzzle in this group')
    data = parse_payload(
        PuzzleCreate,
        request.get_json(silent=True),
        'Invalid puzzle data. Must include difficulty and 4 categories, each with a name, color, and 4 non-empty words.',
    )
    puzzle = create_puzzle(author, data)
    notify_group(group_id, 'puzzles_update')
    return jsonify(puzzle.to_dict()), 201


@puzzles.route('/<int:group_id>/puzzles/<int:puzzle_id>/solve', methods=['POST'])
def solve_puzzle(group_id, puzzle_id):
    """Record a finished solve; the score is recomputed here, never trusted from the client."""
    member = require_member(group_id)
    puzzle = get_puzzle(group_id, puzzle_id)
    data = parse_payload(SolveRequest, request.get_json(silent=True), 'incorrectGuesses must be a non-negative integer')
    result = record_completion(member.id, puzzle.id, data.incorrect_guesses)
    if result.newly_scored:
        notify_group(group_id, 'leaderboard_update')
    return jsonify({
        'score': result.score,
        'message': 'Solution recorded successfully',
    })
