from conftest import make_puzzle_payload

from wordgroups.client.session import SolveSession, PuzzleView
from wordgroups.models import Attempt, GROUP_CODE_ALPHABET


def _solve(test_client, puzzle, incorrect_guesses):
    group_id = test_client.group['id']
    return test_client.post(
        f"/api/groups/{group_id}/puzzles/{puzzle['id']}/solve",
        json={'incorrectGuesses': incorrect_guesses},
    )


def _scores(test_client):
    res = test_client.get(f"/api/groups/{test_client.group['id']}/members")
    assert res.status_code == 200
    return {m['name']: m['score'] for m in res.get_json()}


def test_index(client):
    res = client.get('/')
    assert res.status_code == 200
    assert 'message' in res.get_json()


def test_create_group_logs_member_in(alice):
    code = alice.group['code']
    assert len(code) == 6
    assert all(ch in GROUP_CODE_ALPHABET for ch in code)
    res = alice.get('/api/session')
    assert res.status_code == 200
    data = res.get_json()
    assert data['member']['name'] == 'Alice'
    assert data['group']['code'] == code


def test_create_group_requires_names(client):
    res = client.post('/api/groups', json={'name': '  ', 'member_name': 'Alice'})
    assert res.status_code == 400
    body = res.get_json()
    assert 'error' in body
    assert 'name' in body['fields']


def test_join_group_and_rejoin_by_name(flask_app, alice, bob):
    assert bob.group['id'] == alice.group['id']
    assert bob.member['name'] == 'Bob'
    # Same name from a fresh client identifies the existing member again
    again = flask_app.test_client()
    res = again.post('/api/groups/join', json={'code': alice.group['code'].lower(), 'name': 'Bob'})
    assert res.status_code == 200
    assert res.get_json()['member']['id'] == bob.member['id']


def test_join_unknown_code(client):
    res = client.post('/api/groups/join', json={'code': 'ZZZZZZ', 'name': 'Eve'})
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Group not found'}


def test_group_routes_require_session(client, alice):
    group_id = alice.group['id']
    for path in (f'/api/groups/{group_id}', f'/api/groups/{group_id}/members', f'/api/groups/{group_id}/puzzles'):
        res = client.get(path)
        assert res.status_code == 401
        assert res.get_json() == {'error': 'Not authenticated'}


def test_member_of_other_group_is_forbidden(alice, outsider, puzzle):
    res = outsider.get(f"/api/groups/{alice.group['id']}/puzzles")
    assert res.status_code == 403
    assert res.get_json() == {'error': 'Not authorized to access this group'}
    res = outsider.get(f"/api/groups/{alice.group['id']}")
    assert res.status_code == 403


def test_get_group(alice):
    res = alice.get(f"/api/groups/{alice.group['id']}")
    assert res.status_code == 200
    assert res.get_json() == alice.group


def test_create_puzzle_and_list(alice, bob):
    group_id = alice.group['id']
    first = alice.post(f'/api/groups/{group_id}/puzzles', json=make_puzzle_payload('Easy')).get_json()
    second = bob.post(f'/api/groups/{group_id}/puzzles', json=make_puzzle_payload('hard')).get_json()
    assert first['difficulty'] == 'easy'

    res = bob.get(f'/api/groups/{group_id}/puzzles')
    assert res.status_code == 200
    listing = res.get_json()
    assert [p['id'] for p in listing] == [second['id'], first['id']]
    newest = listing[0]
    assert newest['author'] == {'name': 'Bob'}
    assert newest['attempts'] == []
    assert [c['name'] for c in newest['categories']] == ['A', 'B', 'C', 'D']
    assert [c['color'] for c in newest['categories']] == ['yellow', 'green', 'blue', 'purple']
    assert [w['text'] for w in newest['categories'][0]['words']] == ['a1', 'a2', 'a3', 'a4']
    assert all('id' in w for c in newest['categories'] for w in c['words'])


def test_create_puzzle_rejects_bad_shape(alice):
    group_id = alice.group['id']
    payload = make_puzzle_payload()
    payload['categories'] = payload['categories'][:3]
    res = alice.post(f'/api/groups/{group_id}/puzzles', json=payload)
    assert res.status_code == 400
    assert 'categories' in res.get_json()['fields']

    payload = make_puzzle_payload()
    payload['categories'][0]['words'][1] = '   '
    res = alice.post(f'/api/groups/{group_id}/puzzles', json=payload)
    assert res.status_code == 400
    assert 'categories.0.words' in res.get_json()['fields']

    payload = make_puzzle_payload()
    payload['categories'][2]['color'] = 'orange'
    res = alice.post(f'/api/groups/{group_id}/puzzles', json=payload)
    assert res.status_code == 400
    assert 'categories.2.color' in res.get_json()['fields']

    payload = make_puzzle_payload()
    payload['categories'][3]['words'][0] = 'A1'
    res = alice.post(f'/api/groups/{group_id}/puzzles', json=payload)
    assert res.status_code == 400
    assert 'unique' in res.get_json()['fields']['categories']

    res = alice.post(f'/api/groups/{group_id}/puzzles', json={'difficulty': 'easy'})
    assert res.status_code == 400

    # Nothing was written
    assert alice.get(f'/api/groups/{group_id}/puzzles').get_json() == []


def test_solve_records_score_and_leaderboard(alice, bob, puzzle):
    res = _solve(bob, puzzle, 2)
    assert res.status_code == 200
    assert res.get_json() == {'score': 80, 'message': 'Solution recorded successfully'}

    assert _scores(alice) == {'Alice': 0, 'Bob': 80}
    members = alice.get(f"/api/groups/{alice.group['id']}/members").get_json()
    assert [m['name'] for m in members] == ['Bob', 'Alice']

    listing = alice.get(f"/api/groups/{alice.group['id']}/puzzles").get_json()
    assert listing[0]['attempts'] == [{'completed': True, 'member': {'name': 'Bob'}}]


def test_solve_is_idempotent(alice, bob, puzzle):
    assert _solve(bob, puzzle, 1).get_json()['score'] == 90
    res = _solve(bob, puzzle, 0)
    assert res.status_code == 200
    assert res.get_json()['score'] == 90
    assert _scores(bob)['Bob'] == 90


def test_solve_floor_and_independent_members(alice, bob, puzzle):
    assert _solve(alice, puzzle, 20).get_json()['score'] == 10
    assert _solve(bob, puzzle, 0).get_json()['score'] == 100
    assert _scores(alice) == {'Alice': 10, 'Bob': 100}


def test_solve_huge_guess_count_scores_floor(flask_app, alice, bob, puzzle):
    res = _solve(bob, puzzle, 2 ** 63)
    assert res.status_code == 200
    assert res.get_json()['score'] == 10
    assert _solve(bob, puzzle, 2 ** 63).get_json()['score'] == 10
    assert _scores(alice) == {'Alice': 0, 'Bob': 10}
    with flask_app.app_context():
        attempt = Attempt.query.filter_by(puzzle_id=puzzle['id']).one()
        assert attempt.incorrect_guesses == 2 ** 31 - 1


def test_solve_missing_puzzle(flask_app, alice, outsider):
    other = outsider.post(f"/api/groups/{outsider.group['id']}/puzzles", json=make_puzzle_payload()).get_json()
    res = _solve(alice, {'id': 9999}, 0)
    assert res.status_code == 404
    assert res.get_json() == {'error': 'Puzzle not found'}
    # A puzzle of another group is not visible through this group
    res = _solve(alice, other, 0)
    assert res.status_code == 404


def test_solve_requires_membership(flask_app, client, alice, outsider, puzzle):
    url = f"/api/groups/{alice.group['id']}/puzzles/{puzzle['id']}/solve"
    assert client.post(url, json={'incorrectGuesses': 0}).status_code == 401
    assert outsider.post(url, json={'incorrectGuesses': 0}).status_code == 403
    with flask_app.app_context():
        assert Attempt.query.count() == 0
    assert _scores(outsider) == {'Olga': 0}


def test_solve_rejects_bad_guess_count(alice, puzzle):
    url = f"/api/groups/{alice.group['id']}/puzzles/{puzzle['id']}/solve"
    for body in ({'incorrectGuesses': -1}, {'incorrectGuesses': 'two'}, {'incorrectGuesses': True}, {}):
        res = alice.post(url, json=body)
        assert res.status_code == 400
        assert 'incorrectGuesses' in res.get_json()['fields']
    assert _scores(alice) == {'Alice': 0}


def test_solve_accepts_snake_case_key(alice, puzzle):
    res = alice.post(f"/api/groups/{alice.group['id']}/puzzles/{puzzle['id']}/solve", json={'incorrect_guesses': 3})
    assert res.status_code == 200
    assert res.get_json()['score'] == 70


def test_unexpected_error_is_converted(alice, monkeypatch):
    import wordgroups.api.puzzles as puzzles_api

    def boom(group_id):
        raise RuntimeError('database exploded')

    monkeypatch.setattr(puzzles_api, 'list_puzzles', boom)
    res = alice.get(f"/api/groups/{alice.group['id']}/puzzles")
    assert res.status_code == 500
    assert res.get_json() == {'error': 'Internal server error'}


def test_logout(alice):
    assert alice.post('/api/logout').get_json() == {'success': True}
    assert alice.get('/api/session').status_code == 401


def test_session_engine_against_server(alice, bob, puzzle):
    """Play a whole puzzle through the session engine with the server as collaborator."""
    def send_completion(puzzle_id, incorrect_guesses):
        return _solve(bob, {'id': puzzle_id}, incorrect_guesses).get_json()['score']

    listing = bob.get(f"/api/groups/{bob.group['id']}/puzzles").get_json()
    session = SolveSession(on_complete=send_completion)
    session.select_puzzle(PuzzleView.from_payload(listing[0]))

    for guess in (['a1', 'b1', 'c1', 'd1'], ['a2', 'b2', 'c2', 'd2']):
        for text in guess:
            session.toggle_word(text)
        session.submit_selection()
        for text in guess:
            session.toggle_word(text)
    for letter in 'abcd':
        for i in range(1, 5):
            session.toggle_word(f'{letter}{i}')
        session.submit_selection()

    assert session.is_complete
    assert session.score == 80
    assert session.message == 'Congratulations! You solved all categories with 80 points.'
    assert _scores(alice)['Bob'] == 80
