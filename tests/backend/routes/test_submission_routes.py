import pytest


def _register(client, email: str) -> dict:
    response = client.post('/auth/register', json={'email': email, 'password': 'secret1', 'name': 'Student'})
    assert response.status_code == 201
    return response.json()['data']


def _auth(user: dict) -> dict:
    return {'Authorization': f"Bearer {user['token']}"}


def _submit_module(client, user: dict, module_id: str = 'm1', course_id: str = 'c1'):
    return client.post(
        f'/submissions/{module_id}/submit',
        json={'course_id': course_id, 'answers': [{'question_id': 'q1', 'answer': 'B'}]},
        headers=_auth(user),
    )


@pytest.fixture
def alice(client) -> dict:
    return _register(client, 'alice@x.com')


@pytest.fixture
def bob(client) -> dict:
    return _register(client, 'bob@x.com')


def test_submit_module_for_authenticated_student(client, alice: dict) -> None:
    response = _submit_module(client, alice)

    assert response.status_code == 201
    body = response.json()
    assert body['message'] == 'Module submitted successfully'
    assert body['data']['student_id'] == alice['id']
    assert body['data']['module_id'] == 'm1'
    assert body['data']['course_id'] == 'c1'
    assert body['data']['submission_type'] == 'module'
    assert body['data']['answers'] == [{'question_id': 'q1', 'answer': 'B'}]


def test_submit_module_requires_answers(client, alice: dict) -> None:
    response = client.post(
        '/submissions/m1/submit',
        json={'course_id': 'c1', 'answers': []},
        headers=_auth(alice),
    )

    assert response.status_code == 400
    assert response.json()['message'] == 'Answers are required'


def test_list_student_submissions_only_returns_own(client, alice: dict, bob: dict) -> None:
    own = _submit_module(client, alice).json()['data']
    _submit_module(client, bob)

    response = client.get('/submissions/student', headers=_auth(alice))

    assert response.status_code == 200
    assert [submission['id'] for submission in response.json()['data']] == [own['id']]


def test_list_course_submissions_filters_course_and_student(client, alice: dict, bob: dict) -> None:
    in_course = _submit_module(client, alice, course_id='c1').json()['data']
    _submit_module(client, alice, module_id='m2', course_id='c2')
    _submit_module(client, bob, course_id='c1')

    response = client.get('/submissions/course/c1', headers=_auth(alice))

    assert response.status_code == 200
    assert [submission['id'] for submission in response.json()['data']] == [in_course['id']]


def test_get_submission_by_id_for_owner(client, alice: dict) -> None:
    created = _submit_module(client, alice).json()['data']

    response = client.get(f"/submissions/{created['id']}", headers=_auth(alice))

    assert response.status_code == 200
    assert response.json()['data'] == created


def test_get_submission_by_id_forbidden_for_other_student(client, alice: dict, bob: dict) -> None:
    created = _submit_module(client, alice).json()['data']

    response = client.get(f"/submissions/{created['id']}", headers=_auth(bob))

    assert response.status_code == 403
    assert response.json()['data'] is None
    assert response.json()['message'] == 'Not authorized to view this submission'


def test_get_submission_by_id_not_found(client, alice: dict) -> None:
    response = client.get('/submissions/999', headers=_auth(alice))

    assert response.status_code == 404
    assert response.json()['message'] == 'Submission not found'


def test_single_question_submission_needs_no_token(client, bob: dict) -> None:
    response = client.post(
        f"/submissions/{bob['id']}/singlequestion",
        json={'question_id': 'q5', 'answer': 'C', 'course_id': 'c1'},
    )

    assert response.status_code == 201
    body = response.json()
    assert body['message'] == 'Question submitted successfully'
    assert body['data']['student_id'] == bob['id']
    assert body['data']['submission_type'] == 'question'
    assert body['data']['answers'] == [{'question_id': 'q5', 'answer': 'C'}]


def test_single_question_submission_accepts_any_student_id(client) -> None:
    response = client.post('/submissions/12345/singlequestion', json={'question_id': 'q5', 'answer': 'C'})

    assert response.status_code == 201
    assert response.json()['data']['student_id'] == 12345
    assert response.json()['success'] is True


@pytest.mark.parametrize(
    ('method', 'path', 'json_body'),
    [
        ('post', '/submissions/m1/submit', {'course_id': 'c1', 'answers': [{'question_id': 'q1', 'answer': 'B'}]}),
        ('get', '/submissions/student', None),
        ('get', '/submissions/1', None),
        ('get', '/submissions/course/c1', None),
    ],
)
@pytest.mark.parametrize(
    'headers',
    [
        {},
        {'Authorization': 'Bearer not-a-token'},
        {'Authorization': 'Basic dXNlcjpwYXNz'},
    ],
)
def test_protected_endpoints_reject_missing_or_invalid_token(client, method, path, json_body, headers) -> None:
    response = client.request(method.upper(), path, json=json_body, headers=headers)

    assert response.status_code == 401
    assert response.json()['success'] is False
