"""Functional tests for POST/OPTIONS /api/simulate-submit-answer.

The mutator is replaced by a recorder so these tests pin the request
contract only: validation, defaulting, argument order, envelope and headers.
"""

from __future__ import annotations

import pytest

from triviyay.errors import QuestionNotFoundError
from triviyay.routes.dependencies import get_answer_mutator

URL = "/api/simulate-submit-answer"
EXPECTED_CORS = {
    "access-control-allow-origin": "*",
    "access-control-allow-methods": "POST, OPTIONS",
    "access-control-allow-headers": "Content-Type",
}


def assert_cors(resp) -> None:
    for name, value in EXPECTED_CORS.items():
        assert resp.headers.get(name) == value, name


def test_minimal_submission_defaults_optional_fields(client, mutator):
    resp = client.post(URL, json={"playerId": "p1", "questionId": "q1"})

    assert resp.status_code == 200
    assert resp.json() == {"success": True}
    assert_cors(resp)
    assert mutator.calls == [("p1", "q1", None, None, None, None, None)]


def test_full_submission_passes_values_in_fixed_order(client, mutator):
    body = {
        "playerId": "p1",
        "questionId": "q1",
        "answerIndex": 2,
        "textAnswer": "Paris",
        "wager": 5,
        "wagerSlot": 1,
        "playerRound": 3,
    }
    resp = client.post(URL, json=body)

    assert resp.status_code == 200
    assert mutator.calls == [("p1", "q1", 2, "Paris", 5, 1, 3)]


def test_zero_answer_index_is_not_collapsed_to_null(client, mutator):
    resp = client.post(URL, json={"playerId": "p1", "questionId": "q1", "answerIndex": 0, "wagerSlot": 0})

    assert resp.status_code == 200
    assert mutator.calls == [("p1", "q1", 0, None, None, 0, None)]


def test_values_are_not_type_checked_at_this_layer(client, mutator):
    body = {"playerId": "p1", "questionId": "q1", "answerIndex": "two", "wager": "lots"}
    resp = client.post(URL, json=body)

    assert resp.status_code == 200
    assert mutator.calls == [("p1", "q1", "two", None, "lots", None, None)]


def test_unknown_fields_are_ignored(client, mutator):
    resp = client.post(URL, json={"playerId": "p1", "questionId": "q1", "score": 1000})

    assert resp.status_code == 200
    assert mutator.calls == [("p1", "q1", None, None, None, None, None)]


def test_snake_case_identifiers_count_as_missing(client, mutator):
    resp = client.post(URL, json={"player_id": "p1", "question_id": "q1"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing playerId or questionId"}
    assert_cors(resp)
    assert mutator.calls == []


def test_snake_case_optional_fields_default_to_none(client, mutator):
    body = {"playerId": "p1", "questionId": "q1", "answer_index": 2, "wager_slot": 1}
    resp = client.post(URL, json=body)

    assert resp.status_code == 200
    assert mutator.calls == [("p1", "q1", None, None, None, None, None)]


@pytest.mark.parametrize(
    "body",
    [
        {},
        {"playerId": "p1"},
        {"questionId": "q1"},
        {"playerId": "", "questionId": "q1"},
        {"playerId": "p1", "questionId": ""},
        {"playerId": None, "questionId": "q1"},
        {"playerId": "p1", "questionId": None},
        {"playerId": 0, "questionId": "q1"},
        {"playerId": "p1", "questionId": False},
    ],
)
def test_missing_identifiers_are_rejected_before_delegation(client, mutator, body):
    resp = client.post(URL, json=body)

    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing playerId or questionId"}
    assert_cors(resp)
    assert mutator.calls == []


@pytest.mark.parametrize("payload", [b"[]", b"\"p1\"", b"42"])
def test_non_object_json_counts_as_missing_identifiers(client, mutator, payload):
    resp = client.post(URL, content=payload, headers={"Content-Type": "application/json"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing playerId or questionId"}
    assert mutator.calls == []


def test_malformed_json_is_a_400_with_parser_message(client, mutator):
    resp = client.post(URL, content=b"{not json", headers={"Content-Type": "application/json"})

    assert resp.status_code == 400
    error = resp.json()["error"]
    assert isinstance(error, str) and error
    assert error != "Missing playerId or questionId"
    assert_cors(resp)
    assert mutator.calls == []


def test_empty_body_is_malformed(client, mutator):
    resp = client.post(URL)

    assert resp.status_code == 400
    assert "error" in resp.json()
    assert mutator.calls == []


def test_mutator_message_is_returned_as_error(client, mutator):
    mutator.error = QuestionNotFoundError()

    resp = client.post(URL, json={"playerId": "p1", "questionId": "q1"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Question not found"}
    assert_cors(resp)
    assert len(mutator.calls) == 1


def test_unexpected_mutator_error_still_collapses_to_400(client, mutator):
    mutator.error = RuntimeError("database is locked")

    resp = client.post(URL, json={"playerId": "p1", "questionId": "q1"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "database is locked"}


@pytest.mark.parametrize("error", [Exception(), Exception("")])
def test_mutator_error_without_message_uses_fallback(client, mutator, error):
    mutator.error = error

    resp = client.post(URL, json={"playerId": "p1", "questionId": "q1"})

    assert resp.status_code == 400
    assert resp.json() == {"error": "Failed to submit answer"}


def test_identical_submissions_invoke_mutator_each_time(client, mutator):
    body = {"playerId": "p1", "questionId": "q1", "answerIndex": 1}
    client.post(URL, json=body)
    client.post(URL, json=body)

    assert mutator.calls == [("p1", "q1", 1, None, None, None, None)] * 2


def test_blocking_mutator_runs_and_receives_arguments(app, client):
    seen: list[tuple] = []

    def blocking_mutator(*args):
        seen.append(args)

    app.dependency_overrides[get_answer_mutator] = lambda: blocking_mutator

    resp = client.post(URL, json={"playerId": "p1", "questionId": "q1", "wager": 3})

    assert resp.status_code == 200
    assert seen == [("p1", "q1", None, None, 3, None, None)]


@pytest.mark.parametrize("content", [None, b"", b"{not json", b'{"playerId": "p1"}'])
def test_preflight_returns_empty_object_with_cors(client, mutator, content):
    resp = client.request("OPTIONS", URL, content=content)

    assert resp.status_code == 200
    assert resp.json() == {}
    assert_cors(resp)
    assert mutator.calls == []
