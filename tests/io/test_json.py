import sys
import os
import io
import json

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import smithrank.evaluate
import smithrank.io.json
import smithrank.vote


RECORD_TEXT = '''{
    "title": "Board election",
    "candidates": [
        {"id": "a", "name": "Alice"},
        {"id": "b", "name": "Bob"},
        {"id": "c", "name": "Carol"}
    ],
    "votes": [
        {"voterName": "v1", "ranking": ["a", "b", "c"], "approved": ["a"],
         "timestamp": "2024-05-01T12:00:00Z"},
        {"voterName": "v2", "ranking": ["a", "b", "c"], "approved": ["a"],
         "timestamp": "2024-05-01T12:01:00Z"},
        {"voterName": "v3", "ranking": ["a", "b", "c"], "approved": ["a", "b"],
         "timestamp": "2024-05-01T12:02:00Z"},
        {"voterName": "v4", "ranking": ["b", "c", "a"], "approved": ["b", "c"],
         "timestamp": "2024-05-01T12:03:00Z"}
    ],
    "createdAt": "2024-05-01T10:00:00Z"
}'''


def test_loads():
    election = smithrank.io.json.loads(RECORD_TEXT)
    assert election.title == 'Board election'
    assert election.candidate_names == ['Alice', 'Bob', 'Carol']
    assert len(election.votes) == 4
    assert election.votes[2].approved == frozenset(['a', 'b'])


def test_load_file():
    election = smithrank.io.json.load(io.StringIO(RECORD_TEXT))
    assert election == smithrank.io.json.loads(RECORD_TEXT)


def test_election_roundtrip():
    election = smithrank.io.json.loads(RECORD_TEXT)
    assert smithrank.io.json.loads(smithrank.io.json.dumps(election)) == election


def test_dump_result():
    result = smithrank.evaluate.evaluate(smithrank.io.json.loads(RECORD_TEXT))
    buffer = io.StringIO()
    smithrank.io.json.dump(buffer, result)
    data = json.loads(buffer.getvalue())
    assert data == json.loads(smithrank.io.json.dumps(result))
    assert data['winner'] == 'Alice'
    assert data['smithSet'] == ['Alice']
    assert data['victories'] == [
        {'winner': 'Alice', 'loser': 'Bob', 'margin': 2},
        {'winner': 'Alice', 'loser': 'Carol', 'margin': 2},
        {'winner': 'Bob', 'loser': 'Carol', 'margin': 4},
    ]
    assert data['approvals'] == {'Alice': 75.0, 'Bob': 50.0, 'Carol': 25.0}


@pytest.mark.parametrize('text', [
    '',
    '{"title": ',
    '["not", "an", "object"]',
])
def test_invalid_json(text):
    with pytest.raises(smithrank.io.json.JSONParseError):
        smithrank.io.json.loads(text)


def test_unknown_candidate():
    record = json.loads(RECORD_TEXT)
    record['votes'][0]['approved'].append('z')
    with pytest.raises(smithrank.vote.UnknownCandidateError):
        smithrank.io.json.loads(json.dumps(record))
    election = smithrank.io.json.loads(json.dumps(record), validate=False)
    assert 'z' in election.votes[0].approved


def test_dump_unsupported():
    with pytest.raises(TypeError):
        smithrank.io.json.dumps({'title': 'x'})
