import sys
import os

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..'))
import smithrank.candidate
import smithrank.vote
from smithrank.candidate import Candidate
from smithrank.election import Election
from smithrank.vote import Ballot


RECORD = {
    'title': 'Team lunch',
    'candidates': [
        {'id': '1', 'name': 'Pizza'},
        {'id': '2', 'name': 'Sushi'},
        {'id': '3', 'name': 'Tacos'},
    ],
    'votes': [
        {
            'voterName': 'Alice',
            'ranking': ['1', '3'],
            'approved': ['1'],
            'timestamp': '2024-05-01T12:00:00Z',
        },
        {
            'voterName': 'Bob',
            'ranking': ['2', '1', '3'],
            'approved': ['1', '2'],
            'timestamp': '2024-05-01T12:05:00Z',
        },
    ],
    'createdAt': '2024-05-01T10:00:00Z',
}


def test_from_dict():
    election = Election.from_dict(RECORD)
    assert election.title == 'Team lunch'
    assert election.candidate_names == ['Pizza', 'Sushi', 'Tacos']
    assert election.names_by_id() == {'1': 'Pizza', '2': 'Sushi', '3': 'Tacos'}
    assert len(election.votes) == 2
    assert election.votes[1].ranking == ('2', '1', '3')
    assert election.created_at == '2024-05-01T10:00:00Z'


def test_dict_roundtrip():
    election = Election.from_dict(RECORD)
    assert Election.from_dict(election.to_dict()) == election


def test_frozen():
    election = Election.from_dict(RECORD)
    with pytest.raises(AttributeError):
        election.votes = ()
    assert isinstance(election.candidates, tuple)
    assert isinstance(election.votes, tuple)


@pytest.mark.parametrize(('candidates', 'error'), [
    ([Candidate('1', 'X'), Candidate('1', 'Y')],
     smithrank.vote.DuplicateCandidateError),
    ([Candidate('1', 'X'), Candidate('2', 'X')],
     smithrank.vote.DuplicateCandidateError),
    ([Candidate('', 'X')], smithrank.candidate.CandidateError),
    ([Candidate('1', '')], smithrank.candidate.CandidateError),
    ([Candidate(1, 'X')], smithrank.candidate.CandidateError),
])
def test_invalid_candidates(candidates, error):
    with pytest.raises(error):
        Election('bad', candidates).validate()


def test_from_dict_unknown_candidate():
    record = dict(RECORD)
    record['votes'] = RECORD['votes'] + [{'voterName': 'Eve', 'ranking': ['4']}]
    with pytest.raises(smithrank.vote.UnknownCandidateError):
        Election.from_dict(record)
    assert len(Election.from_dict(record, validate=False).votes) == 3


@pytest.mark.parametrize('record', [
    'not a record',
    {'title': 'x', 'candidates': [{'id': '1'}]},
    {'title': 'x', 'candidates': ['1']},
    {'title': 'x', 'candidates': None},
    {'title': 'x', 'candidates': [], 'votes': {'ranking': []}},
    {'title': 'x', 'candidates': [{'id': '1', 'name': 'X'}],
     'votes': [{'ranking': None}]},
    {'title': 'x', 'candidates': [{'id': '1', 'name': 'X'}],
     'votes': [{'ranking': [['1']]}]},
    {'title': 'x', 'candidates': [{'id': '1', 'name': 'X'}],
     'votes': [{'ranking': ['1'], 'approved': 5}]},
    {'title': 'x', 'candidates': [{'id': '1', 'name': 'X'}, {'id': '2', 'name': 'Y'}],
     'votes': [{'ranking': ['1'], 'approved': '12'}]},
])
def test_from_dict_malformed(record):
    with pytest.raises(smithrank.candidate.ValidationError):
        Election.from_dict(record)


def test_empty_election_valid():
    Election('empty').validate()
    Election('no votes', [Candidate('1', 'X')]).validate()
