'''The election record: candidates and the ballots cast for them.

An :class:`Election` is an immutable snapshot. All the tally functions take it
as read-only input and recompute everything from it on each call, so a
snapshot can be evaluated by several callers at once; the caller must not
change the underlying data while a computation is running (construct a new
snapshot instead).
'''

from __future__ import annotations

import dataclasses
from typing import Any, Dict, List, Optional, Tuple

from smithrank.candidate import Candidate, ValidationError
from smithrank.vote import Ballot, BallotValidator, DuplicateCandidateError


@dataclasses.dataclass(frozen=True)
class Election:
    '''An election with its candidates and cast ballots.

    :param title: Title of the election.
    :param candidates: Candidates standing. Their order is the display order
        and the order in which candidate pairs are enumerated; it carries no
        preference.
    :param votes: Ballots cast, in the order they were cast.
    :param created_at: Creation time of the election, in any format the
        caller uses.
    '''
    title: str
    candidates: Tuple[Candidate, ...] = ()
    votes: Tuple[Ballot, ...] = ()
    created_at: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'candidates', tuple(self.candidates))
        object.__setattr__(self, 'votes', tuple(self.votes))

    @property
    def candidate_names(self) -> List[str]:
        return [cand.name for cand in self.candidates]

    def names_by_id(self) -> Dict[str, str]:
        return {cand.id: cand.name for cand in self.candidates}

    def validate(self, allow_repeats: bool = True) -> None:
        '''Check that the election is well-formed and can be tallied.

        :param allow_repeats: Whether to tolerate a candidate id ranked twice
            on a single ballot.
        :raises CandidateError: If a candidate has an empty id or name.
        :raises DuplicateCandidateError: If two candidates share an id or a
            name.
        :raises UnknownCandidateError: If a ballot refers to a candidate id
            that is not standing.
        '''
        ids = set()
        names = set()
        for cand in self.candidates:
            cand.check()
            if cand.id in ids:
                raise DuplicateCandidateError(cand.id, 'candidate ids')
            if cand.name in names:
                raise DuplicateCandidateError(cand.name, 'candidate names')
            ids.add(cand.id)
            names.add(cand.name)
        validator = BallotValidator(ids, allow_repeats=allow_repeats)
        for ballot in self.votes:
            validator.validate(ballot)

    @classmethod
    def from_dict(cls, record: Dict[str, Any], validate: bool = True
                  ) -> Election:
        '''Create an election from a JSON-like record.

        The record uses the keys ``title``, ``candidates`` (a list of records
        with ``id`` and ``name``), ``votes`` (a list of ballot records, see
        :meth:`Ballot.from_dict`) and ``createdAt``.

        :param record: The election record.
        :param validate: Whether to validate the election after loading.
        :raises ValidationError: If the record is malformed.
        '''
        if not isinstance(record, dict):
            raise ValidationError(f'election record must be a dict: {record!r}')
        candidates = record.get('candidates', [])
        votes = record.get('votes', [])
        for key, value in (('candidates', candidates), ('votes', votes)):
            if not isinstance(value, list):
                raise ValidationError(
                    f'election {key} must be a list: {value!r}'
                )
        election = cls(
            title=record.get('title', ''),
            candidates=[Candidate.from_dict(cand) for cand in candidates],
            votes=[Ballot.from_dict(vote) for vote in votes],
            created_at=record.get('createdAt'),
        )
        if validate:
            election.validate()
        return election

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'candidates': [cand.to_dict() for cand in self.candidates],
            'votes': [vote.to_dict() for vote in self.votes],
            'createdAt': self.created_at,
        }
