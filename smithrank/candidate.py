'''Candidate specification.

A candidate is identified by a stable id (referenced from the ballots) and
carries a display name. Results of the tally (pairwise counts, victories, the
Smith set and the ranking) refer to candidates by their display names, so both
must be unique within an election; this is checked by
:meth:`smithrank.election.Election.validate`.
'''

from __future__ import annotations

import dataclasses
from typing import Any, Dict


class ValidationError(Exception):
    '''Election input is malformed and cannot be tallied.

    Raised at the boundary, before any counting takes place.
    '''
    pass


class CandidateError(ValidationError):
    '''A candidate definition is invalid.

    :param candidate: Candidate that was found to be invalid.
    :param reason: What is wrong with the candidate.
    '''
    def __init__(self, candidate: Any, reason: str = None):
        self.candidate = candidate
        self.reason = reason
        message = f'invalid candidate: {candidate!r}'
        if reason:
            message += f', {reason}'
        super().__init__(message)


@dataclasses.dataclass(frozen=True)
class Candidate:
    '''A candidate standing in the election.

    :param id: Stable identifier of the candidate, as referenced by ballots.
    :param name: Display name of the candidate.
    '''
    id: str
    name: str

    def __str__(self) -> str:
        return self.name

    def check(self) -> None:
        '''Check that the id and name are non-empty strings.

        :raises CandidateError: If they are not.
        '''
        if not isinstance(self.id, str) or not self.id:
            raise CandidateError(self, 'id must be a non-empty string')
        if not isinstance(self.name, str) or not self.name:
            raise CandidateError(self, 'name must be a non-empty string')

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> Candidate:
        try:
            return cls(id=record['id'], name=record['name'])
        except (KeyError, TypeError) as e:
            raise CandidateError(record, 'id and name required') from e

    def to_dict(self) -> Dict[str, str]:
        return {'id': self.id, 'name': self.name}
