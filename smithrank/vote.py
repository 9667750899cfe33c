'''Ballot specification and ballot validation.

Each ballot carries two kinds of preference at once:

-   a **ranking** - a sequence of candidate ids, most preferred first. It
    does not need to be complete; candidates missing from it are considered
    ranked below all candidates that are present.
-   an **approval** set - candidate ids the voter marked as acceptable,
    regardless of their position in the ranking.

The voter name and timestamp are informational and play no role in the tally.

The ballot validator checks that a single ballot only refers to known
candidates. If a ballot is invalid, it raises a subclass of
:class:`ValidationError`.
'''

from __future__ import annotations

import dataclasses
from typing import Any, Collection, Dict, FrozenSet, Optional, Tuple

from smithrank.candidate import ValidationError


class UnknownCandidateError(ValidationError):
    '''A ballot references a candidate id that is not standing.

    :param candidate_id: The unknown id.
    :param voter_name: Name of the voter who cast the ballot, if known.
    :param field: Part of the ballot the id was found in (``ranking`` or
        ``approved``).
    '''
    def __init__(self,
                 candidate_id: Any,
                 voter_name: Optional[str] = None,
                 field: str = 'ranking',
                 ):
        self.candidate_id = candidate_id
        self.voter_name = voter_name
        self.field = field
        message = f'unknown candidate id in {field}: {candidate_id!r}'
        if voter_name is not None:
            message += f' (ballot of {voter_name})'
        super().__init__(message)


class DuplicateCandidateError(ValidationError):
    '''A candidate id or name is given more than once where it must be unique.

    :param value: The duplicated id or name.
    :param where: Description of the place where the duplicate occurred.
    '''
    def __init__(self, value: Any, where: str = 'candidate list'):
        self.value = value
        self.where = where
        super().__init__(f'duplicate {value!r} in {where}')


@dataclasses.dataclass(frozen=True)
class Ballot:
    '''A single cast ballot.

    :param voter_name: Name of the voter (informational only).
    :param ranking: Candidate ids in the order of preference, most preferred
        first. Coerced to a tuple.
    :param approved: Candidate ids approved by the voter. Coerced to a frozen
        set.
    :param timestamp: Time the ballot was cast, in any format the caller
        uses (usually an ISO 8601 string).
    '''
    voter_name: str
    ranking: Tuple[str, ...] = ()
    approved: FrozenSet[str] = frozenset()
    timestamp: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'ranking', tuple(self.ranking))
        object.__setattr__(self, 'approved', frozenset(self.approved))

    def positions(self) -> Dict[str, int]:
        '''Map candidate ids to their ranking index (0 = most preferred).

        If an id occurs more than once, its first occurrence counts.
        '''
        positions = {}
        for i, cand_id in enumerate(self.ranking):
            positions.setdefault(cand_id, i)
        return positions

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> Ballot:
        '''Create a ballot from a JSON-like record.

        The record uses the keys ``voterName``, ``ranking``, ``approved`` and
        ``timestamp``; only ``ranking`` is mandatory. Both ``ranking`` and
        ``approved`` must be lists of candidate id strings; ``approved`` may
        also be null.

        :raises ValidationError: If the record is malformed.
        '''
        try:
            ranking = record['ranking']
        except (KeyError, TypeError) as e:
            raise ValidationError(f'ballot record without ranking: {record!r}') from e
        approved = record.get('approved')
        return cls(
            voter_name=record.get('voterName', ''),
            ranking=_id_list(ranking, 'ranking'),
            approved=(
                () if approved is None else _id_list(approved, 'approved')
            ),
            timestamp=record.get('timestamp'),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            'voterName': self.voter_name,
            'ranking': list(self.ranking),
            'approved': sorted(self.approved),
            'timestamp': self.timestamp,
        }


class BallotValidator:
    '''Validate that a ballot only refers to the candidates standing.

    :param candidate_ids: Ids of all candidates standing in the election.
    :param allow_repeats: Whether a candidate id may appear more than once in
        the ranking. Repeated ids are harmless for the tally (the first
        occurrence is used), so they are allowed by default.
    '''
    def __init__(self,
                 candidate_ids: Collection[str],
                 allow_repeats: bool = True,
                 ):
        self.candidate_ids = frozenset(candidate_ids)
        self.allow_repeats = allow_repeats

    def validate(self, ballot: Ballot) -> None:
        '''Check the ballot against the candidate list.

        :raises UnknownCandidateError: If the ballot ranks or approves an id
            that is not standing.
        :raises DuplicateCandidateError: If the ballot ranks an id more than
            once and repeats are not allowed.
        '''
        seen = set()
        for cand_id in ballot.ranking:
            if cand_id not in self.candidate_ids:
                raise UnknownCandidateError(cand_id, ballot.voter_name)
            if cand_id in seen and not self.allow_repeats:
                raise DuplicateCandidateError(
                    cand_id, f'ranking of {ballot.voter_name}'
                )
            seen.add(cand_id)
        for cand_id in sorted(ballot.approved, key=str):
            if cand_id not in self.candidate_ids:
                raise UnknownCandidateError(
                    cand_id, ballot.voter_name, field='approved'
                )


def _id_list(value: Any, field: str) -> list:
    if not isinstance(value, list):
        raise ValidationError(f'ballot {field} must be a list: {value!r}')
    for item in value:
        if not isinstance(item, str):
            raise ValidationError(
                f'ballot {field} must contain id strings: {item!r}'
            )
    return value
