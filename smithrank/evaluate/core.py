'''The complete tally pipeline.

Runs the election through all the stages in order::

    Election -> pairwise results -> victories -> Smith set -> ranking

Each stage returns a new value and leaves its input untouched, so evaluating
the same election twice gives identical results.
'''

from __future__ import annotations

import dataclasses
import logging
import warnings
from typing import Any, Dict, List, Optional

import smithrank.convert
from smithrank.convert import PairwiseResult, Victory
from smithrank.election import Election
from smithrank.evaluate.condorcet import SmithSet
from smithrank.evaluate.scoring import CandidateScore, CompositeRanker
from smithrank.persist import simple_serialization


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class ElectionResult:
    '''Everything derived from a single election snapshot.

    :param title: Title of the election.
    :param n_votes: Number of ballots cast.
    :param pairwise: Pairwise tally, in candidate pair order.
    :param victories: Strict pairwise defeats, sorted by winner name.
    :param smith_set: Sorted names of the Smith set members.
    :param ranking: Scores of the Smith set members, best first. Empty if no
        votes were cast.
    :param approvals: Approval counts by candidate name, highest first.
    :param borda: Average Borda points by candidate name, highest first.
    '''
    title: str
    n_votes: int
    pairwise: List[PairwiseResult]
    victories: List[Victory]
    smith_set: List[str]
    ranking: List[CandidateScore]
    approvals: Dict[str, float]
    borda: Dict[str, float]

    @property
    def winner(self) -> Optional[str]:
        '''Name of the top ranked candidate, None if nobody was ranked.'''
        return self.ranking[0].name if self.ranking else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            'title': self.title,
            'totalVotes': self.n_votes,
            'pairwise': [result.to_dict() for result in self.pairwise],
            'victories': [victory.to_dict() for victory in self.victories],
            'smithSet': list(self.smith_set),
            'ranking': [score.to_dict() for score in self.ranking],
            'winner': self.winner,
            'approvals': dict(self.approvals),
            'borda': dict(self.borda),
        }


@simple_serialization
class ElectionEvaluator:
    '''Evaluate an election: find its Smith set and rank it.

    :param ranker: Ranker to order the Smith set members. The default
        composite weighting is used if not given.
    :param validate: Whether to validate the election before the tally.
        Switch off only for elections known to be valid.
    '''
    def __init__(self,
                 ranker: Optional[CompositeRanker] = None,
                 validate: bool = True,
                 ):
        if ranker is None:
            ranker = CompositeRanker()
        self.ranker = ranker
        self.validate = validate

    def evaluate(self, election: Election) -> ElectionResult:
        '''Run the full tally on the election.

        :raises ValidationError: If validation is enabled and the election
            is malformed.
        '''
        if self.validate:
            election.validate()
        logger.info('evaluating %r: %d candidates, %d votes',
                    election.title, len(election.candidates),
                    len(election.votes))
        pairwise = smithrank.convert.pairwise(election)
        victories = smithrank.convert.victories(pairwise)
        smith = SmithSet().evaluate(victories, election.candidate_names)
        if election.votes:
            ranking = self.ranker.rank(smith, victories, election)
        else:
            warnings.warn(
                f'no votes cast in election {election.title!r}, not ranking'
            )
            ranking = []
        return ElectionResult(
            title=election.title,
            n_votes=len(election.votes),
            pairwise=pairwise,
            victories=victories,
            smith_set=smith,
            ranking=ranking,
            approvals=smithrank.convert.ElectionToApprovalCounts(
                as_percentage=True
            ).convert(election),
            borda=smithrank.convert.ElectionToBordaScores().convert(election),
        )


def evaluate(election: Election,
             ranker: Optional[CompositeRanker] = None,
             ) -> ElectionResult:
    '''Run the full tally with the given (or default) ranker.'''
    return ElectionEvaluator(ranker).evaluate(election)
