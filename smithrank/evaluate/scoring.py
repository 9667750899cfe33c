'''Ranking of the Smith set by a weighted composite score.

Once the Smith set is known, its members are ordered by a composite of three
measures computed for each of them:

-   the **net victories** - number of pairwise victories minus number of
    pairwise defeats,
-   the **average margin** - mean of the victory margins over all victories
    and defeats of the candidate, defeats counting negative,
-   the **approval score** - number of ballots approving the candidate.

The composite is their weighted sum. The weights are a matter of policy, not
of the algorithm; the defaults are given by the module constants and other
common weightings are available in :data:`WEIGHT_PRESETS`.
'''

from __future__ import annotations

import dataclasses
import logging
from typing import Collection, Dict, Iterable, List, Optional, Union

import smithrank.util
from smithrank.convert import ElectionToApprovalCounts, Victory
from smithrank.election import Election
from smithrank.persist import simple_serialization


logger = logging.getLogger(__name__)

VICTORY_WEIGHT = 0.4
MARGIN_WEIGHT = 0.3
APPROVAL_WEIGHT = 0.3
TIE_TOLERANCE = 1e-9
'''Composite scores differing by at most this much are considered tied.'''


@simple_serialization
@dataclasses.dataclass(frozen=True)
class ScoreWeights:
    '''Weights of the components of the composite score.

    :param victory_weight: Weight of the net victories.
    :param margin_weight: Weight of the average margin.
    :param approval_weight: Weight of the approval score.
    '''
    victory_weight: float = VICTORY_WEIGHT
    margin_weight: float = MARGIN_WEIGHT
    approval_weight: float = APPROVAL_WEIGHT

    def combine(self,
                net_victories: float,
                avg_margin: float,
                approval_score: float,
                ) -> float:
        return (
            self.victory_weight * net_victories
            + self.margin_weight * avg_margin
            + self.approval_weight * approval_score
        )


WEIGHT_PRESETS = {
    'default': ScoreWeights(),
    'condorcet': ScoreWeights(1, 0, 0),
    'margins': ScoreWeights(0, 1, 0),
    'approval': ScoreWeights(0, 0, 1),
}


@dataclasses.dataclass(frozen=True)
class CandidateScore:
    '''Score of a Smith set member and its resulting rank.

    :param name: Name of the candidate.
    :param wins: Number of victories of the candidate.
    :param losses: Number of defeats of the candidate.
    :param net_victories: ``wins - losses``.
    :param avg_margin: Mean signed margin over all victories and defeats of
        the candidate; zero if there are none.
    :param approval_score: Number of ballots approving the candidate.
    :param composite_score: Weighted sum of the above.
    :param rank: One-based rank; tied candidates share the rank.
    :param is_tied: Whether another candidate shares the rank.
    '''
    name: str
    wins: int
    losses: int
    net_victories: int
    avg_margin: float
    approval_score: int
    composite_score: float
    rank: int = 0
    is_tied: bool = False

    def to_dict(self) -> Dict[str, object]:
        return {
            'name': self.name,
            'wins': self.wins,
            'losses': self.losses,
            'netVictories': self.net_victories,
            'avgMargin': self.avg_margin,
            'approvalScore': self.approval_score,
            'compositeScore': self.composite_score,
            'rank': self.rank,
            'isTied': self.is_tied,
        }


@simple_serialization
class CompositeRanker:
    '''Rank the Smith set members by their composite scores.

    :param weights: Weights of the score components, or the name of one of
        :data:`WEIGHT_PRESETS`. The default weighting is used if not given.
    :param tolerance: Largest difference of composite scores that is still
        considered a tie.
    '''
    def __init__(self,
                 weights: Union[str, ScoreWeights, None] = None,
                 tolerance: float = TIE_TOLERANCE,
                 ):
        if weights is None:
            weights = ScoreWeights()
        elif isinstance(weights, str):
            try:
                weights = WEIGHT_PRESETS[weights]
            except KeyError as e:
                raise ValueError(f'unknown weight preset: {weights}, '
                                 'available: ' + ', '.join(WEIGHT_PRESETS)) from e
        self.weights = weights
        self.tolerance = tolerance

    def rank(self,
             smith: Collection[str],
             victories: Iterable[Victory],
             election: Election,
             ) -> List[CandidateScore]:
        '''Score and order the Smith set members.

        :param smith: Names of the Smith set members; see
            :func:`smithrank.evaluate.condorcet.smith_set`.
        :param victories: All victories of the election.
        :param election: The election, used for the approval counts.
        :returns: Scores of the Smith set members in descending order of the
            composite score; the first one is the winner. Candidates with
            tied scores share a rank and are ordered by name.
        :raises ValueError: If no ballots were cast in the election; callers
            must handle that case before ranking.
        '''
        if not election.votes:
            raise ValueError(f'no votes cast in election {election.title!r}')
        if not smith:
            return []
        victories = list(victories)
        approvals = ElectionToApprovalCounts().convert(election)
        scores = [
            self.score(name, victories, approvals)
            for name in sorted(smith)
        ]
        scores.sort(key=lambda score: score.composite_score, reverse=True)
        ranked = []
        for group in self._tied_groups(scores):
            is_tied = len(group) > 1
            rank = len(ranked) + 1
            for score in sorted(group, key=lambda score: score.name):
                ranked.append(dataclasses.replace(
                    score, rank=rank, is_tied=is_tied
                ))
        if ranked[0].is_tied:
            logger.info('tied for first place: %s',
                        [score.name for score in ranked if score.rank == 1])
        else:
            logger.info('winner: %s (composite score %g)',
                        ranked[0].name, ranked[0].composite_score)
        return ranked

    def score(self,
              name: str,
              victories: Iterable[Victory],
              approvals: Dict[str, int],
              ) -> CandidateScore:
        '''Compute the score of a single candidate, leaving it unranked.'''
        wins = 0
        losses = 0
        margins = []
        for victory in victories:
            if victory.winner == name:
                wins += 1
                margins.append(victory.margin)
            elif victory.loser == name:
                losses += 1
                margins.append(-victory.margin)
        avg_margin = sum(margins) / len(margins) if margins else 0.0
        approval_score = approvals.get(name, 0)
        composite = self.weights.combine(wins - losses, avg_margin, approval_score)
        logger.debug('%s: %d wins, %d losses, average margin %g, '
                     '%d approvals, composite %g',
                     name, wins, losses, avg_margin, approval_score, composite)
        return CandidateScore(
            name=name,
            wins=wins,
            losses=losses,
            net_victories=wins - losses,
            avg_margin=avg_margin,
            approval_score=approval_score,
            composite_score=composite,
        )

    def _tied_groups(self,
                     scores: List[CandidateScore],
                     ) -> Iterable[List[CandidateScore]]:
        group = []
        for score in scores:
            if group and not smithrank.util.is_close(
                group[0].composite_score, score.composite_score, self.tolerance
            ):
                yield group
                group = []
            group.append(score)
        if group:
            yield group


def rank(smith: Collection[str],
         victories: Iterable[Victory],
         election: Election,
         weights: Optional[ScoreWeights] = None,
         ) -> List[CandidateScore]:
    '''Rank the Smith set members; see :meth:`CompositeRanker.rank`.'''
    return CompositeRanker(weights).rank(smith, victories, election)
