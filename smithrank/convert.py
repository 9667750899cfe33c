'''Converters from the election record to tallies used by the evaluators.

These objects have a `convert()` method that derives a tally from its input
without modifying it. The two main steps of the Condorcet tally are:

1.  :class:`ElectionToPairwise` - counts, for every pair of candidates, the
    ballots preferring each of them (the pairwise tally).
2.  :class:`PairwiseToVictories` - turns the pairwise tally into directed
    defeats with their margins (the victory graph).

Module-level functions :func:`pairwise` and :func:`victories` wrap the default
setups of these converters. The remaining converters compute the approval and
Borda tallies shown alongside the Condorcet result.
'''

import collections
import dataclasses
import itertools
import logging
from fractions import Fraction
from typing import Dict, Iterable, List, Optional

import smithrank.util
from smithrank.election import Election
from smithrank.persist import simple_serialization


logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class PairwiseResult:
    '''Numbers of ballots preferring either candidate of a pair.

    :param candidate1: Name of the candidate listed first in the election.
    :param candidate2: Name of the candidate listed second in the election.
    :param candidate1_votes: Number of ballots preferring the first candidate.
    :param candidate2_votes: Number of ballots preferring the second
        candidate.
    '''
    candidate1: str
    candidate2: str
    candidate1_votes: int = 0
    candidate2_votes: int = 0

    @property
    def total(self) -> int:
        '''Number of ballots expressing a preference between the two.'''
        return self.candidate1_votes + self.candidate2_votes

    @property
    def winner(self) -> Optional[str]:
        '''Name of the preferred candidate, or None if the pair is tied.'''
        if self.candidate1_votes > self.candidate2_votes:
            return self.candidate1
        elif self.candidate2_votes > self.candidate1_votes:
            return self.candidate2
        else:
            return None

    def to_dict(self) -> Dict[str, object]:
        return {
            'candidate1': self.candidate1,
            'candidate2': self.candidate2,
            'candidate1Votes': self.candidate1_votes,
            'candidate2Votes': self.candidate2_votes,
        }


@dataclasses.dataclass(frozen=True, order=True)
class Victory:
    '''A strict pairwise defeat of one candidate by another.

    :param winner: Name of the candidate preferred by more ballots.
    :param loser: Name of the defeated candidate.
    :param margin: Difference of the two ballot counts; always at least 1.
    '''
    winner: str
    loser: str
    margin: int

    def to_dict(self) -> Dict[str, object]:
        return {
            'winner': self.winner,
            'loser': self.loser,
            'margin': self.margin,
        }


class Converter:
    def convert(self, *args, **kwargs):
        raise NotImplementedError


@simple_serialization
class ElectionToPairwise(Converter):
    '''Count ballots preferring each candidate of every candidate pair.

    Pairs are enumerated in the candidate list order, each unordered pair
    exactly once (the first candidate of the pair precedes the second in the
    list). For each ballot and pair:

    -   if neither candidate is ranked, the ballot abstains from the pair,
    -   if only one of them is ranked, the ranked one is preferred (unranked
        candidates count as ranked below all ranked ones),
    -   otherwise the candidate ranked earlier is preferred.

    If a ballot ranks a candidate more than once, the first occurrence
    counts.
    '''
    def convert(self, election: Election) -> List[PairwiseResult]:
        '''Compute the pairwise tally of the election.'''
        all_positions = [ballot.positions() for ballot in election.votes]
        results = []
        for cand1, cand2 in itertools.combinations(election.candidates, 2):
            votes1 = 0
            votes2 = 0
            for positions in all_positions:
                pos1 = positions.get(cand1.id)
                pos2 = positions.get(cand2.id)
                if pos1 is None and pos2 is None:
                    continue
                elif pos2 is None or (pos1 is not None and pos1 < pos2):
                    votes1 += 1
                else:
                    votes2 += 1
            results.append(PairwiseResult(cand1.name, cand2.name, votes1, votes2))
        return results


@simple_serialization
class PairwiseToVictories(Converter):
    '''Turn pairwise results into strict defeats with their margins.

    A pair with unequal counts produces a single victory of the candidate
    with more ballots, the margin being the difference. A tied pair produces
    no victory at all; ties are thus not treated as mutual defeats.
    Repeated results for the same pair and results pairing a candidate with
    itself are disregarded.

    The victories are sorted by the winner name (and loser name within a
    winner).
    '''
    def convert(self, results: Iterable[PairwiseResult]) -> List[Victory]:
        '''Compute the victories from the pairwise results.'''
        victories = []
        seen_pairs = set()
        for result in results:
            pair = frozenset((result.candidate1, result.candidate2))
            if len(pair) < 2 or pair in seen_pairs:
                continue
            seen_pairs.add(pair)
            margin = result.candidate1_votes - result.candidate2_votes
            if margin > 0:
                victory = Victory(result.candidate1, result.candidate2, margin)
            elif margin < 0:
                victory = Victory(result.candidate2, result.candidate1, -margin)
            else:
                logger.debug('%s and %s tied at %d, no victory',
                             result.candidate1, result.candidate2,
                             result.candidate1_votes)
                continue
            logger.debug('%s beats %s by %d',
                         victory.winner, victory.loser, victory.margin)
            victories.append(victory)
        victories.sort()
        return victories


@simple_serialization
class ElectionToApprovalCounts(Converter):
    '''Count the ballots approving each candidate.

    :param as_percentage: Whether to express the counts as percentages of
        the number of ballots cast, rounded to one decimal place.
    '''
    def __init__(self, as_percentage: bool = False):
        self.as_percentage = as_percentage

    def convert(self, election: Election) -> Dict[str, float]:
        '''Compute the approval tally, sorted from the most approved.

        Candidates are keyed by their names. With no ballots cast, all
        counts (and percentages) are zero.
        '''
        counts = collections.OrderedDict(
            (cand.name, 0) for cand in election.candidates
        )
        for cand in election.candidates:
            for ballot in election.votes:
                if cand.id in ballot.approved:
                    counts[cand.name] += 1
        if self.as_percentage and election.votes:
            n_votes = len(election.votes)
            counts = smithrank.util.round_values(
                {name: count * 100 / n_votes for name, count in counts.items()},
                1
            )
        return smithrank.util.descending_dict(counts)


@simple_serialization
class ElectionToBordaScores(Converter):
    '''Compute average Borda points of each candidate.

    A candidate at ranking index ``i`` (zero-based) of a ballot receives
    ``n - i - 1`` points, ``n`` being the number of candidates standing;
    a candidate not ranked receives no points. The points are averaged over
    all ballots cast.

    :param digits: Number of decimal places to round the averages to. None
        leaves them as exact fractions.
    '''
    def __init__(self, digits: Optional[int] = 1):
        self.digits = digits

    def convert(self, election: Election) -> Dict[str, float]:
        '''Compute the Borda averages, sorted from the highest.'''
        n_cands = len(election.candidates)
        n_votes = len(election.votes)
        totals = collections.OrderedDict(
            (cand.name, 0) for cand in election.candidates
        )
        for ballot in election.votes:
            positions = ballot.positions()
            for cand in election.candidates:
                if cand.id in positions:
                    totals[cand.name] += n_cands - positions[cand.id] - 1
        averages = {
            name: (Fraction(total, n_votes) if n_votes else Fraction(0))
            for name, total in totals.items()
        }
        if self.digits is not None:
            averages = smithrank.util.round_values(
                {name: float(avg) for name, avg in averages.items()},
                self.digits
            )
        return smithrank.util.descending_dict(averages)


def pairwise(election: Election) -> List[PairwiseResult]:
    '''Compute the pairwise tally; see :class:`ElectionToPairwise`.'''
    return ElectionToPairwise().convert(election)


def victories(results: Iterable[PairwiseResult]) -> List[Victory]:
    '''Compute the victory graph edges; see :class:`PairwiseToVictories`.'''
    return PairwiseToVictories().convert(results)
