'''Evaluators of the Condorcet tally.

The :mod:`condorcet` module finds the Smith set from the victory graph, the
:mod:`scoring` module ranks its members, and the :mod:`core` module ties all
stages together into a single :class:`ElectionEvaluator`.
'''

from smithrank.evaluate.condorcet import smith_set, SmithSet, CondorcetWinner
from smithrank.evaluate.scoring import rank, CompositeRanker, ScoreWeights, \
    CandidateScore
from smithrank.evaluate.core import evaluate, ElectionEvaluator, \
    ElectionResult
