"""A commandline tool to tally a ranked-and-approval election.

Loads an election record, finds its Smith set and ranks it by the composite
score, and prints the pairwise tally, the victories, the Smith set and the
final ranking.
"""

import argparse
import io
import logging
import sys
import warnings
from typing import Optional

import smithrank.io.blt
import smithrank.io.json
from smithrank.election import Election
from smithrank.evaluate.core import ElectionEvaluator, ElectionResult
from smithrank.evaluate.scoring import CompositeRanker, ScoreWeights, \
    WEIGHT_PRESETS

argparser = argparse.ArgumentParser(
    prog='smithrank',
    description=__doc__,
    formatter_class=argparse.ArgumentDefaultsHelpFormatter,
)
argparser.add_argument(
    '-i', '--input-file',
    type=argparse.FileType('r', encoding='utf8'),
    help='file to load the election from',
)
argparser.add_argument(
    '-I', '--use-stdin',
    action='store_true',
    help='load the election from standard input',
)
argparser.add_argument(
    '-f', '--input-format',
    choices=['json', 'blt'],
    default='json',
    help='format of the election file',
)
argparser.add_argument(
    '-w', '--weights',
    choices=list(WEIGHT_PRESETS.keys()),
    default='default',
    help='named weighting of the composite score',
)
argparser.add_argument(
    '--victory-weight',
    type=float,
    help='override the weight of net victories in the composite score',
)
argparser.add_argument(
    '--margin-weight',
    type=float,
    help='override the weight of the average margin in the composite score',
)
argparser.add_argument(
    '--approval-weight',
    type=float,
    help='override the weight of approvals in the composite score',
)
argparser.add_argument(
    '-j', '--json',
    action='store_true',
    help='output the full result as JSON instead of a text report',
)
argparser.add_argument(
    '-v', '--verbose',
    action='store_true',
    help='show all tally log messages',
)
argparser.add_argument(
    '-q', '--quiet',
    action='store_true',
    help='do not show any tally log messages',
)

INPUT_FORMATS = {
    'json': smithrank.io.json.load,
    'blt': smithrank.io.blt.load,
}


def main(input_file: Optional[io.TextIOBase] = None,
         use_stdin: bool = False,
         input_format: str = 'json',
         weights: str = 'default',
         victory_weight: Optional[float] = None,
         margin_weight: Optional[float] = None,
         approval_weight: Optional[float] = None,
         json: bool = False,
         verbose: bool = False,
         quiet: bool = False,
         ) -> Optional[ElectionResult]:
    logging.basicConfig(
        level=(
            logging.DEBUG if verbose
            else (logging.WARNING if quiet else logging.INFO)
        ),
        format='%(levelname)-10s %(message)s'
    )
    if use_stdin:
        input_file = sys.stdin
    election = load_election(input_file, input_format)
    if not election.candidates:
        warnings.warn('no candidates in the election, terminating')
        return None
    ranker = CompositeRanker(build_weights(
        weights, victory_weight, margin_weight, approval_weight
    ))
    result = ElectionEvaluator(ranker).evaluate(election)
    if json:
        show_json(result)
    else:
        show_result(result)
    return result


def load_election(input_file: io.TextIOBase, input_format: str) -> Election:
    """Load the election from the given file, expecting the given format."""
    try:
        loader = INPUT_FORMATS[input_format]
    except KeyError as e:
        raise ValueError(
            f'invalid input file format: {input_format}, '
            'supported: ' + ', '.join(INPUT_FORMATS.keys())
        ) from e
    return loader(input_file)


def build_weights(preset: str,
                  victory_weight: Optional[float] = None,
                  margin_weight: Optional[float] = None,
                  approval_weight: Optional[float] = None,
                  ) -> ScoreWeights:
    """Take the preset weighting and override the weights given."""
    base = WEIGHT_PRESETS[preset]
    return ScoreWeights(
        victory_weight=(
            base.victory_weight if victory_weight is None else victory_weight
        ),
        margin_weight=(
            base.margin_weight if margin_weight is None else margin_weight
        ),
        approval_weight=(
            base.approval_weight if approval_weight is None
            else approval_weight
        ),
    )


def show_json(result: ElectionResult) -> None:
    smithrank.io.json.dump(sys.stdout, result)


def show_result(result: ElectionResult) -> None:
    """Show a text report of the tally."""
    print()
    print(f'Election: {result.title}')
    print(f'Total votes: {result.n_votes}')
    print()
    print('Pairwise results:')
    for pair in result.pairwise:
        print(f'  {pair.candidate1} {pair.candidate1_votes}'
              f' : {pair.candidate2_votes} {pair.candidate2}')
    print()
    print('Victories:')
    if not result.victories:
        print('  none (all pairs tied)')
    for victory in result.victories:
        print(f'  {victory.winner} beats {victory.loser}'
              f' by {victory.margin}')
    print()
    print('Smith set: ' + ', '.join(result.smith_set))
    print()
    if not result.ranking:
        print('No votes cast, nobody ranked')
        return
    print('Ranking:')
    n_just_chars = len(str(len(result.ranking))) + 1
    for score in result.ranking:
        rank_disp = (str(score.rank) + ('=' if score.is_tied else ''))
        print(' ', rank_disp.rjust(n_just_chars), ' ', score.name,
              f'({score.composite_score:.3f})')
    print()
    if result.ranking[0].is_tied:
        print('Tied for first place: ' + ', '.join(
            score.name for score in result.ranking if score.rank == 1
        ))
    else:
        print(f'Winner: {result.winner}')


if __name__ == '__main__':
    args = argparser.parse_args()
    if not args.input_file and not args.use_stdin:
        argparser.print_usage()
    else:
        main(**vars(args))
