import sys
import os
import itertools

import pytest

sys.path.append(os.path.join(os.path.dirname(__file__), '..', '..'))
import smithrank.convert
import smithrank.evaluate.condorcet
from smithrank.convert import PairwiseResult, Victory


def victories_from_matrix(matrix, names):
    return smithrank.convert.victories([
        PairwiseResult(names[i], names[j], matrix[i][j], matrix[j][i])
        for i, j in itertools.combinations(range(len(names)), 2)
    ])


VICTORIES = {
    'condorcet_winner': [
        Victory('A', 'B', 2),
        Victory('A', 'C', 2),
        Victory('B', 'C', 4),
    ],
    'cycle': [
        Victory('A', 'B', 2),
        Victory('B', 'C', 2),
        Victory('C', 'A', 2),
    ],
    'cycle_and_loser': [
        Victory('A', 'B', 2),
        Victory('A', 'D', 1),
        Victory('B', 'C', 2),
        Victory('B', 'D', 3),
        Victory('C', 'A', 2),
        Victory('C', 'D', 5),
    ],
    'two_cycles': [
        Victory('A', 'B', 1),
        Victory('B', 'C', 1),
        Victory('C', 'A', 1),
        Victory('A', 'D', 1),
        Victory('B', 'E', 1),
        Victory('D', 'E', 1),
        Victory('E', 'F', 1),
        Victory('F', 'D', 1),
    ],
    # https://en.wikipedia.org/wiki/Smith_set; D and E are tied
    'wiki_big': victories_from_matrix([
        [0, 9, 1, 9, 9, 9, 9],
        [1, 0, 9, 9, 9, 9, 9],
        [9, 1, 0, 1, 9, 9, 9],
        [1, 1, 9, 0, 5, 9, 9],
        [1, 1, 1, 5, 0, 9, 9],
        [1, 1, 1, 1, 1, 0, 9],
        [1, 1, 1, 1, 1, 1, 0],
    ], 'ABCDEFG'),
    # https://en.wikipedia.org/wiki/Schwartz_set; A and C are tied
    'wiki_small': victories_from_matrix([
        [0, 4, 3],
        [2, 0, 4],
        [3, 2, 0],
    ], 'ABC'),
}

SMITH_SETS = {
    'condorcet_winner': ['A'],
    'cycle': ['A', 'B', 'C'],
    'cycle_and_loser': ['A', 'B', 'C'],
    'two_cycles': ['A', 'B', 'C'],
    'wiki_big': ['A', 'B', 'C', 'D'],
    'wiki_small': ['A'],
}

CONDORCET_WINNERS = {
    'condorcet_winner': 'A',
}


@pytest.mark.parametrize('name', list(VICTORIES.keys()))
def test_smith_set(name):
    assert smithrank.evaluate.condorcet.smith_set(VICTORIES[name]) \
        == SMITH_SETS[name]
    assert smithrank.evaluate.condorcet.SmithSet().evaluate(VICTORIES[name]) \
        == SMITH_SETS[name]


@pytest.mark.parametrize('name', list(VICTORIES.keys()))
def test_smith_set_dominating_minimal(name):
    victories = VICTORIES[name]
    smith = smithrank.evaluate.condorcet.smith_set(victories)
    assert smith
    assert smithrank.evaluate.condorcet.is_dominating(smith, victories)
    for size in range(1, len(smith)):
        for subset in itertools.combinations(smith, size):
            assert not smithrank.evaluate.condorcet.is_dominating(
                subset, victories
            )


@pytest.mark.parametrize('name', list(VICTORIES.keys()))
def test_condorcet_winner(name):
    winner = smithrank.evaluate.condorcet.CondorcetWinner().evaluate(
        VICTORIES[name]
    )
    if name in CONDORCET_WINNERS:
        assert winner == [CONDORCET_WINNERS[name]]
        assert SMITH_SETS[name] == winner
    else:
        assert winner == []
        assert len(SMITH_SETS[name]) != 1 or name == 'wiki_small'


def test_no_victories_all_candidates():
    assert smithrank.evaluate.condorcet.smith_set(
        [], candidates=['B', 'A']
    ) == ['A', 'B']
    assert smithrank.evaluate.condorcet.smith_set([]) == []


def test_single_candidate():
    assert smithrank.evaluate.condorcet.smith_set([], candidates=['A']) == ['A']


def test_isolated_candidate_included():
    victories = [Victory('A', 'B', 1)]
    assert smithrank.evaluate.condorcet.smith_set(victories) == ['A']
    assert smithrank.evaluate.condorcet.smith_set(
        victories, candidates=['A', 'B', 'X']
    ) == ['A', 'X']


def test_source_components_each_minimal():
    victories = [Victory('A', 'B', 1)]
    smith = smithrank.evaluate.condorcet.smith_set(
        victories, candidates=['A', 'B', 'X']
    )
    assert smithrank.evaluate.condorcet.is_dominating(smith, victories)
    assert not smithrank.evaluate.condorcet.is_dominating(['B'], victories)


def test_smith_set_input_order_irrelevant():
    victories = VICTORIES['two_cycles']
    assert smithrank.evaluate.condorcet.smith_set(victories[::-1]) \
        == smithrank.evaluate.condorcet.smith_set(victories)


def test_scc():
    graph = {'a': ['b'], 'b': ['c'], 'c': ['a'], 'd': ['a']}
    assert smithrank.evaluate.condorcet.strongly_connected_components(
        graph
    ) == [['a', 'b', 'c'], ['d']]


def test_scc_long_chain():
    names = [f'c{i:05d}' for i in range(5000)]
    graph = {name: [succ] for name, succ in zip(names, names[1:])}
    graph[names[-1]] = [names[0]]
    components = smithrank.evaluate.condorcet.strongly_connected_components(
        graph
    )
    assert components == [names]


def test_victory_graph():
    graph = smithrank.evaluate.condorcet.victory_graph(
        VICTORIES['condorcet_winner'], candidates=['D']
    )
    assert graph == {'A': ['B', 'C'], 'B': ['C'], 'C': [], 'D': []}


def test_victories_from_generator():
    edges = [Victory('A', 'B', 1), Victory('B', 'C', 2)]
    assert smithrank.evaluate.condorcet.smith_set(
        victory for victory in edges
    ) == ['A']
