'''Condorcet selection from the victory graph.

These evaluators work on the strict pairwise defeats (victories) between
candidates; if you have an election record, use
:func:`smithrank.convert.pairwise` and :func:`smithrank.convert.victories` to
produce them first. Tied pairs produce no victory and therefore neither
connect nor separate candidates here.

The central piece is the Smith set, found by condensing the victory graph
into its strongly connected components (cycles of mutual defeats): the Smith
set consists of all components that are not defeated from outside.
'''

import collections
import logging
from typing import Collection, Dict, Iterable, List, Optional

from smithrank.convert import Victory
from smithrank.persist import simple_serialization


logger = logging.getLogger(__name__)


def victory_graph(victories: Iterable[Victory],
                  candidates: Optional[Iterable[str]] = None,
                  ) -> Dict[str, List[str]]:
    '''Build the adjacency lists of the defeat graph.

    :param victories: Victories to form the edges (winner to loser).
    :param candidates: Names of additional candidates to include as nodes
        even if they have no victories or defeats.
    :returns: A mapping of every candidate name to the sorted names of the
        candidates it defeats.
    '''
    graph = collections.defaultdict(set)
    if candidates is not None:
        for name in candidates:
            graph[name]
    for victory in victories:
        graph[victory.winner].add(victory.loser)
        graph[victory.loser]
    return {name: sorted(defeated) for name, defeated in graph.items()}


def strongly_connected_components(graph: Dict[str, List[str]]
                                  ) -> List[List[str]]:
    '''Find strongly connected components of a directed graph.

    Uses Tarjan's algorithm in an iterative form. Nodes and their successors
    are visited in sorted order, so the output is deterministic.

    :param graph: Adjacency lists; every successor must be a key as well.
    :returns: Components as sorted lists of nodes, in reverse topological
        order of the condensed graph (a component is listed before any
        component with an edge into it).
    '''
    index = {}
    lowlink = {}
    stack = []
    on_stack = set()
    components = []
    for root in sorted(graph):
        if root in index:
            continue
        index[root] = lowlink[root] = len(index)
        stack.append(root)
        on_stack.add(root)
        work = [(root, iter(graph[root]))]
        while work:
            node, successors = work[-1]
            for succ in successors:
                if succ not in index:
                    index[succ] = lowlink[succ] = len(index)
                    stack.append(succ)
                    on_stack.add(succ)
                    work.append((succ, iter(graph[succ])))
                    break
                elif succ in on_stack:
                    lowlink[node] = min(lowlink[node], index[succ])
            else:
                work.pop()
                if work:
                    parent = work[-1][0]
                    lowlink[parent] = min(lowlink[parent], lowlink[node])
                if lowlink[node] == index[node]:
                    component = []
                    while True:
                        member = stack.pop()
                        on_stack.discard(member)
                        component.append(member)
                        if member == node:
                            break
                    logger.debug('strongly connected component: %s',
                                 sorted(component))
                    components.append(sorted(component))
    return components


def smith_set(victories: Iterable[Victory],
              candidates: Optional[Iterable[str]] = None,
              ) -> List[str]:
    '''Determine the Smith set from the victories.

    The candidates are grouped into strongly connected components of the
    defeat graph; the Smith set is the union of all components that no
    candidate outside them defeats. A candidate with no victories or defeats
    forms such a component on its own and is therefore always included.

    :param victories: Strict pairwise defeats; see
        :func:`smithrank.convert.victories`.
    :param candidates: Names of all candidates standing. Needed to include
        candidates that only have tied pairings; if not given, only the
        candidates appearing in the victories are considered.
    :returns: Sorted names of the Smith set members. With no victories at
        all, this is every candidate.
    '''
    victories = list(victories)
    graph = victory_graph(victories, candidates)
    if not victories:
        return sorted(graph)
    components = strongly_connected_components(graph)
    component_of = {
        member: i for i, component in enumerate(components)
        for member in component
    }
    defeated_from_outside = set()
    for victory in victories:
        winner_comp = component_of[victory.winner]
        loser_comp = component_of[victory.loser]
        if winner_comp != loser_comp:
            defeated_from_outside.add(loser_comp)
    smith = sorted(
        member for i, component in enumerate(components)
        if i not in defeated_from_outside
        for member in component
    )
    logger.info('Smith set: %s', smith)
    return smith


def is_dominating(subset: Collection[str],
                  victories: Iterable[Victory],
                  ) -> bool:
    '''Check that no candidate outside the subset defeats one inside it.

    That is, every member of the subset defeats or is undefeated by every
    candidate outside the subset.
    '''
    inside = frozenset(subset)
    return not any(
        victory.loser in inside and victory.winner not in inside
        for victory in victories
    )


@simple_serialization
class SmithSet:
    """Smith set selector.

    The Smith set is the smallest non-empty set of candidates that are not
    pairwise defeated by any candidate outside it.
    """
    def evaluate(self,
                 victories: Collection[Victory],
                 candidates: Optional[Iterable[str]] = None,
                 ) -> List[str]:
        """Select the Smith set.

        :param victories: Strict pairwise defeats; see
            :func:`smithrank.convert.victories`.
        :param candidates: Names of all candidates standing.
        """
        return smith_set(victories, candidates)


@simple_serialization
class CondorcetWinner:
    """Condorcet winner selector.

    Selects a candidate that pairwise defeats all other candidates, if there
    is one, or returns an empty list otherwise.
    """
    def evaluate(self,
                 victories: Collection[Victory],
                 candidates: Optional[Iterable[str]] = None,
                 ) -> List[str]:
        """Select the Condorcet winner.

        :param victories: Strict pairwise defeats; see
            :func:`smithrank.convert.victories`.
        :param candidates: Names of all candidates standing. If not given,
            only the candidates appearing in the victories are considered.
        """
        graph = victory_graph(victories, candidates)
        n_required_wins = len(graph) - 1
        for name, defeated in graph.items():
            if n_required_wins > 0 and len(defeated) == n_required_wins:
                return [name]
        return []
