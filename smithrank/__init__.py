"""Smithrank - a Condorcet tally of ranked-and-approval elections.

Each ballot of an election ranks some or all of the candidates and marks
some of them as approved. The tally proceeds in the following stages:

-   The **pairwise tally** counts, for every pair of candidates, the ballots
    preferring each of them (:func:`convert.pairwise`).
-   The **victory graph** keeps the strict pairwise defeats with their
    margins; tied pairs produce no defeat (:func:`convert.victories`).
-   The **Smith set** is the smallest set of candidates not defeated from
    outside, found by condensing the victory graph into its strongly
    connected components (:func:`evaluate.condorcet.smith_set`).
-   The **ranking** orders the Smith set by a weighted composite of net
    victories, average margin and approvals (:func:`evaluate.scoring.rank`).

The whole pipeline is wrapped by :class:`evaluate.ElectionEvaluator`.
Elections should be validated at the boundary by
:meth:`election.Election.validate`; the evaluator does so by default.
"""
