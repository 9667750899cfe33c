'''Ranked ballots in the BLT file format.

The BLT format, used by most STV counting programs, stores weighted ranked
ballots as lines of candidate indices, followed by the quoted candidate
names and election title::

    3 1
    2 1 2 3 0
    1 3 0
    0
    "Alice"
    "Bob"
    "Carol"
    "Board election"

Approvals cannot be represented in BLT; they are dropped on export with a
warning. On import, candidates get their one-based BLT indices as ids and
each ballot line with weight ``w`` becomes ``w`` separate ballots, so only
whole weights are accepted. Withdrawn candidates and equal rankings are not
supported.
'''

import collections
import warnings
from typing import Dict, Iterable, List, Optional, Tuple

import smithrank.io.core
from smithrank.candidate import Candidate
from smithrank.election import Election
from smithrank.vote import Ballot


class NotSupportedInBLT(smithrank.io.core.NotSupportedInFormat):
    FORMAT = 'BLT file'


class BLTParseError(smithrank.io.core.ParseError):
    pass


def dump_lines(election: Election, n_seats: int = 1) -> Iterable[str]:
    '''Produce BLT lines for the ranked ballots of the election.

    Identical rankings are merged into a single weighted line.

    :param election: Election to export.
    :param n_seats: Number of seats to write into the header.
    :raises NotSupportedInBLT: If a candidate name contains a double quote.
    '''
    indices = {cand.id: i + 1 for i, cand in enumerate(election.candidates)}
    if any(ballot.approved for ballot in election.votes):
        warnings.warn('approvals not supported by BLT, dropping them')
    yield _dump_numline([len(election.candidates), n_seats])
    counts = collections.Counter()
    for ballot in election.votes:
        counts[tuple(ballot.positions())] += 1
    for ranking, n_votes in counts.items():
        yield _dump_numline(
            [n_votes] + [indices[cand_id] for cand_id in ranking] + [0]
        )
    yield _dump_numline([0])
    for cand in election.candidates:
        yield _dump_strline(cand.name)
    yield _dump_strline(election.title)


dump, dumps = smithrank.io.core.dumpers(dump_lines)


def _dump_numline(nums: List[int]) -> str:
    return ' '.join(str(num) for num in nums)


def _dump_strline(string: str) -> str:
    if '"' in string:
        raise NotSupportedInBLT(f'double quote in name {string!r}')
    return f'"{string}"'


def load_lines(blt_lines: Iterable[str], validate: bool = True) -> Election:
    '''Parse ranked ballots from BLT lines into an election.

    :param blt_lines: Lines of the BLT file.
    :param validate: Whether to validate the election after loading.
    :raises BLTParseError: If the file is malformed or uses unsupported
        features (withdrawn candidates, fractional weights).
    '''
    blt_lines = iter(blt_lines)
    try:
        n_cands, n_seats = _parse_header(next(blt_lines))
    except StopIteration as e:
        raise BLTParseError('empty BLT file') from e
    ballots = _parse_body(blt_lines)
    names, title = _parse_strings(blt_lines, n_cands)
    if names is None:
        names = [str(i + 1) for i in range(n_cands)]
    candidates = [
        Candidate(id=str(i + 1), name=name) for i, name in enumerate(names)
    ]
    votes = []
    for ranking, n_votes in ballots.items():
        for cand_index in ranking:
            if not 1 <= cand_index <= n_cands:
                raise BLTParseError(f'candidate index out of range: {cand_index}')
        for _ in range(n_votes):
            votes.append(Ballot(
                voter_name=f'ballot {len(votes) + 1}',
                ranking=[str(i) for i in ranking],
            ))
    election = Election(
        title=title if title is not None else '',
        candidates=candidates,
        votes=votes,
    )
    if validate:
        election.validate()
    return election


load, loads = smithrank.io.core.loaders(load_lines)


def _parse_header(blt_line: str) -> Tuple[int, int]:
    blt_result = _parse_numline(blt_line)
    if len(blt_result) == 2:
        return tuple(blt_result)
    else:
        raise BLTParseError(f'need two integers (candidate and seat count)'
                            f' in BLT file header line, got {blt_result!r}')


def _parse_body(blt_lines: Iterable[str]) -> Dict[Tuple[int, ...], int]:
    ballots = {}
    for line in blt_lines:
        result = _parse_numline(line)
        if not result:
            continue    # ignore empty lines
        elif result == [0]:
            return ballots
        elif result[-1] != 0:
            raise BLTParseError(f'ballot line must be zero-terminated, got {line!r}')
        else:
            ballot = tuple(result[1:-1])
            ballots[ballot] = ballots.get(ballot, 0) + result[0]
    raise BLTParseError('incomplete BLT file:'
                        ' EOF before ballot list terminator')


def _parse_strings(blt_lines: Iterable[str],
                   n_cands: int,
                   ) -> Tuple[Optional[List[str]], Optional[str]]:
    parsed_lines = []
    for blt_line in blt_lines:
        blt_line = _clean_line(blt_line)
        if blt_line.startswith('"') and blt_line.endswith('"') and len(blt_line) > 1:
            parsed_lines.append(blt_line[1:-1])
        elif blt_line:
            raise BLTParseError(f'invalid BLT string line: {blt_line!r}')
    if not parsed_lines:
        return None, None
    elif len(parsed_lines) == n_cands:
        return parsed_lines, None
    elif len(parsed_lines) == n_cands + 1:
        return parsed_lines[:-1], parsed_lines[-1]
    else:
        raise BLTParseError(f'{len(parsed_lines)} strings found but expecting'
                            f' {n_cands} candidate names and a title')


def _clean_line(blt_line: str) -> str:
    blt_line = blt_line.strip()
    # Ignore everything after the first hash sign after the last double quote.
    hash_search_start = blt_line.rfind('"') if '"' in blt_line else 0
    leftmost_hash = blt_line[hash_search_start:].find('#')
    if leftmost_hash == -1:
        return blt_line
    else:
        return blt_line[:(hash_search_start + leftmost_hash)].rstrip()


def _parse_numline(blt_line: str) -> List[int]:
    blt_line = _clean_line(blt_line)
    nums = []
    for i, numstr in enumerate(blt_line.split()):
        if numstr.isdigit():
            nums.append(int(numstr))
        elif numstr.startswith('-'):
            raise NotSupportedInBLT('withdrawn candidates')
        else:
            raise BLTParseError(f'invalid BLT number line item {i}: {numstr!r}'
                                ' (whole numbers only)')
    return nums
