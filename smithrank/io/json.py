"""Election records and tally results in JSON.

The election record is the document kept by the ballot collection frontend::

    {
        "title": "Team lunch",
        "candidates": [{"id": "1", "name": "Pizza"}, ...],
        "votes": [
            {
                "voterName": "Alice",
                "ranking": ["1", "3"],
                "approved": ["1"],
                "timestamp": "2024-05-01T12:00:00Z"
            },
            ...
        ],
        "createdAt": "2024-05-01T10:00:00Z"
    }

Loading validates the election by default, so that malformed records are
rejected before any tally runs.
"""

import json
from typing import Any, Iterable, Union

import smithrank.io.core
from smithrank.election import Election
from smithrank.evaluate.core import ElectionResult


class JSONParseError(smithrank.io.core.ParseError):
    pass


def load_lines(lines: Iterable[str], validate: bool = True) -> Election:
    '''Parse an election record from lines of JSON text.

    :param lines: Lines of the JSON document.
    :param validate: Whether to validate the election after loading.
    :raises JSONParseError: If the text is not a JSON object.
    :raises ValidationError: If the election is malformed.
    '''
    text = '\n'.join(line.rstrip('\n') for line in lines)
    try:
        record = json.loads(text)
    except json.JSONDecodeError as e:
        raise JSONParseError(f'invalid JSON election record: {e}') from e
    if not isinstance(record, dict):
        raise JSONParseError(
            f'election record must be a JSON object, got {type(record).__name__}'
        )
    return Election.from_dict(record, validate=validate)


def dump_lines(obj: Union[Election, ElectionResult],
               indent: int = 2,
               ) -> Iterable[str]:
    '''Produce JSON lines for an election or a tally result.'''
    yield json.dumps(_to_record(obj), indent=indent, ensure_ascii=False)


def _to_record(obj: Any) -> Any:
    if isinstance(obj, (Election, ElectionResult)):
        return obj.to_dict()
    else:
        raise TypeError(f'cannot dump {type(obj).__name__} to JSON')


load, loads = smithrank.io.core.loaders(load_lines)
dump, dumps = smithrank.io.core.dumpers(dump_lines)
