'''Various utility functions for other modules of smithrank.

There should normally be no need to use these functions directly.
'''

import operator
from typing import Any, Dict
from numbers import Number


def descending_dict(d: Dict[Any, Number]) -> Dict[Any, Number]:
    '''Order the dictionary by value, highest first.

    Keys with equal values keep their input order.
    '''
    return dict(sorted(d.items(), key=operator.itemgetter(1), reverse=True))


def is_close(value1: float, value2: float, tolerance: float) -> bool:
    '''Return True if the two values differ by at most the tolerance.'''
    return abs(value1 - value2) <= tolerance


def round_values(d: Dict[Any, Number], digits: int) -> Dict[Any, float]:
    return {key: round(value, digits) for key, value in d.items()}
