'''Serialization of ranker and evaluator setups to JSON-ready dictionaries.

Only configuration objects (weights, rankers, evaluators, converters) are
serialized this way; election data has its own JSON format in
:mod:`smithrank.io.json`. A configuration object is written as a dictionary
with its fully qualified class name under ``class`` and its constructor
parameters under their own names; the parameter values are either plain
JSON scalars or further configuration objects.
'''

import inspect
import importlib
from typing import Any, Dict, List


ZERO_PARAMS: List[str] = ['args', 'kwargs']

SCALAR_TYPES = (str, int, float, bool, type(None))


def simple_serialization(class_: type) -> type:
    '''A decorator to provide a simple to_dict() serialization method.

    The resulting method will serialize all object attributes corresponding
    to the class's constructor parameter names. Therefore, this decorator
    is only useful when the class stores all its original parameters
    unchanged (or in any other form acceptable to its constructor).

    :param class_: The class to add the method to.
    '''
    param_names = list(inspect.signature(class_.__init__).parameters.keys())
    if 'self' in param_names:
        param_names.remove('self')
    if param_names == ZERO_PARAMS and class_.__init__ == object.__init__:
        param_names = []

    def to_dict(self) -> Dict[str, Any]:
        out_dict = {'class': scoped_class_name(self)}
        for attr in param_names:
            out_dict[attr] = serialize_value(getattr(self, attr))
        return out_dict

    class_.to_dict = to_dict
    return class_


def serialize_value(value: Any) -> Any:
    if hasattr(value, 'to_dict'):
        return value.to_dict()
    elif isinstance(value, SCALAR_TYPES):
        return value
    else:
        raise ValueError(f'cannot serialize {value!r} to dict format')


def deserialize_value(value: Any) -> Any:
    if isinstance(value, dict) and is_scoped_identifier(value.get('class')):
        return deserialize_class(value)
    elif isinstance(value, SCALAR_TYPES):
        return value
    else:
        raise ValueError(f'cannot deserialize {value!r}, type unknown')


def deserialize_class(clsdef: Dict[str, Any]) -> Any:
    cls = get_class(clsdef['class'])
    params = {
        key: deserialize_value(inner_val)
        for key, inner_val in clsdef.items() if key != 'class'
    }
    return cls(**params)


def get_class(identifier: str) -> type:
    '''Import the class given by its fully qualified name.

    :raises ValueError: If the module or the class does not exist.
    '''
    module_name, name = identifier.rsplit('.', 1)
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f'unknown module in class def: {identifier}') from e
    try:
        return getattr(module, name)
    except AttributeError as e:
        raise ValueError(f'unknown class def: {identifier}') from e


def from_dict(value: Dict[str, Any]) -> Any:
    """Reconstruct a ranker or evaluator object from a JSON-like dictionary.

    :param value: A dictionary created by :func:`to_dict`.
    """
    if not isinstance(value, dict):
        raise ValueError('invalid smithrank object def: dict expected, '
                         f'got {value!r}')
    elif 'class' not in value:
        raise ValueError('invalid smithrank object def: must have a class key')
    elif not is_scoped_identifier(value['class']):
        inval_cls = value['class']
        raise ValueError(f"invalid smithrank class def: {inval_cls}")
    else:
        return deserialize_class(value)


def to_dict(obj: Any) -> Dict[str, Any]:
    """Serialize a ranker or evaluator object to a JSON-ready dictionary.

    :param obj: An object providing a `to_dict()` method (the weights, rankers
        and evaluators of smithrank have it, courtesy of the
        simple_serialization decorator).
    """
    return serialize_value(obj)


def is_scoped_identifier(value: Any) -> bool:
    '''Tell whether the value is a dotted name with at least one dot.'''
    return (
        isinstance(value, str)
        and '.' in value
        and all(chunk.isidentifier() for chunk in value.split('.'))
    )


def scoped_class_name(value: Any) -> str:
    cls = value.__class__
    return '.'.join((cls.__module__, cls.__name__))
