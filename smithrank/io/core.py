"""Shared plumbing for the election file formats. Internal.

Every format module defines a ``load_lines`` function that builds an
election from an iterable of text lines and a ``dump_lines`` generator that
yields the lines of its output. The factories here turn those into the
usual ``load``/``loads`` and ``dump``/``dumps`` quadruple.
"""

from typing import Any, Callable, Iterable, Iterator, TextIO, Tuple


class NotSupportedInFormat(Exception):
    """The election contains something the file format cannot express."""

    FORMAT: str = NotImplemented

    def __init__(self, what: str):
        super().__init__(f'{what} not supported by {self.FORMAT}')


class ParseError(Exception):
    """The input file does not follow the syntax of its format."""
    pass


def loaders(line_loader: Callable[..., Any]
            ) -> Tuple[Callable[..., Any], Callable[..., Any]]:
    """Create load() and loads() from a function that reads lines.

    Keyword arguments (such as ``validate``) are passed through.
    """
    def load(file: TextIO, **kwargs) -> Any:
        return line_loader(file, **kwargs)

    def loads(text: str, **kwargs) -> Any:
        return line_loader(iter(text.split('\n')), **kwargs)

    load.__doc__ = f'Read an election from an open file.\n\n{line_loader.__doc__}'
    loads.__doc__ = f'Read an election from a string.\n\n{line_loader.__doc__}'
    return load, loads


def dumpers(line_dumper: Callable[..., Iterable[str]]
            ) -> Tuple[Callable[..., None], Callable[..., str]]:
    """Create dump() and dumps() from a generator of output lines."""
    def dump(file: TextIO, *args, **kwargs) -> None:
        file.writelines(_terminated(line_dumper(*args, **kwargs)))

    def dumps(*args, **kwargs) -> str:
        return ''.join(_terminated(line_dumper(*args, **kwargs)))

    return dump, dumps


def _terminated(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        yield line if line.endswith('\n') else line + '\n'
