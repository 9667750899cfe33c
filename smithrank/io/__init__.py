"""Input/output of elections and their results in various file formats.

This subpackage is structured into modules by file format:

-   :mod:`json` - election records as stored by the ballot collection
    frontend, and tally results for display,
-   :mod:`blt` - ranked ballots in the BLT format used by STV counting
    programs (approvals cannot be represented there).
"""
