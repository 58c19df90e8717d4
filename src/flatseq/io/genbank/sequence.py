# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Functions for obtaining the sequence from the *ORIGIN* field of a
GenBank record.
"""

__name__ = "flatseq.io.genbank"
__all__ = ["extract_sequence"]

import re
from ...annotation import Sequence


_NON_LETTER = re.compile("[^a-zA-Z]+")


def extract_sequence(lines):
    """
    Get the sequence letters from the lines following the *ORIGIN*
    field.

    The lines are concatenated and every character, that is not an
    ASCII letter, is removed.
    This removes the sequence positions and whitespace characters.
    The case of the letters is preserved.

    Parameters
    ----------
    lines : iterable object of str
        The lines after the *ORIGIN* line.

    Returns
    -------
    sequence : Sequence
        The sequence.

    Examples
    --------

    >>> sequence = extract_sequence([
    ...     "        1 atgcatgcat GATTACA",
    ...     "       18 ccc",
    ... ])
    >>> print(sequence.sequence)
    atgcatgcatGATTACAccc
    """
    seq_str = "".join(lines)
    # Remove position numbers and whitespace
    seq_str = _NON_LETTER.sub("", seq_str)
    return Sequence(sequence=seq_str)
