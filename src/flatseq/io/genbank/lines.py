# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Classification of GenBank lines based on their indentation.

GenBank has no field delimiters: whether a line starts a new field,
a subfield, a feature or a qualifier, or whether it continues the
previous line, is only encoded by the characters at a few fixed
columns.
"""

__name__ = "flatseq.io.genbank"
__all__ = [
    "LineClass",
    "ColumnLayout",
    "DEFAULT_LAYOUT",
    "classify_line",
    "LineCursor",
]

from dataclasses import dataclass
from enum import Enum, auto


class LineClass(Enum):
    """
    The role of a line within a GenBank record.

        - **TOP_LEVEL** - A field, e.g. ``DEFINITION``, or the record
          terminator ``//``
        - **SUB_LEVEL** - A subfield, e.g. ``  AUTHORS``, or a feature
          declaration, e.g. ``     gene            1..10``.
          Which of both is meant depends on the enclosing field.
        - **QUALIFIER** - The start of a feature qualifier,
          e.g. ``/gene="abc"``
        - **QUALIFIER_CONTINUATION** - A line continuing a qualifier
          (or a feature location)
        - **PLAIN_CONTINUATION** - Any other line, including empty and
          short lines
    """

    TOP_LEVEL = auto()
    SUB_LEVEL = auto()
    QUALIFIER = auto()
    QUALIFIER_CONTINUATION = auto()
    PLAIN_CONTINUATION = auto()

    def is_continuation(self):
        """
        Whether a line of this class continues the value of a metadata
        field, i.e. it neither starts a field nor a subfield.
        """
        return self not in (LineClass.TOP_LEVEL, LineClass.SUB_LEVEL)


@dataclass(frozen=True)
class ColumnLayout:
    """
    The 0-based column positions, that are inspected to classify a line.

    Parameters
    ----------
    top_level : int
        A non-blank character at this column starts a field.
    sub_level : int
        A non-blank character at this column starts a subfield or a
        feature.
    qualifier_continuation : int
        This column is blank in lines continuing a qualifier.
    qualifier : int
        A ``/`` at this column starts a qualifier.
    """

    top_level: ... = 0
    sub_level: ... = 5
    qualifier_continuation: ... = 20
    qualifier: ... = 21


DEFAULT_LAYOUT = ColumnLayout()


def classify_line(line, layout=DEFAULT_LAYOUT):
    """
    Determine the :class:`LineClass` of a single GenBank line.

    The checks are performed in the order of the :class:`LineClass`
    members.
    Columns beyond the end of the line are undefined: a line that is
    too short for a check is a :attr:`LineClass.PLAIN_CONTINUATION`.

    Parameters
    ----------
    line : str
        The line to be classified.
    layout : ColumnLayout, optional
        The column positions to be inspected.

    Returns
    -------
    line_class : LineClass
        The class of the line.

    Examples
    --------

    >>> print(classify_line("LOCUS       test  10 bp    DNA     linear   SYN 01-JAN-2020"))
    LineClass.TOP_LEVEL
    >>> print(classify_line("  AUTHORS   Doe,J."))
    LineClass.SUB_LEVEL
    >>> print(classify_line('                     /gene="x"'))
    LineClass.QUALIFIER
    >>> print(classify_line("                     continued text"))
    LineClass.QUALIFIER_CONTINUATION
    >>> print(classify_line(""))
    LineClass.PLAIN_CONTINUATION
    """
    if not _is_blank(line, layout.top_level):
        return LineClass.TOP_LEVEL
    if not _is_blank(line, layout.sub_level):
        return LineClass.SUB_LEVEL
    if len(line) <= max(layout.qualifier, layout.qualifier_continuation):
        return LineClass.PLAIN_CONTINUATION
    if line[layout.qualifier] == "/":
        return LineClass.QUALIFIER
    if line[layout.qualifier_continuation].isspace():
        return LineClass.QUALIFIER_CONTINUATION
    return LineClass.PLAIN_CONTINUATION


def _is_blank(line, column):
    # Undefined columns count as blank
    return column >= len(line) or line[column].isspace()


class LineCursor:
    """
    A forward-only position in a list of lines.

    The block parsers share one cursor: each parser consumes the lines
    belonging to its block and leaves the cursor at the first line it
    did not consume.

    Parameters
    ----------
    lines : list of str
        The lines to iterate over.
    position : int, optional
        The 0-based index of the current line.
    layout : ColumnLayout, optional
        The column positions used by :meth:`classify()`.

    Examples
    --------

    >>> cursor = LineCursor(["DEFINITION  A test", "            record."])
    >>> print(cursor.head())
    DEFINITION
    >>> print(cursor.advance())
    DEFINITION  A test
    >>> print(cursor.classify())
    LineClass.PLAIN_CONTINUATION
    >>> print(cursor.line_number)
    2
    """

    def __init__(self, lines, position=0, layout=DEFAULT_LAYOUT):
        if position < 0:
            raise ValueError("The position must not be negative")
        self._lines = lines
        self._position = min(position, len(lines))
        self._layout = layout

    @property
    def position(self):
        return self._position

    @property
    def line_number(self):
        """
        The 1-based number of the current line.
        """
        return self._position + 1

    @property
    def layout(self):
        return self._layout

    def at_end(self):
        return self._position >= len(self._lines)

    def rest_is_blank(self):
        """
        Whether the lines from the current position to the end contain
        only whitespace.
        This is also true at the end of the lines.
        """
        return all(
            len(line.strip()) == 0 for line in self._lines[self._position :]
        )

    def peek(self, offset=0):
        """
        Get a line relative to the current position without consuming
        it.

        Returns
        -------
        line : str or None
            The line, or ``None`` if the position is beyond the last
            line.
        """
        index = self._position + offset
        if index < 0 or index >= len(self._lines):
            return None
        return self._lines[index]

    def classify(self, offset=0):
        """
        Classify a line relative to the current position.

        Returns
        -------
        line_class : LineClass or None
            The class of the line, or ``None`` if the position is
            beyond the last line.
        """
        line = self.peek(offset)
        if line is None:
            return None
        return classify_line(line, self._layout)

    def head(self):
        """
        Get the first whitespace-delimited token of the current line.

        Returns
        -------
        token : str
            The token, an empty string for blank lines or at the end of
            the lines.
        """
        line = self.peek()
        if line is None:
            return ""
        tokens = line.split()
        return tokens[0] if tokens else ""

    def advance(self):
        """
        Consume the current line.

        Returns
        -------
        line : str
            The consumed line.

        Raises
        ------
        IndexError
            If the cursor is already behind the last line.
        """
        if self.at_end():
            raise IndexError(
                f"Cannot advance beyond the last line ({len(self._lines)})"
            )
        line = self._lines[self._position]
        self._position += 1
        return line

    def consume_remaining(self):
        """
        Consume all lines from the current position to the end.

        Returns
        -------
        lines : list of str
            The consumed lines.
        """
        remaining = self._lines[self._position :]
        self._position = len(self._lines)
        return remaining
