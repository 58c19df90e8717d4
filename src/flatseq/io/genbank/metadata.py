# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
Functions for parsing the metadata fields of a GenBank record.

Each block parser expects a :class:`LineCursor` positioned at the line
containing the field name.
It consumes the field including all its continuation lines and
subfields and leaves the cursor at the first line of the next field.
"""

__name__ = "flatseq.io.genbank"
__all__ = [
    "join_continuation",
    "parse_field",
    "parse_locus",
    "parse_reference",
    "parse_source",
    "parse_primary",
]

import warnings
from ...annotation import Locus, Primary, Reference
from ...file import InvalidFileError, MalformedLocusError
from .lines import LineClass
from .vocabulary import DIVISIONS, REFERENCE_KEYWORDS

_TOPOLOGIES = ("circular", "linear")


def join_continuation(tokens, cursor):
    """
    Join the content of a field with its continuation lines.

    Consecutive lines are consumed from the `cursor` as long as they
    neither start a field nor a subfield.
    Each line is trimmed and appended separated by a single space.

    Parameters
    ----------
    tokens : list of str
        The defining line split at single spaces.
        The first token (the field name) is omitted from the result.
    cursor : LineCursor
        A cursor positioned at the line following the defining line.

    Returns
    -------
    text : str
        The joined field content.

    Examples
    --------

    >>> cursor = LineCursor([
    ...     "            complete genome.",
    ...     "ACCESSION   X00001",
    ... ])
    >>> tokens = "DEFINITION  Escherichia coli,".split(" ")
    >>> print(join_continuation(tokens, cursor))
    Escherichia coli, complete genome.
    >>> print(cursor.head())
    ACCESSION
    """
    text = " ".join(tokens[1:]).strip()
    while not cursor.at_end() and cursor.classify().is_continuation():
        text = (text + " " + cursor.advance().strip()).strip()
    return text


def parse_field(cursor):
    """
    Parse a simple field, e.g. *DEFINITION* or *KEYWORDS*, whose content
    is only the joined text of the field line and its continuation.

    Parameters
    ----------
    cursor : LineCursor
        A cursor positioned at the field line.

    Returns
    -------
    text : str
        The field content.
    """
    return join_continuation(_split_head(cursor.advance()), cursor)


def parse_locus(line, divisions=DIVISIONS, line_number=None):
    """
    Parse the *LOCUS* line of a GenBank record.

    The line is split into whitespace separated tokens, that are
    interpreted by their position:
    the field name, the locus name, the length, the length unit, the
    molecule type, an optional topology (``circular`` or ``linear``),
    the division and the date.

    Parameters
    ----------
    line : str
        The complete *LOCUS* line, including the field name.
    divisions : Vocabulary, optional
        The known GenBank division codes.
        An unknown division is kept, but a warning is raised.
    line_number : int, optional
        The line number reported in errors.

    Returns
    -------
    locus : Locus
        The parsed locus.

    Raises
    ------
    MalformedLocusError
        If the line does not contain enough tokens.

    Examples
    --------

    >>> locus = parse_locus(
    ...     "LOCUS       pUC19c      2686 bp    DNA     circular SYN 06-JUN-2016"
    ... )
    >>> print(locus.name)
    pUC19c
    >>> print(locus.sequence_length)
    2686 bp
    >>> print(locus.circular)
    True
    >>> print(locus.genbank_division)
    SYN
    """
    tokens = line.split()
    if len(tokens) < 7:
        raise MalformedLocusError(
            f"Expected at least 7 tokens in 'LOCUS' line, but got {len(tokens)}",
            line_number
        )
    name = tokens[1]
    # The unit differs between GenBank ('bp') and GenPept ('aa')
    # -> keep number and unit together
    sequence_length = " ".join(tokens[2:4])
    if tokens[4] in _TOPOLOGIES:
        # Molecule type is missing, as it happens in GenPept files
        molecule_type = ""
        next_idx = 4
    else:
        molecule_type = tokens[4]
        next_idx = 5

    if tokens[next_idx] in _TOPOLOGIES:
        circular = tokens[next_idx] == "circular"
        next_idx += 1
    else:
        circular = False

    if len(tokens) < next_idx + 2:
        raise MalformedLocusError(
            "'LOCUS' line has no division and date after the topology",
            line_number
        )
    division = tokens[next_idx]
    date = tokens[next_idx + 1]
    if division not in divisions:
        warnings.warn(
            f"'{division}' is not a known GenBank division", UserWarning
        )

    return Locus(
        name=name,
        sequence_length=sequence_length,
        molecule_type=molecule_type,
        genbank_division=division,
        modification_date=date,
        circular=circular,
    )


def parse_reference(cursor):
    """
    Parse a *REFERENCE* field and its subfields.

    The first token after the field name is the citation index,
    the remainder of the line is the base range.
    Subfields, that are not part of the known reference subfields, are
    skipped.

    Parameters
    ----------
    cursor : LineCursor
        A cursor positioned at the *REFERENCE* line.

    Returns
    -------
    reference : Reference
        The parsed reference.
    """
    tokens = _split_head(cursor.advance())
    content = " ".join(tokens[1:]).strip()
    index, _, base_range = content.partition(" ")
    reference = Reference(index=index, range=base_range.strip())

    while not cursor.at_end():
        line_class = cursor.classify()
        if line_class == LineClass.TOP_LEVEL:
            break
        if line_class == LineClass.SUB_LEVEL:
            sub_tokens = _split_head(cursor.advance())
            name = sub_tokens[0]
            # The continuation is consumed even for unknown subfields
            text = join_continuation(sub_tokens, cursor)
            if name in REFERENCE_KEYWORDS:
                setattr(reference, name.lower(), text)
        else:
            # Continuation without preceding subfield
            cursor.advance()
    return reference


def parse_source(cursor):
    """
    Parse the *SOURCE* field and its *ORGANISM* subfield.

    All lines until the *ORGANISM* subfield belong to the source text.
    The organism text consists of the *ORGANISM* line and its
    continuation, i.e. the taxonomic lineage.

    Parameters
    ----------
    cursor : LineCursor
        A cursor positioned at the *SOURCE* line.

    Returns
    -------
    source : str
        The source text.
    organism : str
        The organism text, empty if the field has no *ORGANISM*
        subfield.
    """
    tokens = _split_head(cursor.advance())
    source = " ".join(tokens[1:]).strip()
    organism = ""
    while not cursor.at_end():
        if cursor.classify() == LineClass.TOP_LEVEL:
            break
        if cursor.head() == "ORGANISM":
            organism = join_continuation(_split_head(cursor.advance()), cursor)
            break
        source = (source + " " + cursor.advance().strip()).strip()
    return source, organism


def parse_primary(cursor):
    """
    Parse the *PRIMARY* field of a TPA or RefSeq record.

    The field line contains the column titles, each following line
    contains one row with the record span, the primary identifier, the
    primary span and an optional ``c`` for the complementary strand.

    Parameters
    ----------
    cursor : LineCursor
        A cursor positioned at the *PRIMARY* line.

    Returns
    -------
    primaries : list of Primary
        The rows in file order.

    Raises
    ------
    InvalidFileError
        If a row has less than three columns.
    """
    tokens = cursor.advance().split()
    rows = []
    if len(tokens) > 1 and not tokens[1].endswith("_SPAN"):
        # The field line contains data instead of the column titles
        rows.append((cursor.line_number - 1, tokens[1:]))
    while not cursor.at_end() and cursor.classify().is_continuation():
        line_number = cursor.line_number
        row = cursor.advance().split()
        if len(row) > 0:
            rows.append((line_number, row))

    primaries = []
    for line_number, row in rows:
        if len(row) < 3:
            raise InvalidFileError(
                f"Expected at least 3 columns in 'PRIMARY' row, "
                f"but got {len(row)}",
                line_number
            )
        comp = row[3] if len(row) > 3 else ""
        primaries.append(Primary(row[0], row[1], row[2], comp))
    return primaries


def _split_head(line):
    return line.strip().split(" ")
