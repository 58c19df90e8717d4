# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "flatseq.io.genbank"
__all__ = [
    "GenBankFile",
    "MultiFile",
    "Block",
    "iter_blocks",
    "fold_blocks",
    "get_annotated_sequence",
]

import io
import re
import warnings
from dataclasses import dataclass
from ...annotation import AnnotatedSequence
from ...file import InvalidFileError, TextFile, TruncatedBlockError
from .annotation import parse_features
from .lines import DEFAULT_LAYOUT, LineClass, LineCursor
from .metadata import (
    parse_field,
    parse_locus,
    parse_primary,
    parse_reference,
    parse_source,
)
from .sequence import extract_sequence
from .vocabulary import DIVISIONS, TOP_LEVEL_KEYWORDS

_TERMINATOR = "//"
# Fields whose content is only the joined text
_TEXT_FIELDS = ("DEFINITION", "ACCESSION", "VERSION", "KEYWORDS")
# Fields that must be followed by another field or the terminator
_TERMINATED_FIELDS = ("SOURCE", "REFERENCE", "PRIMARY", "FEATURES")


class GenBankFile(TextFile):
    """
    This class represents a file in GenBank format (including GenPept),
    containing a single record.

    A GenBank record annotates a reference sequence with features such
    as positions of genes, promoters, etc.
    Additionally, it provides metadata further describing the record.

    A record is divided into separate fields, e.g. the *DEFINITION*
    field contains a description of the record.
    The field name starts at the beginning of a line,
    followed by the content.
    A field may contain subfields, whose name is indented.
    For example, the *SOURCE* field contains the *ORGANISM* subfield.
    Some fields may occur multiple times, e.g. the *REFERENCE* field.
    A sample GenBank file can be viewed at
    `<https://www.ncbi.nlm.nih.gov/Sitemap/samplerecord.html>`_.

    This class only holds the lines of the file.
    The content is parsed into an :class:`AnnotatedSequence` with
    :func:`get_annotated_sequence()`.

    Examples
    --------

    >>> gb_file = GenBankFile.from_string(
    ...     "LOCUS       test  10 bp    DNA     linear   SYN 01-JAN-2020\\n"
    ...     "FEATURES             Location/Qualifiers\\n"
    ...     "     gene            1..10\\n"
    ...     "                     /gene=\\"x\\"\\n"
    ...     "ORIGIN\\n"
    ...     "        1 atgcatgcat\\n"
    ...     "//\\n"
    ... )
    >>> annot_seq = get_annotated_sequence(gb_file)
    >>> print(annot_seq.meta.locus.name)
    test
    >>> print(annot_seq.features[0].attributes)
    {'gene': 'x'}
    >>> print(annot_seq.sequence.sequence)
    atgcatgcat
    """


class MultiFile(TextFile):
    """
    This class represents a file in *GenBank* or *GenPept* format,
    that contains multiple records.

    The records are appended to each other, each one terminated by
    ``//``.
    Objects of this class can be iterated to obtain a
    :class:`GenBankFile` for each record in the file.
    """

    def __iter__(self):
        start_i = 0
        for i in range(len(self.lines)):
            line = self.lines[i]
            if line.strip() == _TERMINATOR:
                # Create file with lines corresponding to that record
                file_content = "\n".join(self.lines[start_i : i + 1])
                start_i = i + 1
                yield GenBankFile.read(io.StringIO(file_content))
        # A last record without terminator
        if any(line.strip() for line in self.lines[start_i:]):
            file_content = "\n".join(self.lines[start_i:])
            yield GenBankFile.read(io.StringIO(file_content))


@dataclass(frozen=True)
class Block:
    """
    A parsed GenBank field.

    Attributes
    ----------
    name : str
        The field name, e.g. ``'REFERENCE'``.
    value : object
        The parsed content, depending on the field:
        a :class:`Locus` for *LOCUS*, a :class:`str` for *DEFINITION*,
        *ACCESSION*, *VERSION* and *KEYWORDS*, a tuple of source and
        organism text for *SOURCE*, a :class:`Reference` for
        *REFERENCE*, a list of :class:`Primary` for *PRIMARY*,
        a list of :class:`Feature` for *FEATURES* and a
        :class:`Sequence` for *ORIGIN*.
    line_number : int
        The 1-based line number of the field name.
    """

    name: ...
    value: ...
    line_number: ...


def iter_blocks(lines, strict=False, divisions=DIVISIONS,
                layout=DEFAULT_LAYOUT):
    """
    Iterate over the fields of a GenBank record and parse each of them.

    The record is scanned in a single pass.
    Lines, that do not belong to a known field, are skipped.
    The scan ends at the record terminator ``//`` or at the *ORIGIN*
    field, whose following lines are exclusively interpreted as
    sequence.

    Parameters
    ----------
    lines : list of str
        The lines of the record.
    strict : bool, optional
        If true, a *SOURCE*, *REFERENCE*, *PRIMARY* or *FEATURES* field
        cut by the end of the lines raises a
        :class:`TruncatedBlockError`.
        A field followed only by blank lines counts as cut.
        Furthermore, a line in the *FEATURES* field, that is neither
        blank nor part of a feature, raises an
        :class:`InvalidFileError`.
        Otherwise only a warning is raised in both cases and the line
        is skipped.
    divisions : Vocabulary, optional
        The known GenBank division codes.
    layout : ColumnLayout, optional
        The column positions used for line classification.

    Yields
    ------
    block : Block
        The parsed field.

    Raises
    ------
    InvalidFileError
        If a field is malformed, or in strict mode, if a field is cut
        or contains an unexpected line.
    """
    cursor = LineCursor(lines, layout=layout)
    record_name = ""
    while not cursor.at_end():
        if cursor.classify() != LineClass.TOP_LEVEL:
            # Blank line or content of a skipped field
            cursor.advance()
            continue
        line_number = cursor.line_number
        name = cursor.head()
        if name == _TERMINATOR:
            return
        if name not in TOP_LEVEL_KEYWORDS:
            # Unknown fields, e.g. 'COMMENT', are skipped
            cursor.advance()
            continue

        if name == "LOCUS":
            value = parse_locus(cursor.advance(), divisions, line_number)
            record_name = value.name
        elif name in _TEXT_FIELDS:
            value = parse_field(cursor)
        elif name == "SOURCE":
            value = parse_source(cursor)
        elif name == "REFERENCE":
            value = parse_reference(cursor)
        elif name == "PRIMARY":
            value = parse_primary(cursor)
        elif name == "FEATURES":
            # Skip the 'Location/Qualifiers' header
            cursor.advance()
            value = parse_features(cursor, record_name)
            while not cursor.at_end() \
                    and cursor.classify() != LineClass.TOP_LEVEL:
                _report_unexpected_line(name, cursor.line_number, strict)
                cursor.advance()
                value += parse_features(cursor, record_name)
        elif name == "ORIGIN":
            cursor.advance()
            yield Block(name, extract_sequence(cursor.consume_remaining()),
                        line_number)
            # Nothing after the sequence is interpreted as field
            return

        # Trailing blank lines do not terminate a field
        if name in _TERMINATED_FIELDS and cursor.rest_is_blank():
            _report_truncation(name, line_number, strict)
        yield Block(name, value, line_number)


def _report_truncation(name, line_number, strict):
    message = f"The '{name}' field is cut by the end of the input"
    if strict:
        raise TruncatedBlockError(message, line_number)
    warnings.warn(f"Line {line_number}: {message}", UserWarning)


def _report_unexpected_line(name, line_number, strict):
    message = f"Unexpected line in the '{name}' field"
    if strict:
        raise InvalidFileError(message, line_number)
    warnings.warn(f"Line {line_number}: {message} is skipped", UserWarning)


def fold_blocks(blocks):
    """
    Combine parsed GenBank fields into an :class:`AnnotatedSequence`.

    Parameters
    ----------
    blocks : iterable object of Block
        The parsed fields in file order.

    Returns
    -------
    annot_seq : AnnotatedSequence
        The annotated sequence.
        The order of references, primaries and features is the order of
        the `blocks`.
    """
    annot_seq = AnnotatedSequence()
    meta = annot_seq.meta
    for block in blocks:
        if block.name == "LOCUS":
            locus = block.value
            meta.locus = locus
            meta.name = locus.name
            meta.size = _get_size(locus.sequence_length)
            meta.type = locus.molecule_type
            meta.genbank_division = locus.genbank_division
            meta.date = locus.modification_date
        elif block.name == "DEFINITION":
            meta.definition = block.value
        elif block.name == "ACCESSION":
            meta.accession = block.value
        elif block.name == "VERSION":
            meta.version = block.value
        elif block.name == "KEYWORDS":
            meta.keywords = block.value
        elif block.name == "SOURCE":
            meta.source, meta.organism = block.value
        elif block.name == "REFERENCE":
            meta.references.append(block.value)
        elif block.name == "PRIMARY":
            meta.primaries.extend(block.value)
        elif block.name == "FEATURES":
            annot_seq.features.extend(block.value)
        elif block.name == "ORIGIN":
            annot_seq.sequence = block.value
        else:
            raise ValueError(f"Unknown block '{block.name}'")
    return annot_seq


def _get_size(sequence_length):
    digits = re.sub("[^0-9]", "", sequence_length)
    return int(digits) if digits else 0


def get_annotated_sequence(gb_file, strict=False, divisions=DIVISIONS):
    """
    Parse a GenBank record into an :class:`AnnotatedSequence`.

    Parameters
    ----------
    gb_file : GenBankFile
        The GenBank file to be parsed.
    strict : bool, optional
        If true, a field cut by the end of the file raises a
        :class:`TruncatedBlockError`, instead of a warning.
    divisions : Vocabulary, optional
        The known GenBank division codes.

    Returns
    -------
    annot_seq : AnnotatedSequence
        The annotated sequence.
        A file without any field gives an empty
        :class:`AnnotatedSequence`, whose ``meta.locus`` is ``None``.

    Raises
    ------
    InvalidFileError
        If the record is malformed.
    """
    return fold_blocks(iter_blocks(gb_file.lines, strict, divisions))
