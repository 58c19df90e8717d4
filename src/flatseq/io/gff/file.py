# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "flatseq.io.gff"
__all__ = ["GFFFile"]

import string
from urllib.parse import quote, unquote
from ...file import InvalidFileError, TextFile, wrap_string

# All punctuation characters except
# percent, semicolon, equals, ampersand, comma
_NOT_QUOTED = "".join(
    [char for char in string.punctuation if char not in "%;=&,"]
) + " "
_FASTA_DIRECTIVE = "FASTA"


class GFFFile(TextFile):
    """
    This class represents a file in *Generic Feature Format 3*
    (`GFF3 <https://github.com/The-Sequence-Ontology/Specifications/blob/master/gff3.md>`_)
    format, optionally followed by the reference sequence in FASTA
    format.

    This class serves as low-level API for accessing GFF3 files.
    It is used as a sequence of entries, where each entry is defined as
    a non-comment and non-directive line before the ``##FASTA``
    directive.
    Each entry consists of values corresponding to the 9 columns of
    GFF3:

    ==============  ===========  =====================================================
    **seqid**       ``str``      The ID of the reference sequence
    **source**      ``str``      Source of the data (e.g. ``Genbank``)
    **type**        ``str``      Type of the feature (e.g. ``CDS``)
    **start**       ``int``      Start coordinate of feature on the reference sequence
    **end**         ``int``      End coordinate of feature on the reference sequence
    **score**       ``str``      Optional score, empty if absent
    **strand**      ``str``      Strand of the feature, empty if absent
    **phase**       ``str``      Reading frame shift, empty if absent
    **attributes**  ``dict``     Additional properties of the feature
    ==============  ===========  =====================================================

    Unlike most GFF3 tools, absent *score*, *strand* and *phase* values
    are written as empty columns and read back as empty strings.

    Examples
    --------

    >>> gff_file = GFFFile()
    >>> gff_file.append_directive("gff-version", "3")
    >>> gff_file.append(
    ...     "SomeSeqID", "flatseq", "CDS", 1, 99, "", "+", "0",
    ...     {"ID": "FeatureID", "product": "A protein"}
    ... )
    >>> print(gff_file[0])
    ('SomeSeqID', 'flatseq', 'CDS', 1, 99, '', '+', '0', {'ID': 'FeatureID', 'product': 'A protein'})
    >>> gff_file.set_fasta("SomeSeqID", "ACGT")
    >>> print(gff_file.get_fasta())
    ('SomeSeqID', 'ACGT')
    """

    def __init__(self):
        super().__init__()
        # Maps entry indices to line indices
        self._entries = None
        # Stores the directives as (directive text, line index)-tuple
        self._directives = None
        # Line index of the '##FASTA' directive
        self._fasta_start = None
        self._index_entries()

    @classmethod
    def read(cls, file):
        """
        Read a GFF3 file.

        Parameters
        ----------
        file : file-like object or str
            The file to be read.
            Alternatively a file path can be supplied.

        Returns
        -------
        file_object : GFFFile
            The parsed file.
        """
        file = super().read(file)
        file._index_entries()
        return file

    def append(self, seqid, source, type, start, end,
               score, strand, phase, attributes):
        """
        Append an entry to the end of the file.

        Parameters
        ----------
        seqid, source, type : str
            The first three columns.
        start, end : int
            Coordinates of feature on the reference sequence.
        score, strand, phase : str
            The respective columns, may be empty.
        attributes : dict
            Additional properties of the feature.
            The entries are written in the order of the dictionary.
        """
        if self._fasta_start is not None:
            raise NotImplementedError(
                "Cannot append feature entries, "
                "as this file contains additional FASTA data"
            )
        line = GFFFile._create_line(
            seqid, source, type, start, end, score, strand, phase, attributes
        )
        self.lines.append(line)
        # Fast update of entry index by adding last line
        self._entries.append(len(self.lines) - 1)

    def append_directive(self, directive, *args):
        """
        Append a directive line to the end of the file.

        Parameters
        ----------
        directive : str
            Name of the directive.
        *args : str
            Optional parameters for the directive.
            Each argument is simply appended to the directive, separated
            by a single space character.

        Raises
        ------
        NotImplementedError
            If the ``##FASTA`` directive is used.
            Use :meth:`set_fasta()` instead.
        """
        if directive.startswith(_FASTA_DIRECTIVE):
            raise NotImplementedError(
                "Use 'set_fasta()' to add FASTA data"
            )
        if self._fasta_start is not None:
            raise NotImplementedError(
                "Cannot append directives, "
                "as this file contains additional FASTA data"
            )
        directive_line = " ".join(["##" + directive] + [str(a) for a in args])
        self._directives.append((directive_line[2:], len(self.lines)))
        self.lines.append(directive_line)

    def directives(self):
        """
        Get the directives in the file.

        Returns
        -------
        directives : list of tuple(str, int)
            A list of directives, sorted by their line order.
            The first element of each tuple is the directive
            (without ``##``), the second element is the index
            of the corresponding line.
        """
        return sorted(self._directives, key=lambda directive: directive[1])

    def set_fasta(self, description, sequence, line_length=70):
        """
        Append the reference sequence after a ``##FASTA`` directive.

        Parameters
        ----------
        description : str
            The FASTA header, without the leading ``>``.
        sequence : str
            The sequence letters.
        line_length : int, optional
            The sequence is wrapped after this number of letters.
        """
        if self._fasta_start is not None:
            raise NotImplementedError("The file already contains FASTA data")
        self._fasta_start = len(self.lines)
        self.lines.append("##" + _FASTA_DIRECTIVE)
        self.lines.append(">" + description)
        self.lines += wrap_string(sequence, line_length)

    def get_fasta(self):
        """
        Get the reference sequence after the ``##FASTA`` directive.

        Only the first FASTA entry is read.

        Returns
        -------
        description : str
            The FASTA header, without the leading ``>``.
            Empty, if the file contains no FASTA data.
        sequence : str
            The sequence letters.
            Empty, if the file contains no FASTA data.
        """
        if self._fasta_start is None:
            return "", ""
        description = None
        seq_lines = []
        for line in self.lines[self._fasta_start + 1 :]:
            line = line.strip()
            if len(line) == 0:
                continue
            if line.startswith(">"):
                if description is not None:
                    # Only the first sequence
                    break
                description = line[1:].strip()
            else:
                seq_lines.append(line)
        description = "" if description is None else description
        return description, "".join(seq_lines)

    def __getitem__(self, index):
        if (index >= 0 and index >= len(self)) or \
           (index < 0 and -index > len(self)):
            raise IndexError(
                f"Index {index} is out of range for GFFFile with "
                f"{len(self)} entries"
            )

        line_index = self._entries[index]
        line_number = line_index + 1
        # Columns are tab separated
        s = self.lines[line_index].split("\t")
        if len(s) != 9:
            raise InvalidFileError(
                f"Expected 9 columns, but got {len(s)}", line_number
            )
        seqid, source, type, start, end, score, strand, phase, attrib = s

        seqid = unquote(seqid)
        source = unquote(source)
        type = unquote(type)
        try:
            start = int(start)
            end = int(end)
        except ValueError:
            raise InvalidFileError(
                f"Invalid feature coordinates '{start}' and '{end}'",
                line_number
            )
        attrib = GFFFile._parse_attributes(attrib, line_number)

        return seqid, source, type, start, end, score, strand, phase, attrib

    def __len__(self):
        return len(self._entries)

    def _index_entries(self):
        """
        Parse the file for comment and directive lines.
        Count these lines cumulatively, so that entry indices can be
        mapped onto line indices.
        Additionally track the line index of directive lines.
        """
        self._directives = []
        self._entries = []
        self._fasta_start = None
        for line_i, line in enumerate(self.lines):
            if len(line.strip()) == 0:
                # Empty line -> do nothing
                pass
            elif line.startswith("#"):
                # Comment or directive
                if line.startswith("##"):
                    # Omit the leading '##'
                    self._directives.append((line[2:], line_i))
                    if line[2:].strip() == _FASTA_DIRECTIVE:
                        self._fasta_start = line_i
                        # The remaining lines are sequence data
                        break
            else:
                self._entries.append(line_i)

    @staticmethod
    def _create_line(seqid, source, type, start, end,
                     score, strand, phase, attributes):
        """
        Create a line for a newly created entry.
        """
        seqid = quote(seqid.strip(), safe=_NOT_QUOTED)
        source = quote(source.strip(), safe=_NOT_QUOTED)
        type = quote(type.strip(), safe=_NOT_QUOTED)
        if len(type) == 0:
            raise ValueError("'type' must not be empty")
        if seqid.startswith(">"):
            raise ValueError("'seqid' must not start with '>'")

        attributes = ";".join(
            [quote(key, safe=_NOT_QUOTED) + "=" + quote(val, safe=_NOT_QUOTED)
             for key, val in attributes.items()]
        )
        return "\t".join(
            [seqid, source, type, str(start), str(end),
             score, strand, phase, attributes]
        )

    @staticmethod
    def _parse_attributes(attributes, line_number):
        """
        Parse the *attributes* string into a dictionary.
        """
        attrib_dict = {}
        for entry in attributes.split(";"):
            if len(entry.strip()) == 0:
                continue
            if "=" not in entry:
                raise InvalidFileError(
                    f"Attribute entry '{entry}' is invalid", line_number
                )
            key, val = entry.split("=", 1)
            attrib_dict[unquote(key)] = unquote(val)
        return attrib_dict
