# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
The common in-memory model of an annotated sequence, shared by all
file formats in :mod:`flatseq.io`.
"""

__name__ = "flatseq"
__all__ = [
    "Locus",
    "Reference",
    "Primary",
    "Meta",
    "Feature",
    "Sequence",
    "AnnotatedSequence",
]

from dataclasses import dataclass, field


@dataclass
class Locus:
    """
    The content of the *LOCUS* line of a GenBank record.

    Parameters
    ----------
    name : str, optional
        The locus name.
    sequence_length : str, optional
        The sequence length together with its unit, e.g. ``'1224 bp'``
        or ``'147 aa'``.
    molecule_type : str, optional
        The molecule type, e.g. ``'DNA'``.
    genbank_division : str, optional
        The three-letter GenBank division code.
    modification_date : str, optional
        The date of last modification, e.g. ``'14-NOV-2006'``.
    circular : bool, optional
        True, if the sequence is circular.

    Attributes
    ----------
    name, sequence_length, molecule_type, genbank_division, modification_date, circular
        Same as the parameters.
    """

    name: ... = ""
    sequence_length: ... = ""
    molecule_type: ... = ""
    genbank_division: ... = ""
    modification_date: ... = ""
    circular: ... = False


@dataclass
class Reference:
    """
    A single citation from the *REFERENCE* fields of a GenBank record.

    All text attributes contain the joined continuation lines of the
    respective subfield.

    Attributes
    ----------
    index : str
        The citation number, as it appears in the file.
    authors, title, journal, pubmed, remark : str
        The subfields of the reference.
    range : str
        The bases the reference refers to, e.g. ``'(bases 1 to 1224)'``.
    """

    index: ... = ""
    authors: ... = ""
    title: ... = ""
    journal: ... = ""
    pubmed: ... = ""
    remark: ... = ""
    range: ... = ""


@dataclass
class Primary:
    """
    A row of the *PRIMARY* field, that maps a span of a
    third party annotation (TPA) or RefSeq record onto the span of a
    primary entry.
    """

    ref_seq: ... = ""
    primary_identifier: ... = ""
    primary_span: ... = ""
    comp: ... = ""


@dataclass
class Meta:
    """
    Header level information of an annotated sequence.

    The first group of attributes is shared between all formats,
    the remaining attributes are only filled when reading GenBank
    records.

    Attributes
    ----------
    name : str
        The sequence name (the *seqid* of the sequence region in GFF3,
        the locus name in GenBank).
    gff_version : str
        The version given in the ``##gff-version`` directive.
    region_start, region_end : int
        Bounds of the ``##sequence-region`` directive.
    size : int
        The sequence length.
    type : str
        The molecule type.
    genbank_division, date, definition, accession, version, keywords, organism, source : str
        GenBank header fields.
    locus : Locus or None
        The parsed *LOCUS* line; ``None`` if the record has none.
    references : list of Reference
        The references in file order.
    primaries : list of Primary
        The *PRIMARY* rows in file order.
    """

    name: ... = ""
    gff_version: ... = ""
    region_start: ... = 0
    region_end: ... = 0
    size: ... = 0
    type: ... = ""
    genbank_division: ... = ""
    date: ... = ""
    definition: ... = ""
    accession: ... = ""
    version: ... = ""
    keywords: ... = ""
    organism: ... = ""
    source: ... = ""
    locus: ... = None
    references: ... = field(default_factory=list)
    primaries: ... = field(default_factory=list)


@dataclass
class Feature:
    """
    A single annotation of a sequence.

    Attributes
    ----------
    name : str
        The *seqid* column in GFF3.
        In GenBank records this is the name of the enclosing record.
    source : str
        The *source* column in GFF3.
    type : str
        The feature type, e.g. ``'gene'`` or ``'CDS'``.
    start, end : int
        The 1-based, inclusive feature bounds.
    score, strand, phase : str
        The respective GFF3 columns, kept as text.
        Empty strings mean that the column is absent.
    attributes : dict of str -> str
        The GFF3 attributes or GenBank qualifiers.
        Boolean qualifiers like ``/pseudo`` map to an empty string.
    location : str
        The unparsed GenBank location, e.g. ``'complement(1..200)'``.
    sequence : str
        Reserved for the feature sequence.
    """

    name: ... = ""
    source: ... = ""
    type: ... = ""
    start: ... = 0
    end: ... = 0
    score: ... = ""
    strand: ... = ""
    phase: ... = ""
    attributes: ... = field(default_factory=dict)
    location: ... = ""
    sequence: ... = ""


@dataclass
class Sequence:
    """
    The raw sequence of an annotated sequence.

    Attributes
    ----------
    description : str
        The FASTA header line of the sequence (GFF3 only).
    sequence : str
        The sequence letters without whitespace or position numbers.
    """

    description: ... = ""
    sequence: ... = ""

    def __len__(self):
        return len(self.sequence)


@dataclass
class AnnotatedSequence:
    """
    An annotated sequence combines the header information, the features
    and the sequence letters read from a single record.

    Each call of a parsing function creates a new, independent
    :class:`AnnotatedSequence`.

    Attributes
    ----------
    meta : Meta
        The header information.
    features : list of Feature
        The features in file order.
    sequence : Sequence
        The sequence letters.

    Examples
    --------

    >>> annot_seq = AnnotatedSequence()
    >>> annot_seq.features.append(Feature(type="gene", start=1, end=10))
    >>> print(len(annot_seq.features))
    1
    >>> print(annot_seq.meta.locus)
    None
    """

    meta: ... = field(default_factory=Meta)
    features: ... = field(default_factory=list)
    sequence: ... = field(default_factory=Sequence)
