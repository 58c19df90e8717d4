# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

__name__ = "flatseq.io.gff"
__all__ = ["GFF_VERSION", "FASTA_LINE_LENGTH",
           "get_annotated_sequence", "set_annotated_sequence"]

import re
import warnings
from ...annotation import AnnotatedSequence, Feature, Sequence
from ...file import InvalidFileError

# Written, if the annotated sequence does not specify a version
GFF_VERSION = "3"
FASTA_LINE_LENGTH = 70


def get_annotated_sequence(gff_file):
    """
    Parse a GFF3 file into an :class:`AnnotatedSequence`.

    The ``##gff-version`` and ``##sequence-region`` directives fill
    :attr:`Meta.gff_version`, :attr:`Meta.name`,
    :attr:`Meta.region_start`, :attr:`Meta.region_end` and
    :attr:`Meta.size`.
    Each entry becomes a :class:`Feature`, in file order.
    The FASTA data after the ``##FASTA`` directive becomes the
    :class:`Sequence`.

    Parameters
    ----------
    gff_file : GFFFile
        The file to extract the :class:`AnnotatedSequence` from.

    Returns
    -------
    annot_seq : AnnotatedSequence
        The extracted annotated sequence.

    Raises
    ------
    InvalidFileError
        If an entry or the ``##sequence-region`` directive is malformed.
    """
    annot_seq = AnnotatedSequence()
    meta = annot_seq.meta

    for directive, line_i in gff_file.directives():
        tokens = directive.split()
        if len(tokens) == 0:
            continue
        if tokens[0] == "gff-version":
            if len(tokens) > 1:
                meta.gff_version = tokens[1]
        elif tokens[0] == "sequence-region":
            if meta.name != "":
                warnings.warn(
                    f"Line {line_i + 1}: Only the first sequence region "
                    f"is used",
                    UserWarning
                )
                continue
            if len(tokens) != 4:
                raise InvalidFileError(
                    "Sequence region requires a name, a start and an end",
                    line_i + 1
                )
            try:
                start = int(tokens[2])
                end = int(tokens[3])
            except ValueError:
                raise InvalidFileError(
                    f"Invalid sequence region bounds "
                    f"'{tokens[2]}' and '{tokens[3]}'",
                    line_i + 1
                )
            meta.name = tokens[1]
            meta.region_start = start
            meta.region_end = end
            meta.size = end - start + 1

    for entry in gff_file:
        seqid, source, type, start, end, score, strand, phase, attrib = entry
        annot_seq.features.append(Feature(
            name=seqid,
            source=source,
            type=type,
            start=start,
            end=end,
            score=score,
            strand=strand,
            phase=phase,
            attributes=attrib,
        ))

    description, sequence = gff_file.get_fasta()
    annot_seq.sequence = Sequence(description=description, sequence=sequence)
    return annot_seq


def set_annotated_sequence(gff_file, annot_seq):
    """
    Write an :class:`AnnotatedSequence` into an empty GFF3 file.

    The file gets the ``##gff-version`` and ``##sequence-region``
    directives, one entry for each feature and the sequence after a
    ``##FASTA`` directive, wrapped after 70 letters.
    The attributes of each entry are sorted by their key.

    Parameters
    ----------
    gff_file : GFFFile
        The empty GFF3 file to write into.
    annot_seq : AnnotatedSequence
        The annotated sequence, which is written into the file.

    Notes
    -----
    Missing values are taken from other sources:
    The sequence region name is :attr:`Meta.name`, the locus name,
    the accession, or ``'unknown'``, whichever is available first.
    The region end is :attr:`Meta.region_end` or the length given in
    the *LOCUS* line.
    Features without a name, source or type get the region name,
    ``'feature'`` and ``'unknown'``, respectively.
    """
    if len(gff_file.lines) != 0:
        raise ValueError("The GFF3 file must be empty")
    meta = annot_seq.meta

    name = _get_region_name(meta)
    start = meta.region_start if meta.region_start != 0 else 1
    end = meta.region_end if meta.region_end != 0 else _get_locus_end(meta)

    version = meta.gff_version if meta.gff_version != "" else GFF_VERSION
    gff_file.append_directive("gff-version", version)
    gff_file.append_directive("sequence-region", name, start, end)

    for feature in annot_seq.features:
        attributes = {
            key: feature.attributes[key] for key in sorted(feature.attributes)
        }
        gff_file.append(
            feature.name if feature.name != "" else name,
            feature.source if feature.source != "" else "feature",
            feature.type if feature.type != "" else "unknown",
            feature.start,
            feature.end,
            feature.score,
            feature.strand,
            feature.phase,
            attributes,
        )

    # Resolve forward references
    gff_file.lines.append("###")
    gff_file.set_fasta(
        name, annot_seq.sequence.sequence, FASTA_LINE_LENGTH
    )


def _get_region_name(meta):
    if meta.name != "":
        return meta.name
    if meta.locus is not None and meta.locus.name != "":
        return meta.locus.name
    if meta.accession.strip() != "":
        # Multiple accessions may be given
        return meta.accession.split()[0]
    return "unknown"


def _get_locus_end(meta):
    if meta.locus is None:
        return 1
    digits = re.sub("[^0-9]", "", meta.locus.sequence_length)
    return int(digits) if digits else 1
