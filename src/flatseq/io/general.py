# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This module contains convenience functions for loading and saving
annotated sequences from general files.
"""

__name__ = "flatseq.io"
__all__ = ["load_annotated_sequence", "save_annotated_sequence"]

import os.path


def load_annotated_sequence(file_path, strict=False):
    """
    Load an annotated sequence from a file without the need
    to manually instantiate a :class:`File` object.

    Internally this function uses a :class:`File` object, based on the
    file extension.

    Parameters
    ----------
    file_path : str
        The path to the file.
    strict : bool, optional
        Only used for GenBank files:
        If true, a field cut by the end of the file raises a
        :class:`TruncatedBlockError`.

    Returns
    -------
    annot_seq : AnnotatedSequence
        The annotated sequence in the file.
        For GenBank files containing multiple records, only the first
        record is read.

    Raises
    ------
    OSError
        If the file cannot be read.
    ValueError
        If the file extension is unknown.
    """
    # We only need the suffix here
    filename, suffix = os.path.splitext(file_path)
    if suffix in [".gb", ".gbk", ".genbank"]:
        from .genbank import GenBankFile, MultiFile, get_annotated_sequence
        file = MultiFile.read(file_path)
        for record in file:
            return get_annotated_sequence(record, strict)
        # A file without any record
        return get_annotated_sequence(GenBankFile(), strict)
    elif suffix in [".gff", ".gff3"]:
        from .gff import GFFFile, get_annotated_sequence
        file = GFFFile.read(file_path)
        return get_annotated_sequence(file)
    elif suffix == ".json":
        from .json import JSONFile, get_annotated_sequence
        file = JSONFile.read(file_path)
        return get_annotated_sequence(file)
    else:
        raise ValueError(f"Unknown file format '{suffix}'")


def save_annotated_sequence(file_path, annot_seq):
    """
    Save an annotated sequence into a file without the need
    to manually instantiate a :class:`File` object.

    Internally this function uses a :class:`File` object, based on the
    given file extension.

    Parameters
    ----------
    file_path : str
        The path to the file.
    annot_seq : AnnotatedSequence
        The annotated sequence to be saved.

    Raises
    ------
    OSError
        If the file cannot be written.
    ValueError
        If the file extension is unknown.
    NotImplementedError
        If a GenBank file is requested.
    """
    # We only need the suffix here
    filename, suffix = os.path.splitext(file_path)
    if suffix in [".gb", ".gbk", ".genbank"]:
        raise NotImplementedError(
            "Writing GenBank files is currently not supported"
        )
    elif suffix in [".gff", ".gff3"]:
        from .gff import GFFFile, set_annotated_sequence
        file = GFFFile()
        set_annotated_sequence(file, annot_seq)
        file.write(file_path)
    elif suffix == ".json":
        from .json import JSONFile, set_annotated_sequence
        file = JSONFile()
        set_annotated_sequence(file, annot_seq)
        file.write(file_path)
    else:
        raise ValueError(f"Unknown file format '{suffix}'")
