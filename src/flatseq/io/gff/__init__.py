# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage is used for reading and writing annotated sequences in
the *Generic Feature Format 3* (GFF3).

It provides the :class:`GFFFile` class, a low-level line-based
interface to this format, and high-level functions for converting
between a :class:`GFFFile` and an :class:`AnnotatedSequence`.
The reference sequence is stored as FASTA data after the ``##FASTA``
directive.

.. note: This package cannot create hierarchical data structures from
   GFF 3 files.
   However, the ``ID`` and ``Parent`` attributes are stored in the
   attributes of the created :class:`Feature` objects.
"""

__name__ = "flatseq.io.gff"

from .file import *
from .convert import *
