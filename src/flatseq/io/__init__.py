# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
A subpackage for reading and writing annotated sequences from/to
flat files.

Each file format has its own subpackage: :mod:`flatseq.io.genbank`
(read only), :mod:`flatseq.io.gff` and :mod:`flatseq.io.json`.
The functions in this subpackage select the format based on the file
extension.
"""

__name__ = "flatseq.io"

from .general import *
