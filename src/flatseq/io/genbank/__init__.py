# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage is used for reading annotated sequences from files in
the *GenBank* and *GenPept* format.

The format has no delimiters: the structure of a record is given by
the indentation of each line (see :func:`classify_line()`) and by a
closed set of field names.
The parsing functions for the individual fields share a
:class:`LineCursor`, that is moved forward through the lines of the
record in a single pass.
"""

__name__ = "flatseq.io.genbank"

from .vocabulary import *
from .lines import *
from .metadata import *
from .annotation import *
from .sequence import *
from .file import *
