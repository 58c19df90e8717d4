# This source code is part of the flatseq package and is distributed
# under the 3-Clause BSD License. Please see 'LICENSE.rst' for further
# information.

"""
This subpackage is used for storing annotated sequences as JSON.

Each attribute of an :class:`AnnotatedSequence` and its components
is stored under its own name.
When reading, every key is optional:
Missing keys get the default value of the respective attribute and
unknown keys are ignored.
"""

__name__ = "flatseq.io.json"

from .file import *
