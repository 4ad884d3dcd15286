# ------------------------------------------------------------------------------
#  CollectiPy
#  Copyright (c) 2025 Fabio Oddi
#
#  This file is part of CollectyPy, released under the BSD 3-Clause License.
#  You may use, modify, and redistribute this file according to the terms of the
#  license. Attribution is required if this code is used in other works.
# ------------------------------------------------------------------------------

"""
Steering behaviour package.

Importing submodules registers the built-in steering behaviours.
"""

# Register built-in behaviours on import.
from . import wander  # noqa: F401
from . import pursuit  # noqa: F401
