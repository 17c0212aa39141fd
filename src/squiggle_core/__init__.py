"""
Squiggle Core
=============

Evaluation engine for a small probabilistic functional language: parser,
tree-walking reducer, standard library of distribution, list, dict, date
and tag functions, and multi-source projects with cached runs.
"""

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .dists.environment import Environment, default_environment
from .errors import *
from .errors import __all__ as _errors_all
from .project import *
from .project import __all__ as _project_all
from .public import *
from .public import __all__ as _public_all
from .result import Err, Ok, Result

__version__ = version("squiggle-core")
__all__ = [
    "__version__",
    "Environment",
    "default_environment",
    "Err",
    "Ok",
    "Result",
    *_errors_all,
    *_project_all,
    *_public_all,
]

del _errors_all
del _project_all
del _public_all
