"""
Multi-source projects.
"""

__author__ = "Squiggle Core developers"
__copyright__ = "Copyright (c) 2025 Squiggle Core project"
__license__ = "SPDX-License-Identifier: MIT"

from squiggle_core.project.item import ImportBinding, ProjectItem
from squiggle_core.project.project import Project, SourceLoader, evaluate
from squiggle_core.project.resolver import IdentityResolver, MappingResolver, Resolver

__all__ = [
    "ImportBinding",
    "ProjectItem",
    "Project",
    "SourceLoader",
    "evaluate",
    "Resolver",
    "IdentityResolver",
    "MappingResolver",
]
