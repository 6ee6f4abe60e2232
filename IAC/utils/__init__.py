"""
Utility functions for Pulumi infrastructure.

Provides naming conventions, tag factories, backend URLs and output utilities.
"""

from IAC.utils.naming import ResourceNamer
from IAC.utils.tags import create_tags, merge_tags
from IAC.utils.outputs import write_outputs_to_env
from IAC.utils.backend import build_backend_url

__all__ = [
    "ResourceNamer",
    "create_tags",
    "merge_tags",
    "write_outputs_to_env",
    "build_backend_url",
]
