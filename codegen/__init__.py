"""
Binding Generator Package
Turns compiled contract artifacts into Python binding modules
"""

from .artifacts import Artifact, find_artifacts, load_artifact
from .generator import module_name, render_binding, write_binding

__all__ = [
    'Artifact',
    'find_artifacts',
    'load_artifact',
    'module_name',
    'render_binding',
    'write_binding',
]
