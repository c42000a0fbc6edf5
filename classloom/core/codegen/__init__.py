"""classloom Code Generator — Java source from diagram classifiers.

Public API:
    generate(classifier, relationships) -> str
    generate_unit(diagram, output_root) -> int
    output_path_for(classifier, output_root) -> str
"""

from .java_generator import (
    collect_imports,
    default_return_literal,
    generate,
    generate_unit,
    output_path_for,
)

__all__ = [
    "generate",
    "generate_unit",
    "output_path_for",
    "collect_imports",
    "default_return_literal",
]
