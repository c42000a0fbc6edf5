"""classloom Structural Validator.

Public API:
    validate(diagram) -> List[str]
    is_valid_multiplicity(expr) -> bool
"""

from .validator import MULTIPLICITY_RE, is_valid_multiplicity, validate

__all__ = ["validate", "is_valid_multiplicity", "MULTIPLICITY_RE"]
