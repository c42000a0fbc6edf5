"""Structural validation of class diagrams.

Every rule runs against the same diagram snapshot and appends its own
issue strings; nothing is mutated and nothing short-circuits.
"""

import logging
import re
from typing import Dict, List, Optional, Set, Tuple

from ..uml.models import STRUCTURAL_KINDS, Classifier, ClassifierKind, Diagram, RelationshipKind

logger = logging.getLogger(__name__)

# "3", "*", "0..1", "1..*"
MULTIPLICITY_RE = re.compile(r"(\d+|\*)|(\d+)\.\.(\d+|\*)")


def is_valid_multiplicity(expr: str) -> bool:
    """Check a multiplicity expression against the UML cardinality grammar."""
    return MULTIPLICITY_RE.fullmatch(expr) is not None


def validate(diagram: Diagram) -> List[str]:
    """Validate a diagram and return its issues in rule order.

    Args:
        diagram: Diagram to check (left unchanged)

    Returns:
        Issue messages; an empty list for a clean diagram
    """
    issues: List[str] = []
    issues.extend(_check_duplicate_names(diagram))
    issues.extend(_check_inheritance_cycles(diagram))
    issues.extend(_check_multiple_inheritance(diagram))
    issues.extend(_check_implementation_targets(diagram))
    issues.extend(_check_multiplicities(diagram))

    if issues:
        logger.info(f"Diagram '{diagram.name}': {len(issues)} validation issue(s)")
    return issues


# =============================================================================
# Rules
# =============================================================================

def _check_duplicate_names(diagram: Diagram) -> List[str]:
    issues = []
    seen: Set[Tuple[str, str]] = set()
    for c in diagram.classifiers():
        key = (c.namespace, c.name)
        if key in seen:
            issues.append(f"Duplicate classifier name: {c.qualified_name}")
        else:
            seen.add(key)
    return issues


def _inheritance_parents(diagram: Diagram) -> Dict[str, List[Classifier]]:
    parents: Dict[str, List[Classifier]] = {}
    for r in diagram.relationships():
        if r.kind is RelationshipKind.INHERITANCE:
            parents.setdefault(r.source.id, []).append(r.target)
    return parents


def _check_inheritance_cycles(diagram: Diagram) -> List[str]:
    issues = []
    parents = _inheritance_parents(diagram)
    for c in diagram.classifiers():
        for parent in parents.get(c.id, []):
            if _reaches(parent, c, parents, {c.id}):
                issues.append(f"Inheritance cycle detected involving {c.qualified_name}")
                break
    return issues


def _reaches(
    start: Classifier,
    goal: Classifier,
    parents: Dict[str, List[Classifier]],
    visited: Set[str],
) -> bool:
    """Depth-first search along inheritance edges from ``start`` to ``goal``."""
    stack = [start]
    while stack:
        current = stack.pop()
        # goal is in the seeded visited set, so test it first
        if current is goal:
            return True
        if current.id in visited:
            continue
        visited.add(current.id)
        stack.extend(parents.get(current.id, []))
    return False


def _check_multiple_inheritance(diagram: Diagram) -> List[str]:
    issues = []
    parents = _inheritance_parents(diagram)
    for c in diagram.classifiers():
        if c.kind is ClassifierKind.INTERFACE:
            continue
        targets = parents.get(c.id, [])
        if len(targets) > 1:
            names = ", ".join(t.qualified_name for t in targets)
            issues.append(
                f"Multiple inheritance detected for {c.qualified_name} "
                f"(extends {names}); only single inheritance is supported"
            )
    return issues


def _check_implementation_targets(diagram: Diagram) -> List[str]:
    issues = []
    for r in diagram.relationships():
        if r.kind is RelationshipKind.IMPLEMENTATION and r.target.kind is not ClassifierKind.INTERFACE:
            issues.append(
                f"Invalid implementation relationship from {r.source.qualified_name} "
                f"to {r.target.qualified_name}: target must be an interface"
            )
    return issues


def _check_multiplicities(diagram: Diagram) -> List[str]:
    issues = []
    for r in diagram.relationships():
        if r.kind not in STRUCTURAL_KINDS:
            continue
        for side, expr in (("source", r.source_multiplicity), ("target", r.target_multiplicity)):
            message = _multiplicity_issue(side, expr, r.source, r.target)
            if message:
                issues.append(message)
    return issues


def _multiplicity_issue(
    side: str, expr: Optional[str], source: Classifier, target: Classifier
) -> Optional[str]:
    if not expr or is_valid_multiplicity(expr):
        return None
    return (
        f"Invalid {side} multiplicity '{expr}' in relationship between "
        f"{source.qualified_name} and {target.qualified_name}"
    )
