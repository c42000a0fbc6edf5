"""Turn extracted types into a Diagram.

All classifiers of a batch are added before inference runs, so
cross-file references resolve against the complete set.
"""

import copy
import logging
from typing import List, Sequence

from ..inference import analyze_relationships, merge_relationships
from ..uml.layout import apply_grid_layout
from ..uml.models import Classifier, Diagram
from .models import ExtractedType

logger = logging.getLogger(__name__)


def build_classifier(extracted: ExtractedType) -> Classifier:
    """Create a Classifier from an extracted type (members are copied)."""
    return Classifier(
        name=extracted.name,
        namespace=extracted.namespace,
        kind=extracted.kind,
        is_abstract=extracted.is_abstract,
        fields=copy.deepcopy(extracted.fields),
        operations=copy.deepcopy(extracted.operations),
        literals=list(extracted.literals),
        declared_superclass=extracted.superclass,
        declared_interfaces=list(extracted.interfaces),
    )


def build_diagram(
    name: str,
    types: List[ExtractedType],
    infer: bool = True,
    synthesize_supertypes: bool = True,
    search_order: Sequence[str] = (),
    layout: bool = True,
) -> Diagram:
    """Build a diagram from one extraction unit.

    Args:
        name: Diagram name
        types: Every type of the unit (all files)
        infer: Run relationship inference and merge the result
        synthesize_supertypes: Turn declared extends/implements into edges
        search_order: Namespace preference for ambiguous simple names
        layout: Apply the grid layout

    Returns:
        The populated Diagram
    """
    diagram = Diagram(name)
    for extracted in types:
        diagram.add_classifier(build_classifier(extracted))

    if infer:
        report = analyze_relationships(
            diagram,
            search_order=search_order,
            synthesize_supertypes=synthesize_supertypes,
        )
        added = merge_relationships(diagram, report.relationships)
        logger.info(
            f"Diagram '{name}': {len(diagram.classifiers())} classifier(s), {added} inferred relationship(s)"
        )

    if layout:
        apply_grid_layout(diagram)
    return diagram
