"""Analysis API routes — structural extraction without building a diagram.

  POST /analysis/extract   → extracted types of one source text
"""

import logging
from typing import Dict

from fastapi import APIRouter, Depends

from ...core.extractor.models import ExtractedType
from ...core.uml.serialization import field_to_dict, operation_to_dict
from ..deps import get_diagram_service
from ..schemas import ExtractRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analysis", tags=["analysis"])


def _extracted_to_dict(t: ExtractedType) -> Dict:
    return {
        "name": t.name,
        "namespace": t.namespace,
        "qualified_name": t.qualified_name,
        "kind": t.kind.value,
        "is_abstract": t.is_abstract,
        "superclass": t.superclass,
        "interfaces": list(t.interfaces),
        "fields": [field_to_dict(f) for f in t.fields],
        "operations": [operation_to_dict(op) for op in t.operations],
        "literals": list(t.literals),
        "start_line": t.start_line,
    }


@router.post("/extract")
async def extract_types(
    body: ExtractRequest,
    diagram_service=Depends(get_diagram_service),
):
    """Extract type declarations from a single source text."""
    types = diagram_service.extract_source(body.source, body.namespace_hint)
    return {
        "types": [_extracted_to_dict(t) for t in types],
        "count": len(types),
    }
