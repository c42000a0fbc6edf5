"""Relationship detectors — supertypes, fields, dependencies.

Each detector walks the classifiers of an InferenceContext and records
edges on it; duplicate and self edges are filtered by the context.
"""

import logging

from ..uml.models import ClassifierKind, RelationshipKind
from .context import InferenceContext, UnresolvedSupertype, extract_type_identifiers

logger = logging.getLogger(__name__)


# ── Supertypes ───────────────────────────────────────────────────────


def detect_supertypes(ctx: InferenceContext) -> int:
    """Turn declared extends/implements clauses into edges.

    - Class ``extends``               -> Inheritance
    - Class / Enum ``implements``     -> Implementation
    - Interface ``extends``           -> Inheritance

    Supertypes outside the batch (e.g. java.io.Serializable) get no edge,
    only an UnresolvedSupertype diagnostic.
    """
    count = 0
    for c in ctx.classifiers:
        declared = []
        if c.declared_superclass:
            declared.append((c.declared_superclass, "extends", RelationshipKind.INHERITANCE))
        interface_kind = (
            RelationshipKind.INHERITANCE
            if c.kind is ClassifierKind.INTERFACE
            else RelationshipKind.IMPLEMENTATION
        )
        relation = "extends" if c.kind is ClassifierKind.INTERFACE else "implements"
        for name in c.declared_interfaces:
            declared.append((name, relation, interface_kind))

        for name, relation, kind in declared:
            target = ctx.resolve(name, c)
            if target is None:
                ctx.report.unresolved.append(
                    UnresolvedSupertype(owner=c.qualified_name, supertype=name, relation=relation)
                )
                logger.debug(f"{c.qualified_name} {relation} {name}: not in batch, no edge")
                continue
            if ctx.add_edge(c, target, kind):
                count += 1
    return count


# ── Fields ───────────────────────────────────────────────────────────


def detect_field_edges(ctx: InferenceContext) -> int:
    """Field types -> Composition (final field) or Association."""
    count = 0
    for c in ctx.classifiers:
        for f in c.fields:
            kind = RelationshipKind.COMPOSITION if f.is_final else RelationshipKind.ASSOCIATION
            for ident in extract_type_identifiers(f.type_name):
                target = ctx.resolve(ident, c)
                if target is not None and ctx.add_edge(c, target, kind):
                    count += 1
    return count


# ── Dependencies ─────────────────────────────────────────────────────


def detect_dependencies(ctx: InferenceContext) -> int:
    """Operation return and parameter types -> Dependency."""
    count = 0
    for c in ctx.classifiers:
        for op in c.operations:
            type_refs = [op.return_type] + [p.type_name for p in op.parameters]
            for type_str in type_refs:
                for ident in extract_type_identifiers(type_str):
                    target = ctx.resolve(ident, c)
                    if target is not None and ctx.add_edge(c, target, RelationshipKind.DEPENDENCY):
                        count += 1
    return count
