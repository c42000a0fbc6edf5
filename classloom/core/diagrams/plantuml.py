"""Deterministic PlantUML export for class diagrams.

Text only: the result can be fed to any PlantUML renderer.
"""

import logging
import re
from typing import Dict, List

from ..uml.models import Classifier, ClassifierKind, Diagram, Relationship, RelationshipKind

logger = logging.getLogger(__name__)

_SKINPARAM = """
skinparam backgroundColor #FEFEFE
skinparam shadowing false
skinparam defaultFontSize 12
skinparam roundCorner 8
skinparam classAttributeIconSize 0

skinparam class {
  BackgroundColor #F8F9FA
  BorderColor #495057
  ArrowColor #6C757D
  FontColor #212529
  AttributeFontColor #495057
  StereotypeFontColor #6C757D
}

skinparam package {
  BackgroundColor #F1F3F5
  BorderColor #ADB5BD
  FontColor #343A40
  FontStyle bold
}
""".strip()

ARROWS: Dict[RelationshipKind, str] = {
    RelationshipKind.INHERITANCE: "--|>",
    RelationshipKind.IMPLEMENTATION: "..|>",
    RelationshipKind.ASSOCIATION: "-->",
    RelationshipKind.AGGREGATION: "o--",
    RelationshipKind.COMPOSITION: "*--",
    RelationshipKind.DEPENDENCY: "..>",
}


def _sanitize(text: str) -> str:
    """Strip characters that break a PlantUML line or quoted name."""
    cleaned = re.sub(r'["\r\n]', " ", text)
    return re.sub(r"\s+", " ", cleaned).strip()


def _alias(classifier: Classifier, idx: int) -> str:
    safe = re.sub(r"[^a-zA-Z0-9]", "_", classifier.name)[:30]
    return f"{safe}_{idx}"


def _render_classifier(classifier: Classifier, alias: str) -> List[str]:
    if classifier.kind is ClassifierKind.INTERFACE:
        keyword = "interface"
    elif classifier.kind is ClassifierKind.ENUMERATION:
        keyword = "enum"
    elif classifier.is_abstract:
        keyword = "abstract class"
    else:
        keyword = "class"

    lines = [f'{keyword} "{_sanitize(classifier.name)}" as {alias} {{']

    for literal in classifier.literals:
        lines.append(f"  {_sanitize(literal)}")
    if classifier.literals and (classifier.fields or classifier.operations):
        lines.append("  --")

    for f in classifier.fields:
        static = "{static} " if f.is_static else ""
        lines.append(f"  {static}{f.visibility.symbol}{_sanitize(f.name)} : {_sanitize(f.type_name)}")

    if classifier.fields and classifier.operations:
        lines.append("  --")

    for op in classifier.operations:
        modifier = "{abstract} " if op.is_abstract else "{static} " if op.is_static else ""
        params = ", ".join(f"{_sanitize(p.name)}: {_sanitize(p.type_name)}" for p in op.parameters)
        ret = f" : {_sanitize(op.return_type)}" if op.return_type else ""
        lines.append(f"  {modifier}{op.visibility.symbol}{_sanitize(op.name)}({params}){ret}")

    lines.append("}")
    return lines


def _render_relationship(r: Relationship, aliases: Dict[str, str]) -> str:
    source = aliases[r.source.id]
    target = aliases[r.target.id]
    arrow = ARROWS[r.kind]

    near, far = r.source_multiplicity, r.target_multiplicity
    left = f' "{_sanitize(near)}"' if near else ""
    right = f'"{_sanitize(far)}" ' if far else ""

    line = f"{source}{left} {arrow} {right}{target}"
    label = r.target_role or ""
    if label:
        line += f" : {_sanitize(label)}"
    return line


def render_plantuml(diagram: Diagram) -> str:
    """Render ``diagram`` as PlantUML class-diagram text.

    Classifiers are grouped into one package per namespace (sorted); edges
    follow in diagram order.
    """
    lines = ["@startuml", _SKINPARAM, ""]
    if diagram.name:
        lines += [f"title {_sanitize(diagram.name)}", ""]

    packages: Dict[str, List[Classifier]] = {}
    for c in diagram.classifiers():
        packages.setdefault(c.namespace, []).append(c)

    aliases: Dict[str, str] = {}
    for c in diagram.classifiers():
        aliases[c.id] = _alias(c, len(aliases))

    for namespace, members in sorted(packages.items()):
        if namespace:
            lines.append(f"package {_sanitize(namespace)} {{")
        for c in members:
            lines.extend(_render_classifier(c, aliases[c.id]))
            lines.append("")
        if namespace:
            lines += ["}", ""]

    for r in diagram.relationships():
        lines.append(_render_relationship(r, aliases))

    lines += ["", "@enduml"]
    logger.debug(f"Rendered PlantUML for '{diagram.name}' ({len(lines)} lines)")
    return "\n".join(lines) + "\n"
