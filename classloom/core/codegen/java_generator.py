"""Java source generation from diagram classifiers.

One compilation unit per classifier: package line, sorted imports,
Javadoc'd type header, fields, then operations with stub bodies.
Output depends only on the classifier and relationships passed in.
"""

import logging
import os
from typing import Dict, Iterable, List, Optional, Set

from ..constants import (
    DEFAULT_IMPORT_NAMESPACE,
    DEFAULT_INDENT,
    GENERATED_FILE_SUFFIX,
    JAVA_LANG_TYPES,
    NUMERIC_PRIMITIVES,
    TYPE_VARIABLE_RE,
    VOID_TYPE,
)
from ..inference.context import extract_type_identifiers
from ..uml.errors import GenerationIOError, UnsupportedOutputTarget
from ..uml.models import (
    Classifier,
    ClassifierKind,
    Diagram,
    Field,
    Operation,
    Relationship,
    RelationshipKind,
)

logger = logging.getLogger(__name__)


# =============================================================================
# Imports
# =============================================================================

def collect_imports(
    classifier: Classifier,
    relationships: Iterable[Relationship],
    known_classifiers: Optional[Iterable[Classifier]] = None,
    default_import_namespace: str = DEFAULT_IMPORT_NAMESPACE,
) -> List[str]:
    """Qualified names the classifier's unit must import, sorted.

    Args:
        classifier: Classifier being generated
        relationships: Relationships of its diagram (only outgoing ones count)
        known_classifiers: Classifiers whose namespace is authoritative
        default_import_namespace: Namespace assumed for unknown simple names

    Returns:
        Sorted, de-duplicated qualified names
    """
    relationships = list(relationships)
    known: Dict[str, Classifier] = {}
    for c in known_classifiers if known_classifiers is not None else _endpoints(classifier, relationships):
        known.setdefault(c.name, c)

    imports: Set[str] = set()

    def add_classifier(target: Classifier) -> None:
        if target is classifier or not target.namespace or target.namespace == classifier.namespace:
            return
        imports.add(target.qualified_name)

    def add_type(type_str: Optional[str]) -> None:
        for ident in extract_type_identifiers(type_str):
            if "." in ident:
                head = ident.split(".", 1)[0]
                if not head[0].isupper():
                    if not ident.startswith("java.lang."):
                        imports.add(ident)
                    continue
                # Outer.Inner: the outer type carries the import
                ident = head
            if ident in JAVA_LANG_TYPES or TYPE_VARIABLE_RE.match(ident) or ident == classifier.name:
                continue
            target = known.get(ident)
            if target is not None:
                add_classifier(target)
            elif default_import_namespace and default_import_namespace != classifier.namespace:
                imports.add(f"{default_import_namespace}.{ident}")

    for f in classifier.fields:
        add_type(f.type_name)
    for op in classifier.operations:
        add_type(op.return_type)
        for p in op.parameters:
            add_type(p.type_name)
    for r in relationships:
        if r.source is classifier:
            add_classifier(r.target)

    return sorted(imports)


def _endpoints(classifier: Classifier, relationships: List[Relationship]) -> List[Classifier]:
    found = [classifier]
    for r in relationships:
        for c in (r.source, r.target):
            if not any(c is k for k in found):
                found.append(c)
    return found


# =============================================================================
# Unit rendering
# =============================================================================

def default_return_literal(return_type: str) -> str:
    """Literal a stub body returns for ``return_type``."""
    if return_type == "boolean":
        return "false"
    if return_type in NUMERIC_PRIMITIVES:
        return "0"
    if return_type == "char":
        return "'\\0'"
    return "null"


def _modifiers(*words: str) -> str:
    return " ".join(w for w in words if w)


def _supertype_names(
    classifier: Classifier, relationships: List[Relationship], kinds: Iterable[RelationshipKind]
) -> List[str]:
    kinds = tuple(kinds)
    return [r.target.name for r in relationships if r.source is classifier and r.kind in kinds]


def _header(classifier: Classifier, relationships: List[Relationship]) -> str:
    if classifier.kind is ClassifierKind.INTERFACE:
        line = f"public interface {classifier.name}"
        parents = _supertype_names(
            classifier, relationships,
            (RelationshipKind.INHERITANCE, RelationshipKind.IMPLEMENTATION),
        )
        if parents:
            line += " extends " + ", ".join(parents)
        return line

    if classifier.kind is ClassifierKind.ENUMERATION:
        line = f"public enum {classifier.name}"
    else:
        line = _modifiers("public", "abstract" if classifier.is_abstract else "", "class", classifier.name)
        parents = _supertype_names(classifier, relationships, (RelationshipKind.INHERITANCE,))
        if parents:
            line += f" extends {parents[0]}"

    interfaces = _supertype_names(classifier, relationships, (RelationshipKind.IMPLEMENTATION,))
    if interfaces:
        line += " implements " + ", ".join(interfaces)
    return line


def _javadoc(summary: str, indent: str, tags: Iterable[str] = ()) -> List[str]:
    lines = [f"{indent}/**", f"{indent} * {summary}"]
    lines.extend(f"{indent} * {tag}" for tag in tags)
    lines.append(f"{indent} */")
    return lines


def _field_lines(f: Field, indent: str) -> List[str]:
    declaration = _modifiers(
        f.visibility.keyword,
        "static" if f.is_static else "",
        "final" if f.is_final else "",
        f.type_name,
        f.name,
    )
    if f.default_value:
        declaration += f" = {f.default_value}"
    return _javadoc(f.name, indent) + [f"{indent}{declaration};"]


def _operation_lines(op: Operation, owner: Classifier, indent: str) -> List[str]:
    return_type = op.return_type or VOID_TYPE
    params = []
    for p in op.parameters:
        text = f"{p.type_name} {p.name}"
        if p.default_value:
            text += f" /* = {p.default_value} */"
        params.append(text)

    tags = [f"@param {p.name}" for p in op.parameters]
    if return_type != VOID_TYPE:
        tags.append("@return")

    signature = _modifiers(
        op.visibility.keyword,
        "static" if op.is_static else "",
        "abstract" if op.is_abstract else "",
        "final" if op.is_final else "",
        return_type,
        f"{op.name}({', '.join(params)})",
    )
    lines = _javadoc(op.name, indent, tags)

    if owner.kind is ClassifierKind.INTERFACE or op.is_abstract:
        lines.append(f"{indent}{signature};")
        return lines

    lines.append(f"{indent}{signature} {{")
    if return_type != VOID_TYPE:
        lines.append(f"{indent * 2}return {default_return_literal(return_type)};")
    lines.append(f"{indent}}}")
    return lines


def generate(
    classifier: Classifier,
    relationships: Iterable[Relationship],
    known_classifiers: Optional[Iterable[Classifier]] = None,
    default_import_namespace: str = DEFAULT_IMPORT_NAMESPACE,
    indent: str = DEFAULT_INDENT,
) -> str:
    """Generate the Java compilation unit for one classifier.

    Args:
        classifier: Classifier to render
        relationships: All relationships of its diagram
        known_classifiers: Diagram classifiers, used for import resolution
        default_import_namespace: Namespace for unknown simple type names
        indent: Indentation unit

    Returns:
        Source text ending with a newline
    """
    relationships = list(relationships)
    lines: List[str] = []

    if classifier.namespace:
        lines += [f"package {classifier.namespace};", ""]

    imports = collect_imports(classifier, relationships, known_classifiers, default_import_namespace)
    if imports:
        lines += [f"import {name};" for name in imports] + [""]

    lines += _javadoc(classifier.name, "")
    lines += [f"{_header(classifier, relationships)} {{", ""]

    members: List[List[str]] = [_field_lines(f, indent) for f in classifier.fields]
    members += [_operation_lines(op, classifier, indent) for op in classifier.operations]

    # Enum members must follow the constant list and its ";", even an empty one
    if classifier.kind is ClassifierKind.ENUMERATION and (classifier.literals or members):
        literal_line = indent + ", ".join(classifier.literals)
        if members:
            literal_line += ";"
        lines += [literal_line, ""]

    for block in members:
        lines += block + [""]

    lines.append("}")
    return "\n".join(lines) + "\n"


# =============================================================================
# File output
# =============================================================================

def output_path_for(classifier: Classifier, output_root: str, suffix: str = GENERATED_FILE_SUFFIX) -> str:
    """File path of a classifier's unit, nested by namespace."""
    parts = classifier.namespace.split(".") if classifier.namespace else []
    return os.path.join(output_root, *parts, classifier.name + suffix)


def generate_unit(
    diagram: Diagram,
    output_root: str,
    default_import_namespace: str = DEFAULT_IMPORT_NAMESPACE,
    indent: str = DEFAULT_INDENT,
    suffix: str = GENERATED_FILE_SUFFIX,
) -> int:
    """Write one source file per classifier of ``diagram``.

    Files already written stay in place when a later write fails.

    Returns:
        Number of files written

    Raises:
        UnsupportedOutputTarget: ``output_root`` is not a directory or cannot be created
        GenerationIOError: A write failed; carries the count written so far
    """
    if os.path.exists(output_root) and not os.path.isdir(output_root):
        raise UnsupportedOutputTarget(output_root, "exists and is not a directory")
    try:
        os.makedirs(output_root, exist_ok=True)
    except OSError as e:
        raise UnsupportedOutputTarget(output_root, str(e)) from e

    classifiers = diagram.classifiers()
    relationships = diagram.relationships()
    written = 0

    for classifier in classifiers:
        source = generate(
            classifier,
            relationships,
            known_classifiers=classifiers,
            default_import_namespace=default_import_namespace,
            indent=indent,
        )
        path = output_path_for(classifier, output_root, suffix)
        try:
            os.makedirs(os.path.dirname(path), exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                f.write(source)
        except OSError as e:
            raise GenerationIOError(written, path=path, reason=str(e)) from e
        written += 1
        logger.debug(f"Generated {path}")

    logger.info(f"Generated {written} file(s) for diagram '{diagram.name}' under {output_root}")
    return written
