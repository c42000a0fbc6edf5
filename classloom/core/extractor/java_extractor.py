"""Java structural extractor using tree-sitter.

Walks the tree-sitter AST to recognize class, interface and enum
declarations together with the fields, operations and parameters declared
in each type's own body. Only declaration headers are inspected; method
bodies are never analyzed.

Malformed declarations (a parse error inside the header) are omitted as
a whole rather than producing partial records.
"""

import logging
import re
from typing import List, Optional, Set

import tree_sitter
import tree_sitter_java

from ..uml.models import ClassifierKind, Field, Operation, Parameter, Visibility
from .models import ExtractedType

logger = logging.getLogger(__name__)

_JAVA_LANGUAGE = tree_sitter.Language(tree_sitter_java.language())

_TYPE_DECLARATIONS = {
    "class_declaration": ClassifierKind.CLASS,
    "interface_declaration": ClassifierKind.INTERFACE,
    "enum_declaration": ClassifierKind.ENUMERATION,
}

_BODY_TYPES = frozenset({"block", "class_body", "interface_body", "enum_body"})

_ANNOTATION_TYPES = frozenset({"marker_annotation", "annotation"})

_VISIBILITY_KEYWORDS = {
    "public": Visibility.PUBLIC,
    "private": Visibility.PRIVATE,
    "protected": Visibility.PROTECTED,
}


def normalize_type(text: str) -> str:
    """Collapse whitespace in a type expression.

    e.g. "Map< String ,Integer >" -> "Map<String, Integer>", "int [ ]" -> "int[]"
    """
    t = " ".join(text.split())
    t = re.sub(r"\s*<\s*", "<", t)
    t = re.sub(r"\s*>", ">", t)
    t = re.sub(r"\s*,\s*", ", ", t)
    t = re.sub(r"\s*\[\s*\]", "[]", t)
    t = re.sub(r"\s*\.\.\.", "...", t)
    return t


class JavaStructureExtractor:
    """tree-sitter based structural scanner for Java source.

    Extracts:
    - Class / interface / enum declarations (nested ones included) -> ExtractedType
    - Field and interface constant declarations -> Field
    - Method declarations (constructors excluded) -> Operation
    - Enum constants -> literals
    - Package declaration -> namespace
    """

    def extract(
        self,
        source_text: str,
        namespace_hint: str = "",
        file_path: Optional[str] = None,
    ) -> List[ExtractedType]:
        """Extract type declarations from Java source text.

        Args:
            source_text: Java source
            namespace_hint: Namespace used when the text has no package declaration
            file_path: Originating file (for diagnostics only)

        Returns:
            ExtractedType records in declaration order
        """
        source = source_text.encode("utf-8")
        parser = tree_sitter.Parser(_JAVA_LANGUAGE)
        tree = parser.parse(source)
        root = tree.root_node

        if root.has_error:
            logger.debug(f"Parse errors in {file_path or '<source>'}; malformed declarations are skipped")

        namespace = self._extract_package(root, source) or namespace_hint or ""

        types: List[ExtractedType] = []
        self._collect_types(root.children, source, namespace, file_path, types)

        logger.debug(f"Extracted {len(types)} type(s) from {file_path or '<source>'}")
        return types

    # =========================================================================
    # Type declarations
    # =========================================================================

    def _collect_types(
        self,
        nodes: List[tree_sitter.Node],
        source: bytes,
        namespace: str,
        file_path: Optional[str],
        out: List[ExtractedType],
    ) -> None:
        for node in nodes:
            if node.type in _TYPE_DECLARATIONS:
                self._extract_type(node, source, namespace, file_path, out)
            elif node.type == "ERROR":
                # Recover declarations the parser could not attach to the tree
                self._collect_types(node.children, source, namespace, file_path, out)

    def _extract_type(
        self,
        node: tree_sitter.Node,
        source: bytes,
        namespace: str,
        file_path: Optional[str],
        out: List[ExtractedType],
    ) -> None:
        """Extract one type declaration, then its nested types."""
        name = self._get_child_text(node, "name", source)
        if not name or self._header_has_error(node):
            return

        kind = _TYPE_DECLARATIONS[node.type]
        modifiers = self._modifier_keywords(node, source)

        superclass = None
        interfaces: List[str] = []
        if kind is ClassifierKind.CLASS:
            superclass = self._extract_superclass(node, source)
            interfaces = self._extract_type_list(node, "super_interfaces", source)
        elif kind is ClassifierKind.ENUMERATION:
            interfaces = self._extract_type_list(node, "super_interfaces", source)
        else:
            interfaces = self._extract_type_list(node, "extends_interfaces", source)

        extracted = ExtractedType(
            name=name,
            namespace=namespace,
            kind=kind,
            is_abstract=kind is ClassifierKind.CLASS and "abstract" in modifiers,
            superclass=superclass,
            interfaces=interfaces,
            file_path=file_path,
            start_line=node.start_point[0] + 1,
        )
        out.append(extracted)

        body = node.child_by_field_name("body")
        if body is None:
            return

        nested: List[tree_sitter.Node] = []
        for child in self._member_nodes(body):
            if child.type in ("field_declaration", "constant_declaration"):
                extracted.fields.extend(self._extract_fields(child, source, kind))
            elif child.type == "method_declaration":
                op = self._extract_operation(child, source, kind)
                if op and op.name != name:
                    extracted.operations.append(op)
            elif child.type == "enum_constant":
                literal = self._get_child_text(child, "name", source)
                if literal:
                    extracted.literals.append(literal)
            elif child.type in _TYPE_DECLARATIONS:
                nested.append(child)

        for child in nested:
            self._extract_type(child, source, namespace, file_path, out)

    @staticmethod
    def _member_nodes(body: tree_sitter.Node) -> List[tree_sitter.Node]:
        """Flatten a type body; enum bodies keep members in enum_body_declarations."""
        members: List[tree_sitter.Node] = []
        for child in body.children:
            if child.type == "enum_body_declarations":
                members.extend(child.children)
            else:
                members.append(child)
        return members

    # =========================================================================
    # Members
    # =========================================================================

    def _extract_fields(
        self, node: tree_sitter.Node, source: bytes, owner_kind: ClassifierKind
    ) -> List[Field]:
        """Extract one Field per declarator (``int a, b;`` yields two)."""
        if self._header_has_error(node):
            return []

        type_node = node.child_by_field_name("type")
        if type_node is None:
            return []
        base_type = normalize_type(self._text(type_node, source))

        modifiers = self._modifier_keywords(node, source)
        in_interface = owner_kind is ClassifierKind.INTERFACE
        visibility = self._visibility(modifiers, in_interface)

        fields: List[Field] = []
        for declarator in node.children_by_field_name("declarator"):
            fname = self._get_child_text(declarator, "name", source)
            if not fname:
                continue
            type_name = base_type
            dims = declarator.child_by_field_name("dimensions")
            if dims is not None:
                type_name = normalize_type(type_name + self._text(dims, source))
            value = declarator.child_by_field_name("value")

            fields.append(Field(
                name=fname,
                type_name=type_name,
                default_value=self._text(value, source).strip() if value is not None else None,
                visibility=visibility,
                is_static=in_interface or "static" in modifiers,
                is_final=in_interface or "final" in modifiers,
            ))
        return fields

    def _extract_operation(
        self, node: tree_sitter.Node, source: bytes, owner_kind: ClassifierKind
    ) -> Optional[Operation]:
        """Extract a method declaration; body errors do not drop the method."""
        if self._header_has_error(node):
            return None

        name = self._get_child_text(node, "name", source)
        type_node = node.child_by_field_name("type")
        params_node = node.child_by_field_name("parameters")
        if not name or type_node is None or params_node is None:
            return None

        return_type = normalize_type(self._text(type_node, source))
        modifiers = self._modifier_keywords(node, source)

        return Operation(
            name=name,
            return_type=None if return_type == "void" else return_type,
            visibility=self._visibility(modifiers, owner_kind is ClassifierKind.INTERFACE),
            is_static="static" in modifiers,
            is_abstract="abstract" in modifiers,
            is_final="final" in modifiers,
            parameters=self._extract_parameters(params_node, source),
        )

    def _extract_parameters(self, node: tree_sitter.Node, source: bytes) -> List[Parameter]:
        """Extract (type, name) pairs; annotations and ``final`` are skipped."""
        params: List[Parameter] = []
        for child in node.named_children:
            if child.type == "formal_parameter":
                type_node = child.child_by_field_name("type")
                pname = self._get_child_text(child, "name", source)
                if type_node is None or not pname:
                    continue
                ptype = self._text(type_node, source)
                dims = child.child_by_field_name("dimensions")
                if dims is not None:
                    ptype += self._text(dims, source)
                params.append(Parameter(name=pname, type_name=normalize_type(ptype)))

            elif child.type == "spread_parameter":
                # Varargs: modifiers? <type> ... variable_declarator
                parts = [c for c in child.named_children if c.type != "modifiers"]
                if len(parts) < 2 or parts[-1].type != "variable_declarator":
                    continue
                pname = self._get_child_text(parts[-1], "name", source)
                if not pname:
                    continue
                ptype = normalize_type(self._text(parts[0], source)) + "..."
                params.append(Parameter(name=pname, type_name=ptype))
        return params

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _text(node: tree_sitter.Node, source: bytes) -> str:
        return source[node.start_byte:node.end_byte].decode("utf-8", errors="replace")

    @classmethod
    def _get_child_text(cls, node: tree_sitter.Node, field_name: str, source: bytes) -> Optional[str]:
        child = node.child_by_field_name(field_name)
        if child is not None:
            return cls._text(child, source)
        return None

    @staticmethod
    def _get_child_by_type(node: tree_sitter.Node, type_name: str) -> Optional[tree_sitter.Node]:
        for child in node.children:
            if child.type == type_name:
                return child
        return None

    @staticmethod
    def _header_has_error(node: tree_sitter.Node) -> bool:
        """True if anything outside the declaration body failed to parse."""
        for child in node.children:
            if child.type in _BODY_TYPES:
                continue
            if child.type == "ERROR" or child.is_missing or child.has_error:
                return True
        return False

    @classmethod
    def _modifier_keywords(cls, node: tree_sitter.Node, source: bytes) -> Set[str]:
        """Modifier keywords of a declaration, annotations excluded."""
        modifiers = cls._get_child_by_type(node, "modifiers")
        if modifiers is None:
            return set()
        return {
            cls._text(child, source)
            for child in modifiers.children
            if child.type not in _ANNOTATION_TYPES
        }

    @staticmethod
    def _visibility(modifiers: Set[str], in_interface: bool) -> Visibility:
        for keyword, visibility in _VISIBILITY_KEYWORDS.items():
            if keyword in modifiers:
                return visibility
        # Interface members are implicitly public
        return Visibility.PUBLIC if in_interface else Visibility.PACKAGE

    @classmethod
    def _extract_superclass(cls, node: tree_sitter.Node, source: bytes) -> Optional[str]:
        superclass = node.child_by_field_name("superclass")
        if superclass is None:
            return None
        for child in superclass.named_children:
            return normalize_type(cls._text(child, source))
        return None

    @classmethod
    def _extract_type_list(cls, node: tree_sitter.Node, clause_type: str, source: bytes) -> List[str]:
        """Names from an ``implements`` / interface ``extends`` clause."""
        clause = cls._get_child_by_type(node, clause_type)
        if clause is None:
            return []
        names: List[str] = []
        for sub in clause.named_children:
            if sub.type == "type_list":
                for type_node in sub.named_children:
                    names.append(normalize_type(cls._text(type_node, source)))
        return names

    @classmethod
    def _extract_package(cls, root: tree_sitter.Node, source: bytes) -> str:
        """Extract the package name from the compilation unit."""
        for child in root.children:
            if child.type == "package_declaration":
                for sub in child.named_children:
                    if sub.type in ("scoped_identifier", "identifier"):
                        return cls._text(sub, source).replace(" ", "")
        return ""
