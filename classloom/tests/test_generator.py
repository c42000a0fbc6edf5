"""Tests for Java code generation."""

import os

import pytest

from classloom.core.codegen import (
    collect_imports,
    default_return_literal,
    generate,
    generate_unit,
    output_path_for,
)
from classloom.core.uml import (
    Classifier,
    ClassifierKind,
    Diagram,
    Field,
    GenerationIOError,
    Operation,
    Parameter,
    Relationship,
    RelationshipKind,
    UnsupportedOutputTarget,
    Visibility,
)


COUNTER_EXPECTED = """package demo;

/**
 * Counter
 */
public class Counter {

\t/**
\t * count
\t */
\tprivate int count = 0;

\t/**
\t * get
\t * @return
\t */
\tpublic int get() {
\t\treturn 0;
\t}

\t/**
\t * reset
\t */
\tpublic void reset() {
\t}

}
"""


@pytest.fixture
def order_diagram():
    diagram = Diagram("orders")
    item = diagram.add_classifier(Classifier("LineItem", "com.shop.items"))
    order = diagram.add_classifier(Classifier(
        "Order", "com.shop",
        fields=[
            Field("items", "List<LineItem>", is_final=True),
            Field("created", "java.time.Instant"),
            Field("label", "String"),
        ],
        operations=[
            Operation("total", "double"),
            Operation("find", "Optional<T>", parameters=[Parameter("key", "T")]),
        ],
    ))
    diagram.add_relationship(Relationship(order, item, RelationshipKind.COMPOSITION))
    return diagram


# =========================================================================
# Tests: Unit layout
# =========================================================================

class TestUnitText:
    def test_exact_output(self):
        counter = Classifier(
            "Counter", "demo",
            fields=[Field("count", "int", default_value="0")],
            operations=[Operation("get", "int"), Operation("reset")],
        )
        assert generate(counter, []) == COUNTER_EXPECTED

    def test_deterministic(self, order_diagram):
        order = order_diagram.find_classifier("Order")
        rels = order_diagram.relationships()
        assert generate(order, rels) == generate(order, rels)

    def test_no_package_line_without_namespace(self):
        text = generate(Classifier("Loose"), [])
        assert not text.startswith("package")
        assert "public class Loose {" in text

    def test_package_default_visibility_has_no_keyword(self):
        c = Classifier("P", fields=[Field("x", "int", visibility=Visibility.PACKAGE)])
        assert "\tint x;" in generate(c, [])


# =========================================================================
# Tests: Imports
# =========================================================================

class TestImports:
    def test_import_block(self, order_diagram):
        order = order_diagram.find_classifier("Order")
        imports = collect_imports(order, order_diagram.relationships(), order_diagram.classifiers())
        assert imports == [
            "com.shop.items.LineItem",
            "java.time.Instant",
            "java.util.List",
            "java.util.Optional",
        ]

    def test_import_lines_rendered_sorted(self, order_diagram):
        order = order_diagram.find_classifier("Order")
        text = generate(order, order_diagram.relationships(), order_diagram.classifiers())
        assert (
            "package com.shop;\n\n"
            "import com.shop.items.LineItem;\n"
            "import java.time.Instant;\n"
            "import java.util.List;\n"
            "import java.util.Optional;\n\n"
        ) in text

    def test_java_lang_and_type_variables_not_imported(self, order_diagram):
        order = order_diagram.find_classifier("Order")
        imports = collect_imports(order, [], order_diagram.classifiers())
        assert not any(i.endswith(".String") or i.endswith(".T") for i in imports)

    def test_same_namespace_not_imported(self):
        a = Classifier("A", "p", fields=[Field("b", "B")])
        b = Classifier("B", "p")
        assert collect_imports(a, [], [a, b]) == []

    def test_relationship_target_imported(self):
        a = Classifier("A", "p")
        b = Classifier("B", "q")
        rel = Relationship(a, b, RelationshipKind.DEPENDENCY)
        assert collect_imports(a, [rel]) == ["q.B"]
        # incoming edges do not import
        assert collect_imports(b, [rel]) == []

    def test_configurable_default_namespace(self):
        a = Classifier("A", "p", fields=[Field("m", "Matrix")])
        assert collect_imports(a, [], default_import_namespace="org.la") == ["org.la.Matrix"]


# =========================================================================
# Tests: Headers
# =========================================================================

class TestHeaders:
    def test_class_extends_and_implements(self, shapes_diagram):
        circle = shapes_diagram.find_classifier("Circle")
        text = generate(circle, shapes_diagram.relationships())
        assert "public class Circle extends AbstractShape implements Drawable {" in text

    def test_abstract_class(self, shapes_diagram):
        base = shapes_diagram.find_classifier("AbstractShape")
        assert "public abstract class AbstractShape {" in generate(base, shapes_diagram.relationships())

    def test_interface_extends_from_both_edge_kinds(self):
        child = Classifier("Child", kind=ClassifierKind.INTERFACE)
        p1 = Classifier("P1", kind=ClassifierKind.INTERFACE)
        p2 = Classifier("P2", kind=ClassifierKind.INTERFACE)
        rels = [
            Relationship(child, p1, RelationshipKind.INHERITANCE),
            Relationship(child, p2, RelationshipKind.IMPLEMENTATION),
        ]
        assert "public interface Child extends P1, P2 {" in generate(child, rels)

    def test_enum_literals(self):
        status = Classifier(
            "Status", kind=ClassifierKind.ENUMERATION, literals=["NEW", "PAID"],
            operations=[Operation("label", "String")],
        )
        text = generate(status, [])
        assert "public enum Status {\n\n\tNEW, PAID;\n" in text

    def test_enum_without_members_has_no_semicolon(self):
        status = Classifier("Flag", kind=ClassifierKind.ENUMERATION, literals=["ON", "OFF"])
        assert "\tON, OFF\n" in generate(status, [])

    def test_enum_with_members_but_no_constants(self):
        holder = Classifier("Holder", kind=ClassifierKind.ENUMERATION, fields=[Field("x", "int")])
        text = generate(holder, [])
        assert "public enum Holder {\n\n\t;\n\n\t/**\n\t * x\n\t */\n\tprivate int x;\n" in text


# =========================================================================
# Tests: Members
# =========================================================================

class TestMembers:
    def test_field_modifiers(self):
        c = Classifier("C", fields=[
            Field("MAX", "int", default_value="10", visibility=Visibility.PUBLIC, is_static=True, is_final=True),
        ])
        assert "\tpublic static final int MAX = 10;" in generate(c, [])

    def test_interface_operations_have_no_body(self):
        iface = Classifier("Repo", kind=ClassifierKind.INTERFACE, operations=[
            Operation("find", "Object", parameters=[Parameter("id", "long")]),
        ])
        text = generate(iface, [])
        assert "\tpublic Object find(long id);" in text
        assert "return null;" not in text

    def test_abstract_operation_has_no_body(self):
        c = Classifier("Shape", is_abstract=True, operations=[Operation("area", "double", is_abstract=True)])
        assert "\tpublic abstract double area();" in generate(c, [])

    def test_parameter_list_and_javadoc(self):
        c = Classifier("Calc", operations=[Operation(
            "add", "long", visibility=Visibility.PROTECTED, is_static=True,
            parameters=[Parameter("a", "long"), Parameter("b", "long", default_value="1")],
        )])
        text = generate(c, [])
        assert "\t * @param a\n\t * @param b\n\t * @return\n" in text
        assert "\tprotected static long add(long a, long b /* = 1 */) {" in text

    @pytest.mark.parametrize("return_type,literal", [
        ("boolean", "false"),
        ("int", "0"),
        ("double", "0"),
        ("char", "'\\0'"),
        ("String", "null"),
        ("int[]", "null"),
    ])
    def test_default_return_literals(self, return_type, literal):
        assert default_return_literal(return_type) == literal
        c = Classifier("C", operations=[Operation("f", return_type)])
        assert f"\t\treturn {literal};" in generate(c, [])


# =========================================================================
# Tests: File output
# =========================================================================

class TestGenerateUnit:
    def test_files_nested_by_namespace(self, tmp_path, order_diagram):
        count = generate_unit(order_diagram, str(tmp_path / "out"))
        assert count == 2

        order_path = tmp_path / "out" / "com" / "shop" / "Order.java"
        item_path = tmp_path / "out" / "com" / "shop" / "items" / "LineItem.java"
        assert order_path.is_file()
        assert item_path.is_file()
        assert order_path.read_text(encoding="utf-8").startswith("package com.shop;")

    def test_output_path_for(self):
        assert output_path_for(Classifier("A", "x.y"), "root") == os.path.join("root", "x", "y", "A.java")
        assert output_path_for(Classifier("A"), "root") == os.path.join("root", "A.java")

    def test_file_as_output_root_rejected(self, tmp_path, order_diagram):
        target = tmp_path / "not-a-dir"
        target.write_text("x")
        with pytest.raises(UnsupportedOutputTarget):
            generate_unit(order_diagram, str(target))
        assert target.read_text() == "x"

    def test_uncreatable_output_root_rejected(self, tmp_path, order_diagram):
        blocker = tmp_path / "blocker"
        blocker.write_text("x")
        with pytest.raises(UnsupportedOutputTarget):
            generate_unit(order_diagram, str(blocker / "sub"))

    def test_partial_write_failure_reports_count(self, tmp_path, order_diagram):
        out = tmp_path / "out"
        # A directory where Order.java should go makes the second write fail
        (out / "com" / "shop" / "Order.java").mkdir(parents=True)

        with pytest.raises(GenerationIOError) as exc:
            generate_unit(order_diagram, str(out))
        assert exc.value.files_written == 1
        assert isinstance(exc.value.__cause__, OSError)
        assert (out / "com" / "shop" / "items" / "LineItem.java").is_file()
