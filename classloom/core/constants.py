"""Shared constants for classloom.

Java type vocabularies used by inference (what never resolves to a
classifier) and by the code generator (what never needs an import, and
which default literal a stub returns).
"""

import re

# =============================================================================
# Java type vocabulary
# =============================================================================

NUMERIC_PRIMITIVES = frozenset({"byte", "short", "int", "long", "float", "double"})

PRIMITIVE_TYPES = NUMERIC_PRIMITIVES | frozenset({"boolean", "char"})

VOID_TYPE = "void"

# Implicitly visible through java.lang, never imported
JAVA_LANG_TYPES = frozenset({
    "Object", "String", "StringBuilder", "StringBuffer", "CharSequence",
    "Boolean", "Byte", "Character", "Short", "Integer", "Long", "Float", "Double",
    "Number", "Void", "Class", "Enum", "Record", "Math", "System", "Thread",
    "Runnable", "Iterable", "Comparable", "Cloneable", "AutoCloseable", "Override",
    "Exception", "RuntimeException", "Error", "Throwable",
    "IllegalArgumentException", "IllegalStateException",
    "NullPointerException", "UnsupportedOperationException",
})

# Keywords that can appear inside a type expression but are not types
TYPE_EXPRESSION_KEYWORDS = frozenset({"extends", "super", "final"})

# Identifier tokens inside a type expression (generic args, qualified names)
TYPE_IDENTIFIER_RE = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*")

# A lone capital letter is treated as a type variable (T, E, K, V)
TYPE_VARIABLE_RE = re.compile(r"^[A-Z]$")

# =============================================================================
# Defaults
# =============================================================================

SOURCE_SUFFIXES = (".java",)

DEFAULT_IMPORT_NAMESPACE = "java.util"

DEFAULT_INDENT = "\t"

GENERATED_FILE_SUFFIX = ".java"
