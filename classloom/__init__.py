"""classloom: UML class diagrams from Java sources, and Java sources from diagrams."""

__version__ = "0.1.0"
