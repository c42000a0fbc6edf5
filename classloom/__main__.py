import argparse
import json
import logging
import os
import sys
from typing import List, Optional

from .core.uml.errors import GenerationIOError, UnreadableInput, UnsupportedOutputTarget
from .setting import get_settings


def setup_logging(log_level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )
    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.ERROR)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.orm").setLevel(logging.WARNING)
    logging.getLogger("uvicorn").setLevel(logging.INFO)


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="classloom",
        description="classloom - UML class diagrams from Java sources",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (defaults to the configured level)"
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("extract", help="List the types declared under PATH")
    p.add_argument("path", help="Source file or directory")
    p.add_argument("--namespace", default="", help="Namespace for files without a package line")
    p.add_argument("--json", action="store_true", help="Print JSON instead of a summary")

    p = sub.add_parser("analyze", help="Build and validate a diagram from PATH")
    p.add_argument("path", help="Source file or directory")
    p.add_argument("--name", default=None, help="Diagram name (defaults to the path basename)")
    p.add_argument("--save", action="store_true", help="Store the diagram in the database")

    p = sub.add_parser("generate", help="Round-trip PATH through a diagram into Java sources")
    p.add_argument("path", help="Source file or directory")
    p.add_argument("output", help="Output directory")

    p = sub.add_parser("plantuml", help="Print the PlantUML class diagram of PATH")
    p.add_argument("path", help="Source file or directory")

    p = sub.add_parser("serve", help="Run the HTTP API")
    p.add_argument("--host", type=str, default="127.0.0.1", help="Bind address")
    p.add_argument("--port", type=int, default=9005, help="Port for the API server")
    return parser


# =============================================================================
# Commands
# =============================================================================

def _cmd_extract(args, settings) -> int:
    from .core.extractor import extract_file, scan_unit
    from .core.uml.serialization import field_to_dict, operation_to_dict

    if os.path.isfile(args.path):
        types = extract_file(args.path, args.namespace, encoding=settings.extraction.encoding)
    else:
        types = scan_unit(
            args.path,
            suffixes=tuple(settings.extraction.source_suffixes),
            skip_directories=settings.extraction.skip_directories,
            encoding=settings.extraction.encoding,
            namespace_hint=args.namespace,
        ).types

    if args.json:
        print(json.dumps([
            {
                "name": t.name,
                "namespace": t.namespace,
                "kind": t.kind.value,
                "is_abstract": t.is_abstract,
                "superclass": t.superclass,
                "interfaces": t.interfaces,
                "fields": [field_to_dict(f) for f in t.fields],
                "operations": [operation_to_dict(op) for op in t.operations],
                "literals": t.literals,
                "file_path": t.file_path,
            }
            for t in types
        ], indent=2))
    else:
        for t in types:
            print(f"{t.kind.value:<9} {t.qualified_name}  ({len(t.fields)} fields, {len(t.operations)} operations)")
    return 0


def _service(settings, with_store: bool = False):
    from .core.services import DiagramService, DiagramStore

    store = None
    if with_store:
        from .core.db import DatabaseManager
        db_manager = DatabaseManager(settings.database_url)
        db_manager.init_db()
        store = DiagramStore(db_manager)
    return DiagramService(settings, store=store)


def _cmd_analyze(args, settings) -> int:
    service = _service(settings, with_store=args.save)
    result = service.diagram_from_path(args.path, name=args.name)
    diagram = result.diagram

    print(
        f"Diagram '{diagram.name}': {len(diagram.classifiers())} classifier(s), "
        f"{len(diagram.relationships())} relationship(s) from {result.files_scanned} file(s)"
    )
    for issue in result.issues:
        print(f"  skipped {issue.file_path}: {issue.message}")
    for amb in result.inference.ambiguities:
        print(f"  ambiguous {amb.reference} in {amb.owner}: using {amb.chosen}")

    issues = service.validate(diagram)
    for issue in issues:
        print(f"  ! {issue}")

    if args.save:
        print(f"Saved as {service.save(diagram)}")
    return 1 if issues else 0


def _cmd_generate(args, settings) -> int:
    service = _service(settings)
    result = service.diagram_from_path(args.path)
    try:
        count = service.write_code(result.diagram, args.output)
    except UnsupportedOutputTarget as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    except GenerationIOError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    print(f"Generated {count} file(s) in {args.output}")
    return 0


def _cmd_plantuml(args, settings) -> int:
    service = _service(settings)
    print(service.render_plantuml(service.diagram_from_path(args.path).diagram), end="")
    return 0


def _cmd_serve(args, settings) -> int:
    import uvicorn

    from .api.app import create_app
    from .core.db import DatabaseManager

    db_manager = DatabaseManager(settings.database_url)
    db_manager.init_db()
    app = create_app(db_manager=db_manager, settings=settings)

    logger.info(f"Starting FastAPI server on http://{args.host}:{args.port}")
    uvicorn.run(app, host=args.host, port=args.port, log_level=settings.log_level.lower())
    return 0


_COMMANDS = {
    "extract": _cmd_extract,
    "analyze": _cmd_analyze,
    "generate": _cmd_generate,
    "plantuml": _cmd_plantuml,
    "serve": _cmd_serve,
}


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for classloom."""
    args = _build_parser().parse_args(argv)
    try:
        settings = get_settings()
    except ValueError as e:
        # pydantic ValidationError is a ValueError too
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 2

    setup_logging(args.log_level or settings.log_level)

    try:
        return _COMMANDS[args.command](args, settings)
    except UnreadableInput as e:
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    sys.exit(main())
