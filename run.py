"""Project root entry point: serve the web interface or run exports directly."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path


def _bootstrap_path() -> None:
    """Ensure the dictexport package is importable when running from project root."""
    project_root = Path(__file__).resolve().parent
    if str(project_root) not in sys.path:
        sys.path.insert(0, str(project_root))


def _run_exports(codes) -> int:
    from dictexport.exceptions import DictExportError
    from dictexport.export.manager import ExportManager
    from dictexport.logger import get_logger

    logger = get_logger("dictexport.run")
    try:
        with ExportManager() as manager:
            for summary in manager.export_all(codes=codes or None):
                logger.info(f"Wrote {summary.output}")
    except DictExportError as e:
        logger.error(f"Export failed: {e}")
        return 1
    return 0


def main(argv=None) -> int:
    _bootstrap_path()

    parser = argparse.ArgumentParser(description="Export the source dictionary to per-language lookup tables.")
    subparsers = parser.add_subparsers(dest="command")
    serve = subparsers.add_parser("serve", help="Run the web interface (default)")
    serve.add_argument("--host", default="0.0.0.0")
    serve.add_argument("--port", type=int, default=5500)
    export = subparsers.add_parser("export", help="Export targets now")
    export.add_argument("targets", nargs="*", help="Target codes (default: all configured)")
    args = parser.parse_args(argv)

    if args.command == "export":
        return _run_exports(args.targets)

    from dictexport.web import create_app

    app = create_app()
    app.run(host=getattr(args, "host", "0.0.0.0"), port=getattr(args, "port", 5500), debug=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
