"""kubeschema CLI - Command-line interface for manifest rule checks.

This module provides the main CLI entrypoint for kubeschema, allowing users
to check K8s manifests against the record rules from the command line.
"""

import argparse
import logging
import sys
from pathlib import Path

from kubeschema.core.config import DEFAULT_CONFIG_PATH, load_settings
from kubeschema.core.schema.rule import registered_rules
from kubeschema.core.verifier import verify
from kubeschema.k8s.artifact import K8sArtifact
from kubeschema.k8s.oracles import ConstraintOracle

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entrypoint for kubeschema."""
    parser = argparse.ArgumentParser(
        prog="kubeschema",
        description="kubeschema - check K8s manifests against resource rules",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Check a single manifest
  kubeschema check endpoints.yaml

  # Check every manifest in a directory
  kubeschema check manifests/ --pattern "*.yml"

  # Stop at the first failed rule per document
  kubeschema check manifests/ --fail-fast

  # List available rules
  kubeschema rules

Note:
  Defaults are read from kubeschema.json, e.g.
  {"check": {"pattern": "*.yaml", "fail_fast": true, "kubernetes_version": "1.28"}}
"""
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    check_parser = subparsers.add_parser(
        "check",
        help="Check manifest files or directories"
    )
    check_parser.add_argument(
        "paths",
        nargs="+",
        help="Manifest files or directories"
    )
    check_parser.add_argument(
        "--pattern",
        default=None,
        help="Glob for files inside directories (default: from config or *.yaml)"
    )
    check_parser.add_argument(
        "--fail-fast",
        action="store_true",
        default=None,
        help="Report only the first failed rule per document"
    )
    check_parser.add_argument(
        "--kubernetes-version",
        default=None,
        help="Kubernetes release whose schema manifests are checked against (default: from config or 1.28)"
    )
    check_parser.add_argument(
        "--config",
        default=DEFAULT_CONFIG_PATH,
        help=f"Path to config file (default: {DEFAULT_CONFIG_PATH})"
    )
    check_parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Verbose output"
    )

    subparsers.add_parser(
        "rules",
        help="List available rules"
    )

    args = parser.parse_args(argv)

    # Setup logging
    if getattr(args, "verbose", False):
        logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    if args.command == "check":
        return cmd_check(args)
    elif args.command == "rules":
        return cmd_rules(args)
    else:
        parser.print_help()
        return 1


def cmd_check(args):
    """Handle check command."""
    settings = load_settings(args.config)
    if args.pattern is not None:
        settings.pattern = args.pattern
    if args.fail_fast is not None:
        settings.fail_fast = args.fail_fast
    if args.kubernetes_version is not None:
        settings.kubernetes_version = args.kubernetes_version

    files = {}
    for raw in args.paths:
        path = Path(raw)
        if path.is_dir():
            loaded = K8sArtifact.from_dir(str(path), pattern=settings.pattern)
            files.update({str(path / name): content for name, content in loaded.files.items()})
        elif path.is_file():
            files[str(path)] = path.read_text(encoding="utf-8")
        else:
            print(f"Error: Input not found: {path}", file=sys.stderr)
            return 1

    if not files:
        print("No manifest files found")
        return 0

    artifact = K8sArtifact(files=files)
    violations = verify(artifact, [ConstraintOracle(
        fail_fast=settings.fail_fast,
        kubernetes_version=settings.kubernetes_version,
    )])

    if not violations:
        print(f"✓ {len(files)} file(s) passed all rules")
        return 0

    print(f"Found {len(violations)} violation(s)")
    for v in violations:
        print(f"  - {v.location}: {v.id}: {v.message}")
    return 1


def cmd_rules(args):
    """Handle rules command."""
    for current in registered_rules():
        print(f"{current.name}: {current.description}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
