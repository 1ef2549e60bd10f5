"""
jsonbound CLI: command-line interface for JSON size estimation.
"""

import argparse
import importlib
import json
import os
import sys
from pathlib import Path

from jsonbound.estimation import (
    EstimatorConfig,
    JsonSizeEstimator,
    load_estimator_config,
    type_estimate_to_dict,
)
from jsonbound.schema import load_schema
from jsonbound.utils import configure_logging


def main() -> int:
    """
    Main CLI entry point.

    Returns:
        Exit code: 0 on success, 1 on errors/warnings
    """
    parser = argparse.ArgumentParser(
        description="jsonbound: Static JSON size bounds for typed data"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # estimate command
    estimate_parser = subparsers.add_parser("estimate", help="Estimate JSON size bounds")
    estimate_parser.add_argument(
        "target",
        help="Type to estimate: module:QualName, or a type name when --schema is given",
    )
    estimate_parser.add_argument(
        "--schema",
        help="YAML schema file declaring the types (default: import target as Python)",
    )
    estimate_parser.add_argument(
        "--config",
        help="Estimator config YAML file path",
    )
    estimate_parser.add_argument(
        "--max-collection-size",
        type=int,
        help="Elements assumed in every collection (overrides --config)",
    )
    estimate_parser.add_argument("--max-string-length", type=int)
    estimate_parser.add_argument("--max-binary-size", type=int)
    estimate_parser.add_argument(
        "--output",
        help="Output JSON file path (default: print to stdout)",
    )
    estimate_parser.add_argument(
        "--log-json",
        action="store_true",
        help="Render diagnostics as JSON log lines",
    )

    args = parser.parse_args()

    if args.command == "estimate":
        configure_logging(json_output=args.log_json)
        return _run_estimate(args)
    else:
        parser.print_help()
        return 1


def _build_config(args: argparse.Namespace) -> EstimatorConfig:
    """Merge --config with command-line overrides."""
    data: dict = {}
    if args.config:
        base = load_estimator_config(args.config)
        data = {
            "max_collection_size": base.max_collection_size,
            "max_string_length": base.max_string_length,
            "max_binary_size": base.max_binary_size,
            "leaf_overrides": dict(base.leaf_overrides),
        }
    if args.max_collection_size is not None:
        data["max_collection_size"] = args.max_collection_size
    if args.max_string_length is not None:
        data["max_string_length"] = args.max_string_length
    if args.max_binary_size is not None:
        data["max_binary_size"] = args.max_binary_size
    if "max_collection_size" not in data:
        raise ValueError("--max-collection-size or a --config file is required")
    return load_estimator_config(data)


def _import_target(target: str) -> type:
    """Import module:QualName, with the working directory importable."""
    module_name, sep, qualname = target.partition(":")
    if not sep or not module_name or not qualname:
        raise ValueError(f"Target must look like module:QualName, got {target!r}")
    # Console scripts start with the script directory on sys.path, not the cwd
    cwd = os.getcwd()
    if cwd not in sys.path:
        sys.path.insert(0, cwd)
    obj = importlib.import_module(module_name)
    for part in qualname.split("."):
        obj = getattr(obj, part)
    return obj


def _run_estimate(args: argparse.Namespace) -> int:
    """
    Run the estimate command.

    Returns:
        Exit code: 0 on success, 1 on errors/warnings
    """
    try:
        config = _build_config(args)

        if args.schema:
            registry = load_schema(args.schema)
            estimator = JsonSizeEstimator(config, registry)
            target = args.target
        else:
            estimator = JsonSizeEstimator(config)
            target = _import_target(args.target)

        report = estimator.estimate_report(target)

        # Output JSON
        output_json = json.dumps(type_estimate_to_dict(report), indent=2, sort_keys=True)

        if args.output:
            Path(args.output).write_text(output_json, encoding="utf-8")
        else:
            print(output_json)

        # Print warnings to stderr
        if report.warnings:
            for warning in report.warnings:
                print(f"Warning: {warning}", file=sys.stderr)
            return 1

        return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
