from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Bootstraps logging, merges configuration sources (defaults, persisted
session, CLI overrides), runs the context pipeline and renders the result
to stdout, a file or JSON.
"""

import json
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from context4ai.core.pipeline.engine import run_context_pipeline
from context4ai.core.pipeline.stages.validator import validate_config
from context4ai.domain.config import get_default_config, load_config
from context4ai.domain.pipeline_models import ContextPipelineResult
from context4ai.infra.logging import LoggingConfig, configure_logging, get_logger
from context4ai.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional argument list. Defaults to sys.argv.

    Returns:
        int: Exit code (0 success, 1 pipeline failure, 2 bad input, 130 interrupted).
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    configure_logging(LoggingConfig.for_cli(debug=args.debug, log_file=args.log_file))

    logger.debug("CLI execution initiated. Resolving configuration hierarchy...")

    if args.use_defaults:
        base_conf = get_default_config()
    else:
        base_conf = load_config(args.config_file)

    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    project_root = os.path.abspath(clean_conf["project_root"])
    if not os.path.isdir(project_root):
        msg = f"Project root does not exist: {project_root}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    selected = args.paths or [project_root]
    missing = [p for p in selected if not os.path.exists(p)]
    if missing:
        msg = f"Selected paths do not exist: {', '.join(missing)}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    try:
        result = run_context_pipeline(clean_conf, selected)
    except KeyboardInterrupt:
        print("Interrupted.", file=sys.stderr)
        return 130

    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return 1

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    elif args.output_file:
        _write_output(args.output_file, result)
    else:
        print(result.context_document)

    return 0

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge non-None overrides into the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING
# -----------------------------------------------------------------------------

def _write_output(path: str, result: ContextPipelineResult) -> None:
    """Persist the context document and print a short human summary."""
    with open(path, "w", encoding="utf-8") as f:
        f.write(result.context_document)

    print(f"Context written to: {os.path.abspath(path)}")
    print(f"Estimated tokens: {result.token_count:,} / {result.max_tokens:,}")
    print(f"Files included: {len(result.summary.get('included_files', []))}")
    for w in result.warnings:
        print(f"WARNING: {w}", file=sys.stderr)


if __name__ == "__main__":
    sys.exit(main())
