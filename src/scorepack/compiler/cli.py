"""
Build a deployable artifact for a model through the compiler service.

CLI:
    python -m scorepack.compiler.cli \
      --project_id 1 --model_id 42 --model_name gbm_churn \
      --artifact war|jar|pywar --kind pojo|mojo \
      [--package churn_scoring] \
      [--config configs/compiler.yaml] [--address host:port] [--workdir /path] \
      [--log_level INFO]

Prints the artifact path on success; exits 1 with the error on failure.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from scorepack.compiler.base import BuildRequest
from scorepack.compiler.builder import ArtifactBuilder
from scorepack.compiler.errors import CompilerError
from scorepack.compiler.kinds import ArtifactKind, ModelKind
from scorepack.config import load_settings

logger = logging.getLogger(__name__)


def setup_logging(log_level: str) -> None:
    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {log_level}")
    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def build_artifact_main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Build a model artifact via the compiler service")
    parser.add_argument("--project_id", type=int, required=True, help="Project id")
    parser.add_argument("--model_id", type=int, required=True, help="Model id")
    parser.add_argument("--model_name", required=True, help="Logical model name used for file naming")
    parser.add_argument(
        "--artifact",
        required=True,
        choices=[k.value for k in ArtifactKind],
        help="Artifact to build",
    )
    parser.add_argument(
        "--kind",
        required=True,
        choices=[k.value for k in ModelKind],
        help="Model asset format",
    )
    parser.add_argument("--package", default="", help="Python scoring package (pywar only)")
    parser.add_argument("--config", type=Path, help="Compiler config YAML")
    parser.add_argument("--address", help="Compiler service address (overrides config)")
    parser.add_argument("--workdir", type=Path, help="Working directory (overrides config)")
    parser.add_argument("--log_level", default="INFO", help="Logging level (default: INFO)")

    args = parser.parse_args(argv)
    try:
        setup_logging(args.log_level)
        settings = load_settings(args.config)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.address:
        settings.address = args.address
    if args.workdir:
        settings.working_dir = args.workdir

    builder = ArtifactBuilder(
        settings.address,
        settings.working_dir,
        timeout_s=settings.timeout_s,
        ping_timeout_s=settings.ping_timeout_s,
    )
    request = BuildRequest(
        project_id=args.project_id,
        model_id=args.model_id,
        model_name=args.model_name,
        artifact_kind=args.artifact,
        model_kind=args.kind,
        package_name=args.package,
    )

    try:
        artifact = builder.build(request)
    except CompilerError as e:
        logger.error(f"Build failed: {e}")
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(artifact)
    return 0


if __name__ == "__main__":
    sys.exit(build_artifact_main())
