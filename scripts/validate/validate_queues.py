#!/usr/bin/env python3
"""Compile every queue construct of a stage without synthesizing CDK.

Prints the CloudFormation fragment (resources, outputs, permission
statements) as JSON, or the validation errors with exit code 1.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

repo_root = Path(__file__).resolve().parents[2]
if str(repo_root) not in sys.path:
    sys.path.insert(0, str(repo_root))

from worker_queue.compiler.compile import compile_queues  # noqa: E402
from worker_queue.compiler.context import HostContext  # noqa: E402
from worker_queue.config.environments import get_environment_config  # noqa: E402
from worker_queue.core.errors import ConfigValidationError  # noqa: E402


def build_report(environment: str) -> Dict[str, Any]:
    """Compile the stage and return a JSON-serializable report."""
    config = get_environment_config(environment)
    host = HostContext(app_name=config["app_name"], stage=environment)
    compilations = compile_queues(config.get("constructs", {}), host)

    return {
        "stage": environment,
        "constructs": {
            name: {
                **compilation.to_template(),
                "Permissions": [statement.to_dict() for statement in compilation.permissions],
                "Worker": {
                    "name": compilation.worker.name,
                    "logical_id": compilation.worker.logical_id,
                    "handler": compilation.worker.handler,
                    "timeout": compilation.worker.timeout,
                },
            }
            for name, compilation in compilations.items()
        },
    }


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Validate and preview worker queue constructs")
    parser.add_argument("--environment", "-e", default="dev", help="Stage to compile (dev, staging, prod)")
    args = parser.parse_args(argv)

    try:
        report = build_report(args.environment)
    except ConfigValidationError as exc:
        print(json.dumps({"construct": exc.construct_name, "errors": exc.errors}, indent=2), file=sys.stderr)
        return 1
    except ValueError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(json.dumps(report, indent=2, ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
