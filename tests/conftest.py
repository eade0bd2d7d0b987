import sys
from pathlib import Path
from typing import Any, Callable, Iterator

import pytest


# Ensure project root is importable at collection time
_repo_root = Path(__file__).resolve().parents[1]
_repo_root_str = str(_repo_root)
if _repo_root_str not in sys.path:
    sys.path.insert(0, _repo_root_str)


@pytest.fixture(autouse=True)
def stage_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear logging env leaks between tests."""
    monkeypatch.delenv("STAGE", raising=False)
    monkeypatch.delenv("LOG_LEVEL", raising=False)
    yield


@pytest.fixture
def host():
    from worker_queue.compiler.context import HostContext

    return HostContext(app_name="test-queues", stage="dev")


@pytest.fixture
def raw_config() -> Callable[..., dict[str, Any]]:
    """Build a raw queue configuration; keyword overrides are merged at the top level."""
    from tests.fixtures.builders import build_raw_queue_config

    return build_raw_queue_config


@pytest.fixture
def load_module() -> Callable[[str], dict[str, Any]]:
    import runpy

    def _apply(path: str) -> dict[str, Any]:
        return runpy.run_path(str(_repo_root / path))

    return _apply


@pytest.fixture
def fake_python_function(
    monkeypatch: pytest.MonkeyPatch,
) -> Callable[[Any], None]:
    from aws_cdk import Duration

    def _apply(target_module: Any) -> None:
        from aws_cdk import aws_lambda as lambda_

        def _fake(scope, id, **kwargs):
            return lambda_.Function(
                scope,
                id,
                function_name=kwargs.get("function_name"),
                runtime=lambda_.Runtime.PYTHON_3_12,
                handler="index.handler",
                code=lambda_.Code.from_inline("def handler(event, context): return {}"),
                memory_size=kwargs.get("memory_size", 128),
                timeout=kwargs.get("timeout", Duration.seconds(10)),
                log_retention=kwargs.get("log_retention"),
                role=kwargs.get("role"),
                environment=kwargs.get("environment", {}),
            )

        monkeypatch.setattr(target_module, "PythonFunction", _fake, raising=False)

    return _apply
