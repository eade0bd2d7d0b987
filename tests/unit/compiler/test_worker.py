import pytest

from worker_queue.compiler.context import HostContext
from worker_queue.compiler.worker import WorkerDefinition, worker_for
from worker_queue.core.resolver import resolve


pytestmark = [pytest.mark.unit]


def test_worker_definition_from_config(host, raw_config) -> None:
    """
    Given: a configuration with handler, timeout, memory and environment
    When: declaring the worker
    Then: the host receives the function timeout verbatim, not the visibility timeout
    """
    raw = raw_config(handler="src/workers/emails.handler", timeout=7)
    raw["worker"].update({"memorySize": 512, "environment": {"FROM": "noreply@example.com"}})

    worker = worker_for("emails", resolve(raw), host)

    assert worker == WorkerDefinition(
        key="emailsWorker",
        name="test-queues-dev-emailsWorker",
        logical_id="EmailsWorkerLambdaFunction",
        handler="src/workers/emails.handler",
        timeout=7,
        memory_size=512,
        environment={"FROM": "noreply@example.com"},
    )


@pytest.mark.parametrize(
    "handler,entry,index,function",
    [
        ("worker.handler", ".", "worker.py", "handler"),
        ("src/workers/emails.handler", "src/workers", "emails.py", "handler"),
        ("src/workers.emails.process", "src/workers", "emails.py", "process"),
    ],
)
def test_handler_is_split_for_packaging(host, raw_config, handler, entry, index, function) -> None:
    worker = worker_for("emails", resolve(raw_config(handler=handler)), host)

    assert (worker.entry, worker.index, worker.function) == (entry, index, function)


def test_worker_name_fits_lambda_limit(raw_config) -> None:
    host = HostContext(app_name="a" * 60, stage="prod")

    worker = worker_for("emails", resolve(raw_config()), host)

    assert len(worker.name) <= 64
    assert "-prod-" in worker.name


@pytest.mark.parametrize("app_name,stage", [("bad app", "dev"), ("app", "dev_1"), ("", "dev")])
def test_host_context_rejects_invalid_tokens(app_name, stage) -> None:
    with pytest.raises(ValueError):
        HostContext(app_name=app_name, stage=stage)
