"""Stack hosting every worker queue construct of a stage."""

from __future__ import annotations

from aws_cdk import (
    Duration,
    Stack,
    aws_iam as iam,
    aws_lambda as lambda_,
    aws_logs as logs,
)
from aws_cdk.aws_lambda_python_alpha import PythonFunction
from constructs import Construct

from worker_queue.compiler.compile import QueueCompilation, compile_queues
from worker_queue.compiler.context import HostContext
from worker_queue.compiler.worker import WorkerDefinition
from worker_queue.config.types import StageConfig
from worker_queue.constructs.queue_construct import QueueConstruct, to_token


class WorkerQueuesStack(Stack):
    """Shared execution role, worker functions and compiled queue constructs."""

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        environment: str,
        config: StageConfig,
        **kwargs,
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        self.env_name = environment
        self.config = config
        self.host = HostContext(app_name=config["app_name"], stage=environment)

        # Compile first so permissions can be merged into the role up front
        self.compilations = compile_queues(config.get("constructs", {}), self.host)

        self.execution_role = self._create_execution_role()

        self.queues: dict[str, QueueConstruct] = {
            name: QueueConstruct(self, name, compilation=compilation) for name, compilation in self.compilations.items()
        }

        self.workers: dict[str, lambda_.IFunction] = {
            name: self._create_worker_function(compilation, self.queues[name])
            for name, compilation in self.compilations.items()
        }

    def _create_execution_role(self) -> iam.Role:
        """Create the role shared by every worker, holding all contributed statements."""
        statements = [
            iam.PolicyStatement(
                effect=iam.Effect.ALLOW if statement.effect == "Allow" else iam.Effect.DENY,
                actions=[statement.action],
                resources=[to_token(resource) for resource in statement.resources],
            )
            for compilation in self.compilations.values()
            for statement in compilation.permissions
        ]

        role = iam.Role(
            self,
            "ExecutionRole",
            role_name=f"{self.host.app_name}-{self.env_name}-lambdaRole",
            assumed_by=iam.ServicePrincipal("lambda.amazonaws.com"),
            managed_policies=[
                iam.ManagedPolicy.from_aws_managed_policy_name("service-role/AWSLambdaSQSQueueExecutionRole"),
            ],
            inline_policies={"WorkerQueues": iam.PolicyDocument(statements=statements)} if statements else None,
        )
        role.node.default_child.override_logical_id(self.host.execution_role_id)
        return role

    def _create_worker_function(self, compilation: QueueCompilation, queue: QueueConstruct) -> lambda_.IFunction:
        """Create the worker Lambda function the compiled event source mapping points at."""
        worker: WorkerDefinition = compilation.worker

        function = PythonFunction(
            self,
            worker.key,
            function_name=worker.name,
            runtime=lambda_.Runtime.PYTHON_3_12,
            entry=worker.entry,
            index=worker.index,
            handler=worker.function,
            memory_size=worker.memory_size,
            timeout=Duration.seconds(worker.timeout),
            log_retention=self._log_retention(),
            role=self.execution_role,
            environment={
                "STAGE": self.env_name,
                "QUEUE_URL": queue.queue_url,
                **dict(worker.environment),
            },
        )
        function.node.default_child.override_logical_id(worker.logical_id)
        return function

    def _log_retention(self) -> logs.RetentionDays:
        """Map integer days from config to CloudWatch Logs retention enum."""
        retention_map = {
            1: logs.RetentionDays.ONE_DAY,
            3: logs.RetentionDays.THREE_DAYS,
            5: logs.RetentionDays.FIVE_DAYS,
            7: logs.RetentionDays.ONE_WEEK,
            14: logs.RetentionDays.TWO_WEEKS,
            30: logs.RetentionDays.ONE_MONTH,
            90: logs.RetentionDays.THREE_MONTHS,
        }
        return retention_map.get(self.config.get("log_retention_days", 14), logs.RetentionDays.TWO_WEEKS)
