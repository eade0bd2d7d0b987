#!/usr/bin/env python3
"""
Worker Queues CDK App
Compiles every queue construct of a stage and deploys it with its workers.
"""

import aws_cdk as cdk

from worker_queue.stacks.worker_queues_stack import WorkerQueuesStack

# Configuration
from worker_queue.config.environments import get_environment_config

app = cdk.App()

# Get stage configuration
environment = app.node.try_get_context("environment") or "dev"
config = get_environment_config(environment)

# CDK environment (account/region)
cdk_env = cdk.Environment(account=config.get("account_id"), region=config.get("region", "ap-northeast-2"))

worker_queues_stack = WorkerQueuesStack(
    app,
    f"{config['app_name']}-{environment}",
    environment=environment,
    config=config,
    env=cdk_env,
)

# ========================================
# TAGGING STRATEGY
# ========================================

cdk.Tags.of(app).add("Environment", environment)
cdk.Tags.of(app).add("Application", config["app_name"])
cdk.Tags.of(app).add("ManagedBy", "CDK")
for key, value in (config.get("tags") or {}).items():
    cdk.Tags.of(worker_queues_stack).add(key, value)

app.synth()
