"""
Amazon MQ Component for the application message broker.

Deployment Modes:
- SINGLE_INSTANCE: One broker in the first private subnet. Default.
- Multi-AZ: ACTIVE_STANDBY_MULTI_AZ for ActiveMQ, CLUSTER_MULTI_AZ for
  RabbitMQ. Needs two (ActiveMQ) or three (RabbitMQ) private subnets.

The broker is never publicly accessible; it sits behind backend_sg with
RDS and ElastiCache.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.configs.base import StackConfig
from IAC.utils.tags import create_tags

MULTI_AZ_MODES = {
    "ActiveMQ": ("ACTIVE_STANDBY_MULTI_AZ", 2),
    "RabbitMQ": ("CLUSTER_MULTI_AZ", 3),
}


def broker_placement(
    engine_type: str,
    multi_az: bool,
    subnet_ids: list[pulumi.Input[str]],
) -> tuple[str, list[pulumi.Input[str]]]:
    """
    Pick the deployment mode and the subnets the broker runs in.

    Raises:
        ValueError: If the engine is unknown or too few subnets are given
    """
    if engine_type not in MULTI_AZ_MODES:
        raise ValueError(f"unsupported Amazon MQ engine: {engine_type!r}")
    if not subnet_ids:
        raise ValueError("at least one subnet is required for the broker")

    if not multi_az:
        return "SINGLE_INSTANCE", list(subnet_ids[:1])

    mode, needed = MULTI_AZ_MODES[engine_type]
    if len(subnet_ids) < needed:
        raise ValueError(f"{mode} needs {needed} subnets, got {len(subnet_ids)}")
    return mode, list(subnet_ids[:needed])


@dataclass
class MqOutputs:
    """Output values from Amazon MQ component."""
    broker_id: pulumi.Output[str]
    broker_arn: pulumi.Output[str]
    endpoints: pulumi.Output[list[str]]


class AmazonMqComponent(pulumi.ComponentResource):
    """Amazon MQ broker with a single application user."""

    def __init__(
        self,
        name: str,
        environment: str,
        config: StackConfig,
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        broker_name: str | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:messaging:AmazonMq", name, None, opts)

        deployment_mode, broker_subnets = broker_placement(
            config.mq_engine_type, config.mq_multi_az, subnet_ids,
        )

        self.broker = aws.mq.Broker(
            f"{name}-mq",
            broker_name=broker_name or f"{name}-mq",
            engine_type=config.mq_engine_type,
            engine_version=config.mq_engine_version,
            host_instance_type=config.mq_instance_type,
            deployment_mode=deployment_mode,
            subnet_ids=broker_subnets,
            security_groups=[security_group_id],
            publicly_accessible=False,
            auto_minor_version_upgrade=True,
            apply_immediately=not config.is_production,
            users=[aws.mq.BrokerUserArgs(
                username=config.mq_username,
                password=config.mq_password,
            )],
            logs=aws.mq.BrokerLogsArgs(general=True),
            tags=create_tags(environment, f"{name}-mq", Tier="data"),
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.endpoints = self.broker.instances.apply(
            lambda instances: list(instances[0].endpoints or []) if instances else []
        )

        self.register_outputs({
            "broker_id": self.broker.id,
            "broker_arn": self.broker.arn,
            "endpoints": self.endpoints,
        })

    def get_outputs(self) -> MqOutputs:
        """Get Amazon MQ output values."""
        return MqOutputs(
            broker_id=self.broker.id,
            broker_arn=self.broker.arn,
            endpoints=self.endpoints,
        )
