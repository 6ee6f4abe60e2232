"""
ElastiCache Memcached Component for the application cache.

The application tier keeps session and query caches here. Memcached has no
authentication, so the only guard is the backend security group and the
private subnets.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.configs.base import StackConfig
from IAC.configs.constants import CACHE_DEFAULTS, PORTS
from IAC.utils.tags import create_tags


@dataclass
class CacheOutputs:
    """Output values from ElastiCache component."""
    configuration_endpoint: pulumi.Output[str]
    cluster_address: pulumi.Output[str]
    port: pulumi.Output[int]


class ElastiCacheComponent(pulumi.ComponentResource):
    """ElastiCache Memcached cluster in the private subnets."""

    def __init__(
        self,
        name: str,
        environment: str,
        config: StackConfig,
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        cluster_id: str | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:storage:ElastiCache", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.subnet_group = aws.elasticache.SubnetGroup(
            f"{name}-cache-subnet-group",
            subnet_ids=subnet_ids,
            description="Private subnets for ElastiCache Memcached",
            tags=create_tags(environment, f"{name}-cache-subnet-group"),
            opts=child_opts,
        )

        num_nodes = config.cache_num_nodes
        self.cluster = aws.elasticache.Cluster(
            f"{name}-memcached",
            cluster_id=cluster_id or f"{name}-memcached",
            engine="memcached",
            engine_version=str(CACHE_DEFAULTS["engine_version"]),
            node_type=config.cache_node_type,
            num_cache_nodes=num_nodes,
            parameter_group_name=str(CACHE_DEFAULTS["parameter_group"]),
            port=PORTS["memcached"],
            subnet_group_name=self.subnet_group.name,
            security_group_ids=[security_group_id],
            az_mode="cross-az" if num_nodes > 1 else "single-az",
            apply_immediately=not config.is_production,
            tags=create_tags(environment, f"{name}-memcached", Tier="data"),
            opts=child_opts,
        )

        self.register_outputs({
            "configuration_endpoint": self.cluster.configuration_endpoint,
            "cluster_address": self.cluster.cluster_address,
            "port": self.cluster.port,
        })

    def get_outputs(self) -> CacheOutputs:
        """Get ElastiCache output values."""
        return CacheOutputs(
            configuration_endpoint=self.cluster.configuration_endpoint,
            cluster_address=self.cluster.cluster_address,
            port=self.cluster.port,
        )
