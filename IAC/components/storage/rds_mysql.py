"""
RDS MySQL Component for the application database.

Access Control - Who Can Connect:
1. Beanstalk instances (app_sg) -> any port on backend_sg
2. Bastion host (bastion_sg) -> Port 3306, used once to load the schema
3. Anyone else -> DENIED

How the Connection Works:
1. Routing: Instances in private subnets reach RDS over the implicit LOCAL
   route. Traffic never leaves the VPC.
2. Security Group: backend_sg is identity-based, not IP-based.
3. Credentials: master username from config, password from a Pulumi secret.
   Beanstalk environment properties carry DB_HOST, DB_PORT, DB_NAME and
   DB_USER. The password is never written to plaintext option settings.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.configs.base import StackConfig
from IAC.utils.tags import create_tags


@dataclass
class RdsOutputs:
    """Output values from RDS component."""
    address: pulumi.Output[str]
    endpoint: pulumi.Output[str]
    port: pulumi.Output[int]
    database_name: pulumi.Output[str]


class RdsMysqlComponent(pulumi.ComponentResource):
    """
    RDS MySQL database for application persistence.

    Lives in the private subnets; never publicly accessible.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        config: StackConfig,
        subnet_ids: list[pulumi.Input[str]],
        security_group_id: pulumi.Input[str],
        identifier: str | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:storage:RdsMysql", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)
        identifier = identifier or f"{name}-mysql"
        self.db_name = config.db_name

        # DB Subnet Group
        self.subnet_group = aws.rds.SubnetGroup(
            f"{name}-db-subnet-group",
            subnet_ids=subnet_ids,
            description="Private subnets for RDS MySQL",
            tags=create_tags(environment, f"{name}-db-subnet-group"),
            opts=child_opts,
        )

        # RDS Instance
        self.instance = aws.rds.Instance(
            f"{name}-mysql",
            identifier=identifier,
            engine="mysql",
            engine_version=config.db_engine_version,
            instance_class=config.db_instance_class,
            allocated_storage=config.db_allocated_storage,
            storage_type="gp3",
            storage_encrypted=True,
            db_name=config.db_name,
            username=config.db_username,
            password=config.db_password,
            db_subnet_group_name=self.subnet_group.name,
            vpc_security_group_ids=[security_group_id],
            publicly_accessible=False,
            multi_az=config.multi_az,
            deletion_protection=config.is_production or config.enable_deletion_protection,
            skip_final_snapshot=not config.is_production,
            final_snapshot_identifier=f"{identifier}-final-snapshot" if config.is_production else None,
            backup_retention_period=7 if config.is_production else 1,
            backup_window="03:00-04:00",
            maintenance_window="Mon:04:00-Mon:05:00",
            apply_immediately=not config.is_production,
            tags=create_tags(environment, f"{name}-mysql", Tier="data"),
            opts=child_opts,
        )

        self.register_outputs({
            "address": self.instance.address,
            "endpoint": self.instance.endpoint,
            "port": self.instance.port,
            "database_name": self.db_name,
        })

    def get_outputs(self) -> RdsOutputs:
        """Get RDS output values."""
        return RdsOutputs(
            address=self.instance.address,
            endpoint=self.instance.endpoint,
            port=self.instance.port,
            database_name=pulumi.Output.from_input(self.db_name),
        )
