"""
Application stack program.

Declares all component resources in dependency order:
1. Configuration
2. VPC -> Security Groups
3. Key Pair, IAM Roles
4. RDS MySQL, ElastiCache Memcached, Amazon MQ
5. Bastion (after RDS, loads the schema)
6. Elastic Beanstalk (receives data-tier endpoints)

With `state_bucket_only: true` only the remote state bucket is deployed;
that bootstrap stack runs against a local backend once per account.
"""

import pulumi
import pulumi_aws as aws

from IAC.configs.base import StackConfig
from IAC.configs.constants import OUTPUTS_ENV_FILE, PORTS, PROJECT_NAME
from IAC.configs.environment import get_config
from IAC.utils.backend import build_backend_url
from IAC.utils.naming import ResourceNamer
from IAC.utils.outputs import write_outputs_to_env

# Networking
from IAC.components.networking.vpc import VpcComponent
from IAC.components.networking.security_groups import SecurityGroupsComponent

# Security
from IAC.components.security.iam_roles import IamRolesComponent
from IAC.components.security.key_pair import KeyPairComponent

# Storage
from IAC.components.storage.rds_mysql import RdsMysqlComponent
from IAC.components.storage.elasticache_memcached import ElastiCacheComponent
from IAC.components.storage.state_bucket import StateBucketComponent

# Messaging
from IAC.components.messaging.amazon_mq import AmazonMqComponent

# Compute
from IAC.components.compute.bastion import BastionComponent
from IAC.components.compute.beanstalk import BeanstalkComponent, build_environment_settings


def _deploy_state_bucket_only(namer: ResourceNamer, environment: str) -> None:
    """Deploy only the S3 bucket that backs `pulumi login s3://...`.

    Args:
        namer: ResourceNamer instance
        environment: Deployment environment
    """
    pulumi_config = pulumi.Config()
    bucket_name = pulumi_config.get("state_bucket")
    if not bucket_name:
        # Bucket names are global; the account id keeps the default unique
        account_id = aws.get_caller_identity().account_id
        bucket_name = namer.bucket_name(f"state-{account_id}")
    region = aws.get_region().region

    state_bucket = StateBucketComponent(
        name=namer.name(""),
        environment=environment,
        bucket_name=bucket_name,
    )
    state_outputs = state_bucket.get_outputs()

    backend_url = build_backend_url(
        bucket_name,
        region,
        pulumi_config.get("state_prefix"),
    )

    pulumi.export("state_bucket", state_outputs.bucket_name)
    pulumi.export("state_bucket_arn", state_outputs.bucket_arn)
    pulumi.export("backend_url", backend_url)

    pulumi.log.info(f"State bucket stack declared; log in with: pulumi login {backend_url}")


def _deploy_stack(config: StackConfig, namer: ResourceNamer) -> dict[str, pulumi.Input]:
    """Declare the full application stack and return its exports."""
    base_name = namer.name("")

    # --- Layer 1: Networking Foundation ---
    vpc = VpcComponent(
        name=base_name,
        environment=config.environment,
        vpc_cidr=config.vpc_cidr,
        availability_zones=config.availability_zones,
        public_subnet_cidrs=config.public_subnet_cidrs,
        private_subnet_cidrs=config.private_subnet_cidrs,
    )
    vpc_outputs = vpc.get_outputs()

    security_groups = SecurityGroupsComponent(
        name=base_name,
        environment=config.environment,
        vpc_id=vpc_outputs.vpc_id,
        ssh_cidr=config.ssh_cidr,
    )
    sg_outputs = security_groups.get_outputs()

    # --- Layer 2: Access ---
    key_pair = KeyPairComponent(
        name=base_name,
        environment=config.environment,
        public_key=config.public_key,
    )
    key_outputs = key_pair.get_outputs()

    iam_roles = IamRolesComponent(
        name=base_name,
        environment=config.environment,
    )
    iam_outputs = iam_roles.get_outputs()

    # --- Layer 3: Data services ---
    rds = RdsMysqlComponent(
        name=base_name,
        environment=config.environment,
        config=config,
        subnet_ids=vpc_outputs.private_subnet_ids,
        security_group_id=sg_outputs.backend_sg_id,
        identifier=namer.identifier("mysql"),
    )
    rds_outputs = rds.get_outputs()

    cache = ElastiCacheComponent(
        name=base_name,
        environment=config.environment,
        config=config,
        subnet_ids=vpc_outputs.private_subnet_ids,
        security_group_id=sg_outputs.backend_sg_id,
        cluster_id=namer.identifier("cache"),
    )
    cache_outputs = cache.get_outputs()

    broker = AmazonMqComponent(
        name=base_name,
        environment=config.environment,
        config=config,
        subnet_ids=vpc_outputs.private_subnet_ids,
        security_group_id=sg_outputs.backend_sg_id,
        broker_name=namer.identifier("mq"),
    )
    mq_outputs = broker.get_outputs()

    # --- Layer 4: Bastion (schema bootstrap needs RDS up) ---
    bastion = BastionComponent(
        name=base_name,
        environment=config.environment,
        instance_type=config.bastion_instance_type,
        subnet_id=vpc_outputs.public_subnet_ids[0],
        security_group_id=sg_outputs.bastion_sg_id,
        key_name=key_outputs.key_name,
        db_address=rds_outputs.address,
        db_port=rds_outputs.port,
        db_name=config.db_name,
        db_username=config.db_username,
        db_password=config.db_password,
        ami_id=config.bastion_ami,
        schema_repo=config.db_schema_repo,
        schema_path=config.db_schema_path,
        depends_on=[rds.instance],
    )
    bastion_outputs = bastion.get_outputs()

    # --- Layer 5: Application tier ---
    mq_endpoint = mq_outputs.endpoints.apply(lambda endpoints: endpoints[0] if endpoints else "")

    settings = build_environment_settings(
        vpc_id=vpc_outputs.vpc_id,
        private_subnet_ids=vpc_outputs.private_subnet_ids,
        public_subnet_ids=vpc_outputs.public_subnet_ids,
        instance_type=config.beanstalk_instance_type,
        key_name=key_outputs.key_name,
        app_security_group_id=sg_outputs.app_sg_id,
        elb_security_group_id=sg_outputs.elb_sg_id,
        instance_profile_name=iam_outputs.instance_profile_name,
        service_role_arn=iam_outputs.service_role_arn,
        min_size=config.beanstalk_min_size,
        max_size=config.beanstalk_max_size,
        environment_properties={
            "environment": config.environment,
            "DB_HOST": rds_outputs.address,
            "DB_PORT": rds_outputs.port.apply(str),
            "DB_NAME": config.db_name,
            "DB_USER": config.db_username,
            "MEMCACHED_HOST": cache_outputs.cluster_address,
            "MEMCACHED_PORT": str(PORTS["memcached"]),
            "MQ_ENDPOINT": mq_endpoint,
        },
    )

    beanstalk = BeanstalkComponent(
        name=namer.name("app"),
        environment=config.environment,
        solution_stack_name=config.beanstalk_solution_stack,
        settings=settings,
        opts=pulumi.ResourceOptions(depends_on=[rds, cache, broker]),
    )
    beanstalk_outputs = beanstalk.get_outputs()

    return {
        "vpc_id": vpc_outputs.vpc_id,
        "nat_gateway_id": vpc_outputs.nat_gateway_id,
        "bastion_public_ip": bastion_outputs.public_ip,
        "bastion_ssh": bastion_outputs.public_dns.apply(
            lambda dns: f"ssh {config.bastion_username}@{dns}"
        ),
        "rds_endpoint": rds_outputs.endpoint,
        "memcached_endpoint": cache_outputs.configuration_endpoint,
        "mq_endpoint": mq_endpoint,
        "beanstalk_application": beanstalk_outputs.application_name,
        "beanstalk_environment": beanstalk_outputs.environment_name,
        "beanstalk_url": beanstalk_outputs.endpoint_url,
        "beanstalk_cname": beanstalk_outputs.cname,
    }


def main() -> None:
    """Deploy the application stack."""
    pulumi_config = pulumi.Config()

    # Check if deploying the state bucket only
    if pulumi_config.get_bool("state_bucket_only"):
        environment = pulumi_config.get("environment") or pulumi.get_stack()
        namer = ResourceNamer(project=PROJECT_NAME, environment=environment)
        _deploy_state_bucket_only(namer, environment)
        return

    config = get_config()
    namer = ResourceNamer(project=PROJECT_NAME, environment=config.environment)
    pulumi.log.info(f"Deploying {namer.name('')} ({len(config.availability_zones)} zones)")

    outputs = _deploy_stack(config, namer)

    # Write outputs to .env file for local tooling
    write_outputs_to_env(outputs, OUTPUTS_ENV_FILE)

    # Export to Pulumi stack
    for key, value in outputs.items():
        pulumi.export(key, value)

