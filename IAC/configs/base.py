"""
Base configuration dataclass for stack settings.

Provides type-safe configuration structure loaded from Pulumi stack configs,
plus validation of the network layout and sizing values.
"""

import ipaddress
import re
from dataclasses import dataclass

import pulumi

from IAC.configs.constants import ENVIRONMENTS

_MQ_USERNAME_PATTERN = re.compile(r"^[A-Za-z0-9_.~-]{2,100}$")


class ConfigValidationError(ValueError):
    """Raised when stack configuration is inconsistent."""


@dataclass(frozen=True)
class StackConfig:
    """
    Stack-specific configuration for infrastructure deployment.

    Attributes:
        environment: Deployment environment (dev, staging, prod)
        my_ip: Operator address or CIDR allowed to SSH into the bastion
        public_key: OpenSSH public key material for the EC2 key pair
        vpc_cidr: VPC CIDR block
        availability_zones: Zones used for subnets, in order
        public_subnet_cidrs: One public subnet CIDR per zone
        private_subnet_cidrs: One private subnet CIDR per zone
        db_name: Initial MySQL database name
        db_username: MySQL master username
        db_password: MySQL master password (secret)
        db_instance_class: RDS instance class
        db_engine_version: MySQL engine version
        db_allocated_storage: RDS storage in GB
        multi_az: Enable multi-AZ deployment for RDS
        cache_node_type: ElastiCache node type
        cache_num_nodes: Number of Memcached nodes
        mq_engine_type: Amazon MQ engine (ActiveMQ or RabbitMQ)
        mq_engine_version: Amazon MQ engine version
        mq_instance_type: Amazon MQ host instance type
        mq_username: Broker user name
        mq_password: Broker user password (secret)
        mq_multi_az: Use an active/standby broker across two subnets
        beanstalk_solution_stack: Elastic Beanstalk platform name
        beanstalk_instance_type: Instance type for the application tier
        beanstalk_min_size: Autoscaling minimum
        beanstalk_max_size: Autoscaling maximum
        bastion_instance_type: Bastion EC2 instance type
        bastion_ami: Fixed bastion AMI, or None to look up Ubuntu
        bastion_username: Login user of the bastion AMI
        db_schema_repo: Git repository holding the initial SQL dump
        db_schema_path: Path of the SQL dump inside that repository
        enable_deletion_protection: Deletion protection outside production (always on in prod)
    """
    environment: str
    my_ip: str
    public_key: str
    vpc_cidr: str
    availability_zones: list[str]
    public_subnet_cidrs: list[str]
    private_subnet_cidrs: list[str]
    db_name: str
    db_username: str
    db_password: pulumi.Input[str]
    db_instance_class: str
    db_engine_version: str
    db_allocated_storage: int
    multi_az: bool
    cache_node_type: str
    cache_num_nodes: int
    mq_engine_type: str
    mq_engine_version: str
    mq_instance_type: str
    mq_username: str
    mq_password: pulumi.Input[str]
    mq_multi_az: bool
    beanstalk_solution_stack: str
    beanstalk_instance_type: str
    beanstalk_min_size: int
    beanstalk_max_size: int
    bastion_instance_type: str
    bastion_ami: str | None
    bastion_username: str
    db_schema_repo: str | None
    db_schema_path: str | None
    enable_deletion_protection: bool

    @property
    def is_production(self) -> bool:
        """Check if this is a production environment."""
        return self.environment == "prod"

    @property
    def ssh_cidr(self) -> str:
        """Operator address as a CIDR block (a bare IP becomes a /32)."""
        return str(ipaddress.ip_network(self.my_ip.strip(), strict=False))

    def get_tags(self) -> dict[str, str]:
        """Get environment-specific tags."""
        return {
            "Environment": self.environment,
        }


def validate_config(config: StackConfig, region: str | None = None) -> StackConfig:
    """
    Check a StackConfig for layout and sizing mistakes.

    Args:
        config: Loaded configuration
        region: AWS region of the stack; when given, every zone must be in it

    Returns:
        The same configuration, for chaining

    Raises:
        ConfigValidationError: On the first inconsistency found
    """
    if config.environment not in ENVIRONMENTS:
        raise ConfigValidationError(
            f"environment must be one of {', '.join(ENVIRONMENTS)}, got {config.environment!r}"
        )

    vpc = _parse_network(config.vpc_cidr, "vpc_cidr")

    zone_count = len(config.availability_zones)
    if zone_count < 2:
        raise ConfigValidationError("at least two availability zones are required")
    if len(set(config.availability_zones)) != zone_count:
        raise ConfigValidationError("availability zones must be distinct")
    if region:
        for zone in config.availability_zones:
            if not zone.startswith(region):
                raise ConfigValidationError(f"availability zone {zone} is not in region {region}")

    for label, cidrs in (
        ("public_subnet_cidrs", config.public_subnet_cidrs),
        ("private_subnet_cidrs", config.private_subnet_cidrs),
    ):
        if len(cidrs) != zone_count:
            raise ConfigValidationError(
                f"{label} needs one entry per zone ({zone_count}), got {len(cidrs)}"
            )

    subnets = []
    for label, cidr in [
        *(("public_subnet_cidrs", c) for c in config.public_subnet_cidrs),
        *(("private_subnet_cidrs", c) for c in config.private_subnet_cidrs),
    ]:
        subnet = _parse_network(cidr, label)
        if subnet.version != vpc.version or not subnet.subnet_of(vpc):
            raise ConfigValidationError(f"subnet {cidr} is outside VPC {config.vpc_cidr}")
        for other in subnets:
            if subnet.overlaps(other):
                raise ConfigValidationError(f"subnets {other} and {subnet} overlap")
        subnets.append(subnet)

    try:
        config.ssh_cidr
    except ValueError as exc:
        raise ConfigValidationError(f"my_ip is not an address or CIDR: {config.my_ip!r}") from exc

    if config.beanstalk_min_size < 1:
        raise ConfigValidationError("beanstalk_min_size must be at least 1")
    if config.beanstalk_min_size > config.beanstalk_max_size:
        raise ConfigValidationError(
            f"beanstalk_min_size ({config.beanstalk_min_size}) exceeds "
            f"beanstalk_max_size ({config.beanstalk_max_size})"
        )

    if not _MQ_USERNAME_PATTERN.match(config.mq_username):
        raise ConfigValidationError(
            "mq_username must be 2-100 characters of letters, digits, '-', '.', '_' or '~'"
        )

    if config.db_allocated_storage < 20:
        raise ConfigValidationError("db_allocated_storage must be at least 20 GB for MySQL")

    if config.cache_num_nodes < 1:
        raise ConfigValidationError("cache_num_nodes must be at least 1")

    # Amazon MQ only runs SINGLE_INSTANCE brokers on t3 hosts
    if config.mq_multi_az and config.mq_instance_type.startswith("mq.t3."):
        raise ConfigValidationError(
            f"mq_multi_az needs an mq.m5 or larger host, got {config.mq_instance_type}"
        )

    if bool(config.db_schema_repo) != bool(config.db_schema_path):
        raise ConfigValidationError("db_schema_repo and db_schema_path must be set together")

    return config


def _parse_network(cidr: str, label: str) -> ipaddress.IPv4Network | ipaddress.IPv6Network:
    try:
        return ipaddress.ip_network(cidr)
    except ValueError as exc:
        raise ConfigValidationError(f"{label}: invalid CIDR {cidr!r}") from exc
