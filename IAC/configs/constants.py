"""
Infrastructure constants for the application stack.

Contains CIDR blocks, zones, ports, instance sizes, and default tags.
"""

from typing import Final

PROJECT_NAME: Final[str] = "appstack"

ENVIRONMENTS: Final[tuple[str, ...]] = ("dev", "staging", "prod")

# VPC Configuration
VPC_CIDR: Final[str] = "172.21.0.0/16"

# Region used when the stack does not set aws:region
DEFAULT_REGION: Final[str] = "us-east-2"

# Zones are the stack region plus these suffixes
ZONE_SUFFIXES: Final[tuple[str, ...]] = ("a", "b", "c")

AVAILABILITY_ZONES: Final[list[str]] = [f"{DEFAULT_REGION}{suffix}" for suffix in ZONE_SUFFIXES]

# One public and one private subnet per zone, same order as AVAILABILITY_ZONES
PUBLIC_SUBNET_CIDRS: Final[list[str]] = [
    "172.21.1.0/24",
    "172.21.2.0/24",
    "172.21.3.0/24",
]

PRIVATE_SUBNET_CIDRS: Final[list[str]] = [
    "172.21.4.0/24",
    "172.21.5.0/24",
    "172.21.6.0/24",
]

# Port configurations
PORTS: Final[dict[str, int]] = {
    "ssh": 22,
    "http": 80,
    "https": 443,
    "mysql": 3306,
    "memcached": 11211,
    "activemq_openwire": 61617,
    "amqp": 5671,
}

# Instance sizes
INSTANCE_TYPES: Final[dict[str, str]] = {
    "bastion": "t3.micro",
    "beanstalk": "t3.micro",
    "rds": "db.t3.micro",
    "cache": "cache.t3.micro",
    "mq": "mq.t3.micro",
}

# RDS MySQL defaults
RDS_DEFAULTS: Final[dict[str, str | int]] = {
    "engine_version": "8.0",
    "allocated_storage": 20,
    "db_name": "accounts",
    "username": "admin",
}

# ElastiCache Memcached defaults
CACHE_DEFAULTS: Final[dict[str, str | int]] = {
    "engine_version": "1.6.22",
    "parameter_group": "default.memcached1.6",
    "num_cache_nodes": 1,
}

# Amazon MQ defaults
MQ_DEFAULTS: Final[dict[str, str]] = {
    "engine_type": "ActiveMQ",
    "engine_version": "5.18",
    "username": "appmq",
}

# Elastic Beanstalk defaults
BEANSTALK_DEFAULTS: Final[dict[str, str | int]] = {
    "solution_stack": "64bit Amazon Linux 2023 v5.4.1 running Tomcat 10 Corretto 17",
    "min_size": 1,
    "max_size": 8,
}

# Bastion AMI lookup (Canonical Ubuntu 22.04)
BASTION_AMI_OWNER: Final[str] = "099720109477"
BASTION_AMI_NAME_PATTERN: Final[str] = (
    "ubuntu/images/hvm-ssd/ubuntu-jammy-22.04-amd64-server-*"
)
BASTION_DEFAULT_USERNAME: Final[str] = "ubuntu"

# Default tags applied to all resources
DEFAULT_TAGS: Final[dict[str, str]] = {
    "Project": PROJECT_NAME,
    "ManagedBy": "pulumi",
}

# Local file that receives non-secret stack outputs
OUTPUTS_ENV_FILE: Final[str] = "infrastructure.env"
