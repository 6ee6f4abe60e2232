"""
Stack configuration loader.

Loads and validates configuration from Pulumi stack config files
(Pulumi.<stack>.yaml).
"""

from pathlib import Path

import pulumi

from IAC.configs.base import StackConfig, validate_config
from IAC.configs.constants import (
    AVAILABILITY_ZONES,
    BASTION_DEFAULT_USERNAME,
    BEANSTALK_DEFAULTS,
    CACHE_DEFAULTS,
    INSTANCE_TYPES,
    MQ_DEFAULTS,
    PRIVATE_SUBNET_CIDRS,
    PUBLIC_SUBNET_CIDRS,
    RDS_DEFAULTS,
    VPC_CIDR,
    ZONE_SUFFIXES,
)


def read_public_key(config: pulumi.Config) -> str:
    """
    Resolve the SSH public key, inline or from a file path.

    Raises:
        pulumi.ConfigMissingError: If neither public_key nor public_key_path is set
        FileNotFoundError: If public_key_path does not exist
    """
    inline = config.get("public_key")
    if inline:
        return inline.strip()

    path = config.get("public_key_path")
    if not path:
        # require() raises the engine's standard missing-config error
        return config.require("public_key")

    return Path(path).expanduser().read_text().strip()


def _get_int(config: pulumi.Config, key: str, default: int) -> int:
    """Integer config value; an explicit 0 is kept so validation can reject it."""
    value = config.get_int(key)
    return default if value is None else value


def default_zones(region: str | None) -> list[str]:
    """Three zones in the stack region, or the built-in defaults."""
    if not region:
        return list(AVAILABILITY_ZONES)
    return [f"{region}{suffix}" for suffix in ZONE_SUFFIXES]


def get_config() -> StackConfig:
    """
    Load stack configuration from Pulumi stack config.

    Returns:
        StackConfig: Validated configuration object

    Raises:
        pulumi.ConfigMissingError: If required config values are missing
        ConfigValidationError: If values are inconsistent
    """
    config = pulumi.Config()
    region = pulumi.Config("aws").get("region")

    return validate_config(StackConfig(
        environment=config.require("environment"),
        my_ip=config.require("my_ip"),
        public_key=read_public_key(config),
        vpc_cidr=config.get("vpc_cidr") or VPC_CIDR,
        availability_zones=config.get_object("availability_zones") or default_zones(region),
        public_subnet_cidrs=config.get_object("public_subnet_cidrs") or list(PUBLIC_SUBNET_CIDRS),
        private_subnet_cidrs=config.get_object("private_subnet_cidrs") or list(PRIVATE_SUBNET_CIDRS),
        db_name=config.get("db_name") or str(RDS_DEFAULTS["db_name"]),
        db_username=config.get("db_username") or str(RDS_DEFAULTS["username"]),
        db_password=config.require_secret("db_password"),
        db_instance_class=config.get("db_instance_class") or INSTANCE_TYPES["rds"],
        db_engine_version=config.get("db_engine_version") or str(RDS_DEFAULTS["engine_version"]),
        db_allocated_storage=_get_int(config, "db_allocated_storage", int(RDS_DEFAULTS["allocated_storage"])),
        multi_az=config.get_bool("multi_az") or False,
        cache_node_type=config.get("cache_node_type") or INSTANCE_TYPES["cache"],
        cache_num_nodes=_get_int(config, "cache_num_nodes", int(CACHE_DEFAULTS["num_cache_nodes"])),
        mq_engine_type=config.get("mq_engine_type") or MQ_DEFAULTS["engine_type"],
        mq_engine_version=config.get("mq_engine_version") or MQ_DEFAULTS["engine_version"],
        mq_instance_type=config.get("mq_instance_type") or INSTANCE_TYPES["mq"],
        mq_username=config.get("mq_username") or MQ_DEFAULTS["username"],
        mq_password=config.require_secret("mq_password"),
        mq_multi_az=config.get_bool("mq_multi_az") or False,
        beanstalk_solution_stack=config.get("beanstalk_solution_stack") or str(BEANSTALK_DEFAULTS["solution_stack"]),
        beanstalk_instance_type=config.get("beanstalk_instance_type") or INSTANCE_TYPES["beanstalk"],
        beanstalk_min_size=_get_int(config, "beanstalk_min_size", int(BEANSTALK_DEFAULTS["min_size"])),
        beanstalk_max_size=_get_int(config, "beanstalk_max_size", int(BEANSTALK_DEFAULTS["max_size"])),
        bastion_instance_type=config.get("bastion_instance_type") or INSTANCE_TYPES["bastion"],
        bastion_ami=config.get("bastion_ami"),
        bastion_username=config.get("bastion_username") or BASTION_DEFAULT_USERNAME,
        db_schema_repo=config.get("db_schema_repo"),
        db_schema_path=config.get("db_schema_path"),
        enable_deletion_protection=config.get_bool("enable_deletion_protection") or False,
    ), region=region)
