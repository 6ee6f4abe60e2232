"""
Configuration module for Pulumi infrastructure.

Provides type-safe configuration loading from Pulumi stack config files.
"""

from IAC.configs.base import ConfigValidationError, StackConfig, validate_config
from IAC.configs.environment import get_config
from IAC.configs.constants import (
    VPC_CIDR,
    PUBLIC_SUBNET_CIDRS,
    PRIVATE_SUBNET_CIDRS,
    DEFAULT_TAGS,
    INSTANCE_TYPES,
)

__all__ = [
    "ConfigValidationError",
    "StackConfig",
    "validate_config",
    "get_config",
    "VPC_CIDR",
    "PUBLIC_SUBNET_CIDRS",
    "PRIVATE_SUBNET_CIDRS",
    "DEFAULT_TAGS",
    "INSTANCE_TYPES",
]
