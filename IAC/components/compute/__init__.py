"""
Compute components for the application tier and administrative access.

Components:
- BeanstalkComponent: Elastic Beanstalk application + load-balanced environment
- BastionComponent: SSH jump host that also loads the initial DB schema
"""

from IAC.components.compute.beanstalk import BeanstalkComponent, BeanstalkOutputs, build_environment_settings
from IAC.components.compute.bastion import BastionComponent, BastionOutputs, render_db_init_script

__all__ = [
    "BeanstalkComponent",
    "BeanstalkOutputs",
    "build_environment_settings",
    "BastionComponent",
    "BastionOutputs",
    "render_db_init_script",
]
