"""
Security components for IAM and SSH access.

Components:
- IamRolesComponent: Beanstalk instance profile and service role
- KeyPairComponent: EC2 key pair for bastion and application instances
"""

from IAC.components.security.iam_roles import IamRolesComponent, IamRoleOutputs
from IAC.components.security.key_pair import KeyPairComponent, KeyPairOutputs

__all__ = [
    "IamRolesComponent",
    "IamRoleOutputs",
    "KeyPairComponent",
    "KeyPairOutputs",
]
