"""
IAM roles component for the Elastic Beanstalk tier.

Creates:
- EC2 instance role + instance profile for Beanstalk instances
- Beanstalk service role used for enhanced health and managed updates
"""

import json
from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.utils.tags import create_tags

INSTANCE_MANAGED_POLICIES = [
    "arn:aws:iam::aws:policy/AWSElasticBeanstalkWebTier",
    "arn:aws:iam::aws:policy/AWSElasticBeanstalkMulticontainerDocker",
    "arn:aws:iam::aws:policy/AWSElasticBeanstalkWorkerTier",
]

SERVICE_MANAGED_POLICIES = [
    "arn:aws:iam::aws:policy/service-role/AWSElasticBeanstalkEnhancedHealth",
    "arn:aws:iam::aws:policy/AWSElasticBeanstalkManagedUpdatesCustomerRolePolicy",
]


def assume_role_policy(service: str) -> str:
    """Trust policy letting an AWS service principal assume a role."""
    return json.dumps({
        "Version": "2012-10-17",
        "Statement": [{
            "Effect": "Allow",
            "Principal": {"Service": service},
            "Action": "sts:AssumeRole",
        }],
    })


@dataclass
class IamRoleOutputs:
    """Output values from IAM roles component."""
    instance_role_arn: pulumi.Output[str]
    instance_profile_name: pulumi.Output[str]
    service_role_arn: pulumi.Output[str]


class IamRolesComponent(pulumi.ComponentResource):
    """
    IAM roles for Elastic Beanstalk.

    Uses the AWS managed Beanstalk policies rather than the console-created
    default roles, so a fresh account can deploy the stack.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:security:IamRoles", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        # Instance role
        self.instance_role = aws.iam.Role(
            f"{name}-eb-ec2-role",
            assume_role_policy=assume_role_policy("ec2.amazonaws.com"),
            tags=create_tags(environment, f"{name}-eb-ec2-role"),
            opts=child_opts,
        )

        for policy_arn in INSTANCE_MANAGED_POLICIES:
            suffix = policy_arn.rsplit("/", 1)[-1]
            aws.iam.RolePolicyAttachment(
                f"{name}-eb-ec2-{suffix}",
                role=self.instance_role.name,
                policy_arn=policy_arn,
                opts=child_opts,
            )

        self.instance_profile = aws.iam.InstanceProfile(
            f"{name}-eb-ec2-profile",
            role=self.instance_role.name,
            tags=create_tags(environment, f"{name}-eb-ec2-profile"),
            opts=child_opts,
        )

        # Service role
        self.service_role = aws.iam.Role(
            f"{name}-eb-service-role",
            assume_role_policy=assume_role_policy("elasticbeanstalk.amazonaws.com"),
            tags=create_tags(environment, f"{name}-eb-service-role"),
            opts=child_opts,
        )

        for policy_arn in SERVICE_MANAGED_POLICIES:
            suffix = policy_arn.rsplit("/", 1)[-1]
            aws.iam.RolePolicyAttachment(
                f"{name}-eb-service-{suffix}",
                role=self.service_role.name,
                policy_arn=policy_arn,
                opts=child_opts,
            )

        self.register_outputs({
            "instance_role_arn": self.instance_role.arn,
            "instance_profile_name": self.instance_profile.name,
            "service_role_arn": self.service_role.arn,
        })

    def get_outputs(self) -> IamRoleOutputs:
        """Get IAM role output values."""
        return IamRoleOutputs(
            instance_role_arn=self.instance_role.arn,
            instance_profile_name=self.instance_profile.name,
            service_role_arn=self.service_role.arn,
        )
