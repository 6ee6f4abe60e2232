"""
Elastic Beanstalk Component for the application tier.

This is where inbound requests end up (Internet -> ALB -> Beanstalk instances).

Key Pieces:
1. Application: The logical container for versions and environments.
2. Environment: One running copy of the app on a solution stack (Tomcat).
   Beanstalk itself creates the ALB, the Auto Scaling group and the
   launch template from the option settings below.
3. Option settings, grouped by namespace:
   - aws:ec2:vpc -> instances in private subnets, ALB in public subnets.
   - aws:autoscaling:* -> instance type, key pair, SG, instance profile, sizes.
   - aws:elasticbeanstalk:environment / aws:elbv2:* -> ALB with our ELB SG.
   - aws:elasticbeanstalk:command + rollingupdate -> one instance at a time,
     health-based rolling deploys and config updates.
   - aws:elasticbeanstalk:application:environment -> endpoints of RDS,
     Memcached and MQ handed to the app as environment properties.
"""

from dataclasses import dataclass
from typing import Mapping

import pulumi
import pulumi_aws as aws

from IAC.utils.tags import create_tags

Setting = aws.elasticbeanstalk.EnvironmentSettingArgs


def join_ids(ids: list[pulumi.Input[str]]) -> pulumi.Input[str]:
    """Comma-join resource IDs, as Beanstalk expects for subnet lists."""
    if all(isinstance(value, str) for value in ids):
        return ",".join(ids)
    return pulumi.Output.all(*ids).apply(",".join)


def build_environment_settings(
    *,
    vpc_id: pulumi.Input[str],
    private_subnet_ids: list[pulumi.Input[str]],
    public_subnet_ids: list[pulumi.Input[str]],
    instance_type: str,
    key_name: pulumi.Input[str],
    app_security_group_id: pulumi.Input[str],
    elb_security_group_id: pulumi.Input[str],
    instance_profile_name: pulumi.Input[str],
    service_role_arn: pulumi.Input[str],
    min_size: int,
    max_size: int,
    environment_properties: Mapping[str, pulumi.Input[str]] | None = None,
) -> list[aws.elasticbeanstalk.EnvironmentSettingArgs]:
    """
    Build the option settings for the Beanstalk environment.

    Returns:
        Option settings, one per namespace/name pair
    """
    settings = [
        # Networking
        Setting(namespace="aws:ec2:vpc", name="VPCId", value=vpc_id),
        Setting(namespace="aws:ec2:vpc", name="Subnets", value=join_ids(private_subnet_ids)),
        Setting(namespace="aws:ec2:vpc", name="ELBSubnets", value=join_ids(public_subnet_ids)),
        Setting(namespace="aws:ec2:vpc", name="AssociatePublicIpAddress", value="false"),
        Setting(namespace="aws:ec2:vpc", name="ELBScheme", value="public"),

        # Instances
        Setting(namespace="aws:autoscaling:launchconfiguration", name="InstanceType", value=instance_type),
        Setting(namespace="aws:autoscaling:launchconfiguration", name="EC2KeyName", value=key_name),
        Setting(namespace="aws:autoscaling:launchconfiguration", name="SecurityGroups", value=app_security_group_id),
        Setting(namespace="aws:autoscaling:launchconfiguration", name="IamInstanceProfile", value=instance_profile_name),
        Setting(namespace="aws:autoscaling:launchconfiguration", name="DisableIMDSv1", value="true"),

        # Scaling
        Setting(namespace="aws:autoscaling:asg", name="Availability Zones", value=f"Any {min(len(private_subnet_ids), 3)}"),
        Setting(namespace="aws:autoscaling:asg", name="MinSize", value=str(min_size)),
        Setting(namespace="aws:autoscaling:asg", name="MaxSize", value=str(max_size)),

        # Load balancer
        Setting(namespace="aws:elasticbeanstalk:environment", name="EnvironmentType", value="LoadBalanced"),
        Setting(namespace="aws:elasticbeanstalk:environment", name="LoadBalancerType", value="application"),
        Setting(namespace="aws:elasticbeanstalk:environment", name="ServiceRole", value=service_role_arn),
        Setting(namespace="aws:elbv2:loadbalancer", name="SecurityGroups", value=elb_security_group_id),
        Setting(namespace="aws:elbv2:loadbalancer", name="ManagedSecurityGroup", value=elb_security_group_id),
        Setting(namespace="aws:elasticbeanstalk:environment:process:default", name="StickinessEnabled", value="true"),

        # Health and deployments
        Setting(namespace="aws:elasticbeanstalk:healthreporting:system", name="SystemType", value="enhanced"),
        Setting(namespace="aws:elasticbeanstalk:command", name="DeploymentPolicy", value="Rolling"),
        Setting(namespace="aws:elasticbeanstalk:command", name="BatchSizeType", value="Fixed"),
        Setting(namespace="aws:elasticbeanstalk:command", name="BatchSize", value="1"),
        Setting(namespace="aws:autoscaling:updatepolicy:rollingupdate", name="RollingUpdateEnabled", value="true"),
        Setting(namespace="aws:autoscaling:updatepolicy:rollingupdate", name="RollingUpdateType", value="Health"),
        Setting(namespace="aws:autoscaling:updatepolicy:rollingupdate", name="MaxBatchSize", value="1"),
    ]

    for key, value in (environment_properties or {}).items():
        settings.append(Setting(
            namespace="aws:elasticbeanstalk:application:environment",
            name=key,
            value=value,
        ))

    return settings


@dataclass
class BeanstalkOutputs:
    """Output values from Beanstalk component."""
    application_name: pulumi.Output[str]
    environment_name: pulumi.Output[str]
    endpoint_url: pulumi.Output[str]
    cname: pulumi.Output[str]


class BeanstalkComponent(pulumi.ComponentResource):
    """
    Elastic Beanstalk application and its load-balanced environment.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        solution_stack_name: str,
        settings: list[aws.elasticbeanstalk.EnvironmentSettingArgs],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:Beanstalk", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.application = aws.elasticbeanstalk.Application(
            f"{name}-app",
            name=name,
            description=f"Application tier ({environment})",
            tags=create_tags(environment, f"{name}-app"),
            opts=child_opts,
        )

        self.environment = aws.elasticbeanstalk.Environment(
            f"{name}-env",
            name=f"{name}-env",
            application=self.application.name,
            solution_stack_name=solution_stack_name,
            tier="WebServer",
            settings=settings,
            tags=create_tags(environment, f"{name}-env", Tier="app"),
            opts=child_opts,
        )

        self.register_outputs({
            "application_name": self.application.name,
            "environment_name": self.environment.name,
            "endpoint_url": self.environment.endpoint_url,
            "cname": self.environment.cname,
        })

    def get_outputs(self) -> BeanstalkOutputs:
        """Get Beanstalk output values."""
        return BeanstalkOutputs(
            application_name=self.application.name,
            environment_name=self.environment.name,
            endpoint_url=self.environment.endpoint_url,
            cname=self.environment.cname,
        )
