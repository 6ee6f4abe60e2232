"""
Security Groups Component for Network Access Control.

Architectural Steps & Flow:
1. Create "Shell" Security Groups:
   - We first create the SG objects (ELB, Bastion, App, Backend) without rules
     so they can reference each other by ID.

2. Define Rules (Micro-Segmentation):
   - Ingress: defined by referencing source SGs (identity-based) wherever the
     caller is inside the VPC; CIDRs only for internet-facing entry points.
   - Egress: open, so instances can reach NAT, package mirrors and AWS APIs.

3. Specific Access Patterns:
   - ELB: Accepts HTTP/HTTPS from anywhere.
   - Bastion: Accepts SSH only from the operator's address (my_ip).
   - App (Beanstalk instances): Accepts HTTP from the ELB and SSH from the bastion.
   - Backend (RDS, ElastiCache, MQ): Accepts everything from App instances,
     everything from itself, and MySQL from the bastion for schema loading.

4. Stateful Nature:
   - Security Groups are stateful. Allowing an inbound request automatically
     allows the reply.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.configs.constants import PORTS
from IAC.utils.tags import create_tags

OPEN_CIDR = "0.0.0.0/0"


@dataclass
class SecurityGroupOutputs:
    """Output values from security groups component."""
    elb_sg_id: pulumi.Output[str]
    bastion_sg_id: pulumi.Output[str]
    app_sg_id: pulumi.Output[str]
    backend_sg_id: pulumi.Output[str]


class SecurityGroupsComponent(pulumi.ComponentResource):
    """
    Security groups component for network access control.

    Implements least-privilege security group rules:
    - ELB is the only internet-facing HTTP entry point
    - Bastion is the only SSH entry point, restricted to one operator CIDR
    - Backend services accept traffic only from the application tier
    """

    def __init__(
        self,
        name: str,
        environment: str,
        vpc_id: pulumi.Input[str],
        ssh_cidr: str,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:networking:SecurityGroups", name, None, opts)
        self.environment = environment

        child_opts = pulumi.ResourceOptions(parent=self)

        if ssh_cidr == OPEN_CIDR:
            pulumi.log.warn(
                "Bastion SSH ingress is open to 0.0.0.0/0; set my_ip to your address",
                resource=self,
            )

        # Beanstalk load balancer security group
        self.elb_sg = aws.ec2.SecurityGroup(
            f"{name}-elb-sg",
            description="Security group for the Beanstalk load balancer",
            vpc_id=vpc_id,
            tags=create_tags(environment, f"{name}-elb-sg"),
            opts=child_opts,
        )

        # Bastion host security group
        self.bastion_sg = aws.ec2.SecurityGroup(
            f"{name}-bastion-sg",
            description="Security group for the bastion host",
            vpc_id=vpc_id,
            tags=create_tags(environment, f"{name}-bastion-sg"),
            opts=child_opts,
        )

        # Beanstalk instances security group
        self.app_sg = aws.ec2.SecurityGroup(
            f"{name}-app-sg",
            description="Security group for Beanstalk application instances",
            vpc_id=vpc_id,
            tags=create_tags(environment, f"{name}-app-sg"),
            opts=child_opts,
        )

        # RDS, ElastiCache and Amazon MQ security group
        self.backend_sg = aws.ec2.SecurityGroup(
            f"{name}-backend-sg",
            description="Security group for RDS, ElastiCache and Amazon MQ",
            vpc_id=vpc_id,
            tags=create_tags(environment, f"{name}-backend-sg"),
            opts=child_opts,
        )

        self._create_rules(name, ssh_cidr, child_opts)

        self.register_outputs({
            "elb_sg_id": self.elb_sg.id,
            "bastion_sg_id": self.bastion_sg.id,
            "app_sg_id": self.app_sg.id,
            "backend_sg_id": self.backend_sg.id,
        })

    def _create_rules(
        self,
        name: str,
        ssh_cidr: str,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create security group rules."""
        # ELB: HTTP and HTTPS from the internet
        for port_name in ("http", "https"):
            aws.vpc.SecurityGroupIngressRule(
                f"{name}-elb-ingress-{port_name}",
                security_group_id=self.elb_sg.id,
                ip_protocol="tcp",
                from_port=PORTS[port_name],
                to_port=PORTS[port_name],
                cidr_ipv4=OPEN_CIDR,
                description=f"{port_name.upper()} from internet",
                opts=opts,
            )

        # Bastion: SSH from operator only
        aws.vpc.SecurityGroupIngressRule(
            f"{name}-bastion-ingress-ssh",
            security_group_id=self.bastion_sg.id,
            ip_protocol="tcp",
            from_port=PORTS["ssh"],
            to_port=PORTS["ssh"],
            cidr_ipv4=ssh_cidr,
            description="SSH from operator",
            opts=opts,
        )

        # App: HTTP from ELB
        aws.vpc.SecurityGroupIngressRule(
            f"{name}-app-ingress-http",
            security_group_id=self.app_sg.id,
            ip_protocol="tcp",
            from_port=PORTS["http"],
            to_port=PORTS["http"],
            referenced_security_group_id=self.elb_sg.id,
            description="HTTP from load balancer",
            opts=opts,
        )

        # App: SSH from bastion
        aws.vpc.SecurityGroupIngressRule(
            f"{name}-app-ingress-ssh",
            security_group_id=self.app_sg.id,
            ip_protocol="tcp",
            from_port=PORTS["ssh"],
            to_port=PORTS["ssh"],
            referenced_security_group_id=self.bastion_sg.id,
            description="SSH from bastion",
            opts=opts,
        )

        # Backend: all traffic from app instances
        aws.vpc.SecurityGroupIngressRule(
            f"{name}-backend-ingress-app",
            security_group_id=self.backend_sg.id,
            ip_protocol="-1",
            referenced_security_group_id=self.app_sg.id,
            description="All traffic from application instances",
            opts=opts,
        )

        # Backend: members talk to each other (self-reference)
        aws.vpc.SecurityGroupIngressRule(
            f"{name}-backend-ingress-self",
            security_group_id=self.backend_sg.id,
            ip_protocol="-1",
            referenced_security_group_id=self.backend_sg.id,
            description="All traffic between backend services",
            opts=opts,
        )

        # Backend: MySQL from bastion (schema initialisation)
        aws.vpc.SecurityGroupIngressRule(
            f"{name}-backend-ingress-bastion-mysql",
            security_group_id=self.backend_sg.id,
            ip_protocol="tcp",
            from_port=PORTS["mysql"],
            to_port=PORTS["mysql"],
            referenced_security_group_id=self.bastion_sg.id,
            description="MySQL from bastion",
            opts=opts,
        )

        # All groups: allow all outbound
        for group_name, group in [
            ("elb", self.elb_sg),
            ("bastion", self.bastion_sg),
            ("app", self.app_sg),
            ("backend", self.backend_sg),
        ]:
            aws.vpc.SecurityGroupEgressRule(
                f"{name}-{group_name}-egress-all",
                security_group_id=group.id,
                ip_protocol="-1",
                cidr_ipv4=OPEN_CIDR,
                description="All outbound traffic",
                opts=opts,
            )

    def get_outputs(self) -> SecurityGroupOutputs:
        """Get security group output values."""
        return SecurityGroupOutputs(
            elb_sg_id=self.elb_sg.id,
            bastion_sg_id=self.bastion_sg.id,
            app_sg_id=self.app_sg.id,
            backend_sg_id=self.backend_sg.id,
        )
