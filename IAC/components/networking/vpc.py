"""
VPC Component Resource for Network Infrastructure.

Steps & Architecture:
1. VPC (172.21.0.0/16): The isolated network container. DNS hostnames on so
   RDS, ElastiCache and MQ endpoints resolve inside the VPC.
2. Internet Gateway (IGW): The "door" to the internet for public subnets.
3. Subnets (one public + one private per availability zone):
   - Public: Load balancer, bastion host, NAT gateway. Public IP on launch.
   - Private: Beanstalk instances, RDS, ElastiCache, Amazon MQ.
4. NAT Gateway: A single NAT in the first public subnet with an Elastic IP.
   Private instances reach package mirrors and AWS APIs through it; nothing
   on the internet can open a connection back in.
5. Route Tables:
   - Public RT: 0.0.0.0/0 -> IGW, associated with every public subnet.
   - Private RT: 0.0.0.0/0 -> NAT, associated with every private subnet.
   - Both keep the implicit "local" route for traffic inside the VPC.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.utils.tags import create_tags


@dataclass
class VpcOutputs:
    """Output values from VPC component."""
    vpc_id: pulumi.Output[str]
    public_subnet_ids: list[pulumi.Output[str]]
    private_subnet_ids: list[pulumi.Output[str]]
    nat_gateway_id: pulumi.Output[str]
    public_route_table_id: pulumi.Output[str]
    private_route_table_id: pulumi.Output[str]


class VpcComponent(pulumi.ComponentResource):
    """
    VPC component with public/private subnets and a single NAT gateway.

    Subnets are created pairwise per availability zone, in the order the
    zones are given.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        vpc_cidr: str,
        availability_zones: list[str],
        public_subnet_cidrs: list[str],
        private_subnet_cidrs: list[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:networking:Vpc", name, None, opts)
        self.environment = environment

        child_opts = pulumi.ResourceOptions(parent=self)

        self.vpc = aws.ec2.Vpc(
            f"{name}-vpc",
            cidr_block=vpc_cidr,
            enable_dns_hostnames=True,
            enable_dns_support=True,
            tags=create_tags(environment, f"{name}-vpc"),
            opts=child_opts,
        )

        self.igw = aws.ec2.InternetGateway(
            f"{name}-igw",
            vpc_id=self.vpc.id,
            tags=create_tags(environment, f"{name}-igw"),
            opts=child_opts,
        )

        self.public_subnets: list[aws.ec2.Subnet] = []
        self.private_subnets: list[aws.ec2.Subnet] = []

        for index, (zone, public_cidr, private_cidr) in enumerate(
            zip(availability_zones, public_subnet_cidrs, private_subnet_cidrs),
            start=1,
        ):
            self.public_subnets.append(aws.ec2.Subnet(
                f"{name}-public-subnet-{index}",
                vpc_id=self.vpc.id,
                cidr_block=public_cidr,
                availability_zone=zone,
                map_public_ip_on_launch=True,
                tags=create_tags(environment, f"{name}-public-subnet-{index}", Tier="public"),
                opts=child_opts,
            ))
            self.private_subnets.append(aws.ec2.Subnet(
                f"{name}-private-subnet-{index}",
                vpc_id=self.vpc.id,
                cidr_block=private_cidr,
                availability_zone=zone,
                tags=create_tags(environment, f"{name}-private-subnet-{index}", Tier="private"),
                opts=child_opts,
            ))

        # Single NAT gateway shared by all private subnets
        self.nat_eip = aws.ec2.Eip(
            f"{name}-nat-eip",
            domain="vpc",
            tags=create_tags(environment, f"{name}-nat-eip"),
            opts=pulumi.ResourceOptions(parent=self, depends_on=[self.igw]),
        )

        self.nat_gateway = aws.ec2.NatGateway(
            f"{name}-nat",
            allocation_id=self.nat_eip.id,
            subnet_id=self.public_subnets[0].id,
            tags=create_tags(environment, f"{name}-nat"),
            opts=pulumi.ResourceOptions(parent=self, depends_on=[self.igw]),
        )

        self._create_route_tables(name, child_opts)

        self.register_outputs({
            "vpc_id": self.vpc.id,
            "public_subnet_ids": [subnet.id for subnet in self.public_subnets],
            "private_subnet_ids": [subnet.id for subnet in self.private_subnets],
            "nat_gateway_id": self.nat_gateway.id,
            "public_route_table_id": self.public_rt.id,
            "private_route_table_id": self.private_rt.id,
        })

    def _create_route_tables(
        self,
        name: str,
        opts: pulumi.ResourceOptions,
    ) -> None:
        """Create route tables for public and private subnets."""
        self.public_rt = aws.ec2.RouteTable(
            f"{name}-public-rt",
            vpc_id=self.vpc.id,
            routes=[
                aws.ec2.RouteTableRouteArgs(
                    cidr_block="0.0.0.0/0",
                    gateway_id=self.igw.id,
                ),
            ],
            tags=create_tags(self.environment, f"{name}-public-rt"),
            opts=opts,
        )

        self.private_rt = aws.ec2.RouteTable(
            f"{name}-private-rt",
            vpc_id=self.vpc.id,
            routes=[
                aws.ec2.RouteTableRouteArgs(
                    cidr_block="0.0.0.0/0",
                    nat_gateway_id=self.nat_gateway.id,
                ),
            ],
            tags=create_tags(self.environment, f"{name}-private-rt"),
            opts=opts,
        )

        for index, subnet in enumerate(self.public_subnets, start=1):
            aws.ec2.RouteTableAssociation(
                f"{name}-public-rt-assoc-{index}",
                subnet_id=subnet.id,
                route_table_id=self.public_rt.id,
                opts=opts,
            )

        for index, subnet in enumerate(self.private_subnets, start=1):
            aws.ec2.RouteTableAssociation(
                f"{name}-private-rt-assoc-{index}",
                subnet_id=subnet.id,
                route_table_id=self.private_rt.id,
                opts=opts,
            )

    def get_outputs(self) -> VpcOutputs:
        """Get VPC output values."""
        return VpcOutputs(
            vpc_id=self.vpc.id,
            public_subnet_ids=[subnet.id for subnet in self.public_subnets],
            private_subnet_ids=[subnet.id for subnet in self.private_subnets],
            nat_gateway_id=self.nat_gateway.id,
            public_route_table_id=self.public_rt.id,
            private_route_table_id=self.private_rt.id,
        )
