"""
AWS application stack architecture diagram.

Draws the VPC layout, the Beanstalk tier, the data services behind the
backend security group, the bastion path and the remote state bucket.

Dependencies:
    pip install diagrams   (plus the Graphviz `dot` binary)

Usage:
    python -m IAC.architecture_diagram
    # Outputs: appstack_architecture.png
"""

from diagrams import Cluster, Diagram, Edge
from diagrams.aws.compute import EC2, ElasticBeanstalk
from diagrams.aws.database import ElastiCache, RDS
from diagrams.aws.general import Users
from diagrams.aws.integration import MQ
from diagrams.aws.network import ALB, InternetGateway, NATGateway
from diagrams.aws.storage import S3

from IAC.configs.constants import (
    PORTS,
    PRIVATE_SUBNET_CIDRS,
    PUBLIC_SUBNET_CIDRS,
    VPC_CIDR,
)

GRAPH_ATTR = {
    "fontsize": "14",
    "bgcolor": "white",
    "pad": "0.5",
    "splines": "ortho",
    "nodesep": "0.8",
    "ranksep": "1.2",
}

NODE_ATTR = {
    "fontsize": "11",
}

EDGE_ATTR = {
    "fontsize": "9",
}


def render_architecture_diagram(filename: str = "appstack_architecture") -> str:
    """
    Render the architecture diagram to ``<filename>.png``.

    Args:
        filename: Output path without extension

    Returns:
        Path of the written image
    """
    with Diagram(
        "Application Stack\n(Elastic Beanstalk, RDS, ElastiCache, Amazon MQ)",
        filename=filename,
        show=False,
        direction="LR",
        graph_attr=GRAPH_ATTR,
        node_attr=NODE_ATTR,
        edge_attr=EDGE_ATTR,
    ):
        users = Users("Users")
        operator = Users("Operator\n(my_ip)")
        state = S3("Remote State\nversioned, AES-256")

        with Cluster(f"VPC {VPC_CIDR}"):
            igw = InternetGateway("Internet Gateway")

            with Cluster("Public Subnets\n" + ", ".join(PUBLIC_SUBNET_CIDRS)):
                alb = ALB("Beanstalk ALB\nelb-sg: 80/443")
                bastion = EC2("Bastion\nbastion-sg: 22")
                nat = NATGateway("NAT Gateway")

            with Cluster("Private Subnets\n" + ", ".join(PRIVATE_SUBNET_CIDRS)):
                app = ElasticBeanstalk("Beanstalk Instances\napp-sg\nAuto Scaling")

                with Cluster("backend-sg"):
                    mysql = RDS(f"RDS MySQL\n:{PORTS['mysql']}")
                    memcached = ElastiCache(f"Memcached\n:{PORTS['memcached']}")
                    broker = MQ("Amazon MQ")

        users >> Edge(label="HTTP/HTTPS", color="orange", style="bold") >> igw >> alb
        alb >> Edge(label="HTTP", color="orange") >> app

        app >> Edge(label="MySQL", color="darkblue", style="dashed") >> mysql
        app >> Edge(label="Memcached", color="darkblue", style="dashed") >> memcached
        app >> Edge(label="Messaging", color="darkblue", style="dashed") >> broker
        app >> Edge(label="Outbound", color="gray", style="dotted") >> nat

        operator >> Edge(label="SSH", color="black", style="dashed") >> bastion
        bastion >> Edge(label="SSH", color="black", style="dashed") >> app
        bastion >> Edge(label="Schema load", color="darkgreen", style="dashed") >> mysql

        operator >> Edge(label="pulumi login", color="gray", style="dotted") >> state

    return f"{filename}.png"


if __name__ == "__main__":
    print(f"Diagram generated: {render_architecture_diagram()}")
