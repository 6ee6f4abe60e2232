"""
Bastion Host Component for administrative access.

The bastion is the only machine reachable over SSH from outside the VPC, and
only from the operator's address. From it, operators hop to Beanstalk
instances in the private subnets.

It also does one job at first boot: load the initial schema into RDS.
1. User Data: rendered with the RDS address, port, database and credentials.
2. The script installs the MySQL client, waits until the database answers,
   then (if a schema repo is configured) clones it and imports the SQL dump.
3. Because user data embeds the DB password, it is kept as a Pulumi secret.
4. The instance is declared with depends_on=[RDS instance] so it never
   boots before the database exists.

IMDSv2 (http_tokens="required") is enforced, as on every EC2 instance here.
"""

import shlex
from dataclasses import dataclass
from string import Template

import pulumi
import pulumi_aws as aws

from IAC.configs.constants import BASTION_AMI_NAME_PATTERN, BASTION_AMI_OWNER
from IAC.utils.tags import create_tags

_DB_INIT_TEMPLATE = Template("""#!/bin/bash
set -euo pipefail
export DEBIAN_FRONTEND=noninteractive

apt-get update -y
apt-get install -y mysql-client git

DB_HOST=$db_host
DB_PORT=$db_port
DB_NAME=$db_name
DB_USER=$db_user
export MYSQL_PWD=$db_password

# Wait for RDS to accept connections (up to 10 minutes)
for attempt in $$(seq 1 60); do
  if mysqladmin ping -h "$$DB_HOST" -P "$$DB_PORT" -u "$$DB_USER" --silent; then
    break
  fi
  echo "Waiting for database ($$attempt/60)"
  sleep 10
done
$schema_block
unset MYSQL_PWD
echo "Bootstrap complete"
""")

_SCHEMA_TEMPLATE = Template("""
SCHEMA_DIR=$$(mktemp -d)
git clone --depth 1 $repo "$$SCHEMA_DIR"
mysql -h "$$DB_HOST" -P "$$DB_PORT" -u "$$DB_USER" "$$DB_NAME" < "$$SCHEMA_DIR"/$path
rm -rf "$$SCHEMA_DIR"
""")


def render_db_init_script(
    db_host: str,
    db_port: int,
    db_name: str,
    db_user: str,
    db_password: str,
    schema_repo: str | None = None,
    schema_path: str | None = None,
) -> str:
    """
    Render the bastion's first-boot script.

    All values are shell-quoted. The schema import is only included when
    both schema_repo and schema_path are given.

    Returns:
        Bash script for EC2 user data
    """
    schema_block = ""
    if schema_repo and schema_path:
        schema_block = _SCHEMA_TEMPLATE.substitute(
            repo=shlex.quote(schema_repo),
            path=shlex.quote(schema_path.lstrip("/")),
        )

    return _DB_INIT_TEMPLATE.substitute(
        db_host=shlex.quote(db_host),
        db_port=int(db_port),
        db_name=shlex.quote(db_name),
        db_user=shlex.quote(db_user),
        db_password=shlex.quote(db_password),
        schema_block=schema_block,
    )


def lookup_bastion_ami() -> str:
    """Most recent Canonical Ubuntu 22.04 AMI in the current region."""
    ami = aws.ec2.get_ami(
        most_recent=True,
        owners=[BASTION_AMI_OWNER],
        filters=[
            aws.ec2.GetAmiFilterArgs(
                name="name",
                values=[BASTION_AMI_NAME_PATTERN],
            ),
            aws.ec2.GetAmiFilterArgs(
                name="virtualization-type",
                values=["hvm"],
            ),
        ],
    )
    return ami.id


@dataclass
class BastionOutputs:
    """Output values from bastion component."""
    instance_id: pulumi.Output[str]
    public_ip: pulumi.Output[str]
    public_dns: pulumi.Output[str]


class BastionComponent(pulumi.ComponentResource):
    """
    Bastion EC2 instance in the first public subnet.
    """

    def __init__(
        self,
        name: str,
        environment: str,
        instance_type: str,
        subnet_id: pulumi.Input[str],
        security_group_id: pulumi.Input[str],
        key_name: pulumi.Input[str],
        db_address: pulumi.Input[str],
        db_port: pulumi.Input[int],
        db_name: str,
        db_username: str,
        db_password: pulumi.Input[str],
        ami_id: str | None = None,
        schema_repo: str | None = None,
        schema_path: str | None = None,
        depends_on: list[pulumi.Resource] | None = None,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:compute:Bastion", name, None, opts)

        if ami_id is None:
            ami_id = lookup_bastion_ami()
            pulumi.log.info(f"Bastion AMI resolved to {ami_id}", resource=self)

        if not schema_repo:
            pulumi.log.info("No db_schema_repo set; bastion will only wait for the database", resource=self)

        user_data = pulumi.Output.secret(
            pulumi.Output.all(db_address, db_port, db_password).apply(
                lambda args: render_db_init_script(
                    db_host=args[0],
                    db_port=args[1],
                    db_name=db_name,
                    db_user=db_username,
                    db_password=args[2],
                    schema_repo=schema_repo,
                    schema_path=schema_path,
                )
            )
        )

        self.instance = aws.ec2.Instance(
            f"{name}-bastion",
            ami=ami_id,
            instance_type=instance_type,
            subnet_id=subnet_id,
            vpc_security_group_ids=[security_group_id],
            key_name=key_name,
            associate_public_ip_address=True,
            user_data=user_data,
            root_block_device=aws.ec2.InstanceRootBlockDeviceArgs(
                volume_size=8,
                volume_type="gp3",
                encrypted=True,
            ),
            metadata_options=aws.ec2.InstanceMetadataOptionsArgs(
                http_tokens="required",  # IMDSv2
                http_endpoint="enabled",
            ),
            tags=create_tags(environment, f"{name}-bastion", Role="bastion"),
            opts=pulumi.ResourceOptions(parent=self, depends_on=depends_on or []),
        )

        self.register_outputs({
            "instance_id": self.instance.id,
            "public_ip": self.instance.public_ip,
            "public_dns": self.instance.public_dns,
        })

    def get_outputs(self) -> BastionOutputs:
        """Get bastion output values."""
        return BastionOutputs(
            instance_id=self.instance.id,
            public_ip=self.instance.public_ip,
            public_dns=self.instance.public_dns,
        )
