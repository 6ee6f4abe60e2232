"""Pytest fixtures for infrastructure tests."""

import sys
from pathlib import Path

import pytest


@pytest.fixture(scope="session", autouse=True)
def add_iac_to_path():
    """Add project root to Python path for IAC imports."""
    project_root = Path(__file__).parent.parent.parent
    sys.path.insert(0, str(project_root))
    yield
    # Cleanup
    sys.path.remove(str(project_root))


@pytest.fixture
def iac_project_root():
    """Return the IAC project root directory."""
    return Path(__file__).parent.parent.parent / "IAC"


@pytest.fixture
def python_files_in_iac(iac_project_root):
    """Return all Python files in IAC directory."""
    return [f for f in iac_project_root.rglob("*.py") if "__pycache__" not in str(f)]


@pytest.fixture
def make_config():
    """Factory for StackConfig with valid defaults; keyword overrides win."""
    from IAC.configs.base import StackConfig

    def _make(**overrides):
        values = dict(
            environment="dev",
            my_ip="198.51.100.7",
            public_key="ssh-ed25519 AAAAC3NzaC1lZDI1NTE5AAAAITestKey operator@example",
            vpc_cidr="172.21.0.0/16",
            availability_zones=["us-east-2a", "us-east-2b", "us-east-2c"],
            public_subnet_cidrs=["172.21.1.0/24", "172.21.2.0/24", "172.21.3.0/24"],
            private_subnet_cidrs=["172.21.4.0/24", "172.21.5.0/24", "172.21.6.0/24"],
            db_name="accounts",
            db_username="admin",
            db_password="db-secret-value",
            db_instance_class="db.t3.micro",
            db_engine_version="8.0",
            db_allocated_storage=20,
            multi_az=False,
            cache_node_type="cache.t3.micro",
            cache_num_nodes=1,
            mq_engine_type="ActiveMQ",
            mq_engine_version="5.18",
            mq_instance_type="mq.t3.micro",
            mq_username="appmq",
            mq_password="mq-secret-value-123",
            mq_multi_az=False,
            beanstalk_solution_stack="64bit Amazon Linux 2023 v5.4.1 running Tomcat 10 Corretto 17",
            beanstalk_instance_type="t3.micro",
            beanstalk_min_size=1,
            beanstalk_max_size=8,
            bastion_instance_type="t3.micro",
            bastion_ami=None,
            bastion_username="ubuntu",
            db_schema_repo=None,
            db_schema_path=None,
            enable_deletion_protection=False,
        )
        values.update(overrides)
        return StackConfig(**values)

    return _make
