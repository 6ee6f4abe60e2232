"""
Tests for stack configuration validation and loading.

Validates:
1. Network layout checks (CIDRs, zones, overlaps)
2. Sizing and naming checks
3. get_config() reading Pulumi stack config
"""

from unittest.mock import MagicMock, patch

import pytest

from IAC.configs.base import ConfigValidationError, validate_config


class TestValidateConfig:
    """Tests for validate_config."""

    def test_defaults_are_valid(self, make_config):
        """The default layout should pass validation unchanged."""
        config = make_config()
        assert validate_config(config) is config

    def test_unknown_environment_rejected(self, make_config):
        with pytest.raises(ConfigValidationError, match="environment"):
            validate_config(make_config(environment="qa"))

    def test_invalid_vpc_cidr_rejected(self, make_config):
        with pytest.raises(ConfigValidationError, match="vpc_cidr"):
            validate_config(make_config(vpc_cidr="172.21.0.0/33"))

    def test_host_bits_in_subnet_rejected(self, make_config):
        """Subnet CIDRs must be network addresses."""
        with pytest.raises(ConfigValidationError, match="invalid CIDR"):
            validate_config(make_config(
                public_subnet_cidrs=["172.21.1.5/24", "172.21.2.0/24", "172.21.3.0/24"],
            ))

    def test_subnet_outside_vpc_rejected(self, make_config):
        with pytest.raises(ConfigValidationError, match="outside VPC"):
            validate_config(make_config(
                private_subnet_cidrs=["172.21.4.0/24", "172.21.5.0/24", "10.0.6.0/24"],
            ))

    def test_overlapping_subnets_rejected(self, make_config):
        with pytest.raises(ConfigValidationError, match="overlap"):
            validate_config(make_config(
                private_subnet_cidrs=["172.21.1.0/24", "172.21.5.0/24", "172.21.6.0/24"],
            ))

    def test_subnet_count_must_match_zones(self, make_config):
        with pytest.raises(ConfigValidationError, match="one entry per zone"):
            validate_config(make_config(
                public_subnet_cidrs=["172.21.1.0/24", "172.21.2.0/24"],
            ))

    def test_single_zone_rejected(self, make_config):
        """RDS subnet groups need at least two zones."""
        with pytest.raises(ConfigValidationError, match="two availability zones"):
            validate_config(make_config(
                availability_zones=["us-east-2a"],
                public_subnet_cidrs=["172.21.1.0/24"],
                private_subnet_cidrs=["172.21.4.0/24"],
            ))

    def test_duplicate_zones_rejected(self, make_config):
        with pytest.raises(ConfigValidationError, match="distinct"):
            validate_config(make_config(
                availability_zones=["us-east-2a", "us-east-2a", "us-east-2c"],
            ))

    def test_two_zone_layout_is_valid(self, make_config):
        config = make_config(
            availability_zones=["us-east-2a", "us-east-2b"],
            public_subnet_cidrs=["172.21.1.0/24", "172.21.2.0/24"],
            private_subnet_cidrs=["172.21.4.0/24", "172.21.5.0/24"],
        )
        assert validate_config(config) is config

    def test_bad_operator_address_rejected(self, make_config):
        with pytest.raises(ConfigValidationError, match="my_ip"):
            validate_config(make_config(my_ip="my-laptop"))

    def test_min_size_above_max_rejected(self, make_config):
        with pytest.raises(ConfigValidationError, match="exceeds"):
            validate_config(make_config(beanstalk_min_size=5, beanstalk_max_size=2))

    def test_zero_min_size_rejected(self, make_config):
        with pytest.raises(ConfigValidationError, match="at least 1"):
            validate_config(make_config(beanstalk_min_size=0))

    @pytest.mark.parametrize("username", ["a", "user:name", "user,name", "user=name"])
    def test_invalid_mq_username_rejected(self, make_config, username):
        with pytest.raises(ConfigValidationError, match="mq_username"):
            validate_config(make_config(mq_username=username))

    def test_schema_repo_requires_path(self, make_config):
        with pytest.raises(ConfigValidationError, match="set together"):
            validate_config(make_config(db_schema_repo="https://github.com/example/app.git"))

    def test_zero_cache_nodes_rejected(self, make_config):
        with pytest.raises(ConfigValidationError, match="cache_num_nodes"):
            validate_config(make_config(cache_num_nodes=0))

    def test_small_allocated_storage_rejected(self, make_config):
        with pytest.raises(ConfigValidationError, match="db_allocated_storage"):
            validate_config(make_config(db_allocated_storage=0))

    def test_multi_az_broker_on_t3_host_rejected(self, make_config):
        """Amazon MQ only runs single-instance brokers on t3 hosts."""
        with pytest.raises(ConfigValidationError, match="mq_multi_az"):
            validate_config(make_config(mq_multi_az=True, mq_instance_type="mq.t3.micro"))

    def test_multi_az_broker_on_m5_host_is_valid(self, make_config):
        config = make_config(mq_multi_az=True, mq_instance_type="mq.m5.large")
        assert validate_config(config) is config

    def test_zones_outside_region_rejected(self, make_config):
        with pytest.raises(ConfigValidationError, match="not in region eu-west-1"):
            validate_config(make_config(), region="eu-west-1")

    def test_zones_in_region_accepted(self, make_config):
        config = make_config()
        assert validate_config(config, region="us-east-2") is config


class TestGetConfig:
    """Tests for get_config reading Pulumi stack config."""

    @staticmethod
    def _fake_config(values, secrets):
        fake = MagicMock()
        fake.get.side_effect = lambda key: values.get(key)
        fake.get_int.side_effect = lambda key: values.get(key)
        fake.get_bool.side_effect = lambda key: values.get(key)
        fake.get_object.side_effect = lambda key: values.get(key)
        fake.require.side_effect = lambda key: values[key]
        fake.require_secret.side_effect = lambda key: secrets[key]
        return fake

    def test_defaults_fill_optional_values(self):
        """Only required keys set: constants provide the rest."""
        from IAC.configs import environment
        from IAC.configs.constants import INSTANCE_TYPES, VPC_CIDR

        fake = self._fake_config(
            {
                "environment": "dev",
                "my_ip": "198.51.100.7",
                "public_key": "ssh-ed25519 AAAA operator",
            },
            {"db_password": "db-pass", "mq_password": "mq-pass-123456"},
        )

        with patch.object(environment.pulumi, "Config", return_value=fake):
            config = environment.get_config()

        assert config.environment == "dev"
        assert config.vpc_cidr == VPC_CIDR
        assert len(config.availability_zones) == 3
        assert config.db_instance_class == INSTANCE_TYPES["rds"]
        assert config.mq_engine_type == "ActiveMQ"
        assert config.db_password == "db-pass"
        assert config.bastion_ami is None
        assert config.multi_az is False

    def test_public_key_read_from_path(self, tmp_path):
        """public_key_path should be read when public_key is not set."""
        from IAC.configs import environment

        key_file = tmp_path / "id.pub"
        key_file.write_text("ssh-ed25519 AAAAfromfile operator\n")

        fake = self._fake_config({"public_key_path": str(key_file)}, {})
        assert environment.read_public_key(fake) == "ssh-ed25519 AAAAfromfile operator"

    def test_missing_public_key_file_raises(self, tmp_path):
        from IAC.configs import environment

        fake = self._fake_config({"public_key_path": str(tmp_path / "missing.pub")}, {})
        with pytest.raises(FileNotFoundError):
            environment.read_public_key(fake)

    def test_invalid_values_fail_before_deploy(self):
        """Validation runs inside get_config."""
        from IAC.configs import environment

        fake = self._fake_config(
            {
                "environment": "dev",
                "my_ip": "198.51.100.7",
                "public_key": "ssh-ed25519 AAAA operator",
                "beanstalk_min_size": 9,
                "beanstalk_max_size": 2,
            },
            {"db_password": "db-pass", "mq_password": "mq-pass-123456"},
        )

        with patch.object(environment.pulumi, "Config", return_value=fake):
            with pytest.raises(ConfigValidationError):
                environment.get_config()

    @pytest.mark.parametrize("key", ["cache_num_nodes", "beanstalk_min_size", "db_allocated_storage"])
    def test_explicit_zero_is_not_replaced_by_default(self, key):
        """A 0 in stack config reaches validation instead of the default."""
        from IAC.configs import environment

        fake = self._fake_config(
            {
                "environment": "dev",
                "my_ip": "198.51.100.7",
                "public_key": "ssh-ed25519 AAAA operator",
                key: 0,
            },
            {"db_password": "db-pass", "mq_password": "mq-pass-123456"},
        )

        with patch.object(environment.pulumi, "Config", return_value=fake):
            with pytest.raises(ConfigValidationError, match=key):
                environment.get_config()

    def test_default_zones_follow_stack_region(self):
        from IAC.configs import environment

        fake = self._fake_config(
            {
                "environment": "dev",
                "my_ip": "198.51.100.7",
                "public_key": "ssh-ed25519 AAAA operator",
                "region": "eu-west-1",
            },
            {"db_password": "db-pass", "mq_password": "mq-pass-123456"},
        )

        with patch.object(environment.pulumi, "Config", return_value=fake):
            config = environment.get_config()

        assert config.availability_zones == ["eu-west-1a", "eu-west-1b", "eu-west-1c"]

    def test_configured_zones_must_match_region(self):
        from IAC.configs import environment

        fake = self._fake_config(
            {
                "environment": "dev",
                "my_ip": "198.51.100.7",
                "public_key": "ssh-ed25519 AAAA operator",
                "region": "eu-west-1",
                "availability_zones": ["us-east-2a", "us-east-2b", "us-east-2c"],
            },
            {"db_password": "db-pass", "mq_password": "mq-pass-123456"},
        )

        with patch.object(environment.pulumi, "Config", return_value=fake):
            with pytest.raises(ConfigValidationError, match="not in region"):
                environment.get_config()

    def test_default_zones_without_region(self):
        from IAC.configs import environment
        from IAC.configs.constants import AVAILABILITY_ZONES

        assert environment.default_zones(None) == list(AVAILABILITY_ZONES)
