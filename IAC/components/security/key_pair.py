"""
EC2 key pair registered from an operator's public key.

The private half never leaves the operator's machine; it is used to SSH into
the bastion and, through it, into Beanstalk instances.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.utils.tags import create_tags


@dataclass
class KeyPairOutputs:
    """Output values from key pair component."""
    key_name: pulumi.Output[str]
    fingerprint: pulumi.Output[str]


class KeyPairComponent(pulumi.ComponentResource):
    """EC2 key pair shared by the bastion host and the application tier."""

    def __init__(
        self,
        name: str,
        environment: str,
        public_key: pulumi.Input[str],
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:security:KeyPair", name, None, opts)

        self.key_pair = aws.ec2.KeyPair(
            f"{name}-key",
            key_name=f"{name}-key",
            public_key=public_key,
            tags=create_tags(environment, f"{name}-key"),
            opts=pulumi.ResourceOptions(parent=self),
        )

        self.register_outputs({
            "key_name": self.key_pair.key_name,
            "fingerprint": self.key_pair.fingerprint,
        })

    def get_outputs(self) -> KeyPairOutputs:
        """Get key pair output values."""
        return KeyPairOutputs(
            key_name=self.key_pair.key_name,
            fingerprint=self.key_pair.fingerprint,
        )
