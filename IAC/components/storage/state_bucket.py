"""
S3 State Bucket Component for the Pulumi remote backend.

Holds stack checkpoints for every environment. The bucket is created once,
from a separate bootstrap stack, before any application stack logs in to it.

Features:
- Versioning: every checkpoint write keeps the previous one, so a bad
  update can be rolled back by restoring an object version.
- Encryption (AES256) and PublicAccessBlock: state contains resource
  attributes and encrypted secrets; it is never public.
- force_destroy off: `pulumi destroy` on the bootstrap stack fails rather
  than deleting state.
"""

from dataclasses import dataclass

import pulumi
import pulumi_aws as aws

from IAC.utils.tags import create_tags


@dataclass
class StateBucketOutputs:
    """Output values from state bucket component."""
    bucket_name: pulumi.Output[str]
    bucket_arn: pulumi.Output[str]


class StateBucketComponent(pulumi.ComponentResource):
    """Versioned, encrypted, private S3 bucket for remote state."""

    def __init__(
        self,
        name: str,
        environment: str,
        bucket_name: str,
        opts: pulumi.ResourceOptions | None = None,
    ) -> None:
        super().__init__("custom:storage:StateBucket", name, None, opts)

        child_opts = pulumi.ResourceOptions(parent=self)

        self.bucket = aws.s3.Bucket(
            f"{name}-state",
            bucket=bucket_name,
            force_destroy=False,
            tags=create_tags(environment, f"{name}-state", Purpose="pulumi-state"),
            opts=pulumi.ResourceOptions(parent=self, protect=True),
        )

        aws.s3.BucketVersioning(
            f"{name}-state-versioning",
            bucket=self.bucket.id,
            versioning_configuration=aws.s3.BucketVersioningVersioningConfigurationArgs(
                status="Enabled",
            ),
            opts=child_opts,
        )

        aws.s3.BucketServerSideEncryptionConfiguration(
            f"{name}-state-encryption",
            bucket=self.bucket.id,
            rules=[aws.s3.BucketServerSideEncryptionConfigurationRuleArgs(
                apply_server_side_encryption_by_default=aws.s3.BucketServerSideEncryptionConfigurationRuleApplyServerSideEncryptionByDefaultArgs(
                    sse_algorithm="AES256",
                ),
            )],
            opts=child_opts,
        )

        aws.s3.BucketPublicAccessBlock(
            f"{name}-state-public-block",
            bucket=self.bucket.id,
            block_public_acls=True,
            block_public_policy=True,
            ignore_public_acls=True,
            restrict_public_buckets=True,
            opts=child_opts,
        )

        self.register_outputs({
            "bucket_name": self.bucket.bucket,
            "bucket_arn": self.bucket.arn,
        })

    def get_outputs(self) -> StateBucketOutputs:
        """Get state bucket output values."""
        return StateBucketOutputs(
            bucket_name=self.bucket.bucket,
            bucket_arn=self.bucket.arn,
        )
