"""
Remote state backend location.

Pulumi keeps stack state in an S3 bucket addressed by a URL of the form
``s3://<bucket>[/<prefix>]?region=<region>``; operators pass it to
``pulumi login`` or set it as ``backend.url`` in Pulumi.yaml.
"""

import re

_BUCKET_PATTERN = re.compile(r"^[a-z0-9][a-z0-9.-]{1,61}[a-z0-9]$")
_REGION_PATTERN = re.compile(r"^[a-z]{2}(-gov)?-[a-z]+-\d$")


def build_backend_url(bucket: str, region: str, prefix: str | None = None) -> str:
    """
    Build the S3 backend URL for ``pulumi login``.

    Args:
        bucket: State bucket name
        region: Bucket region (e.g. 'us-east-2')
        prefix: Optional key prefix inside the bucket

    Returns:
        Backend URL

    Raises:
        ValueError: If the bucket name or region is malformed
    """
    if not _BUCKET_PATTERN.match(bucket) or ".." in bucket:
        raise ValueError(f"invalid S3 bucket name: {bucket!r}")
    if not _REGION_PATTERN.match(region):
        raise ValueError(f"invalid AWS region: {region!r}")

    path = bucket
    if prefix:
        cleaned = prefix.strip("/")
        if cleaned:
            path = f"{bucket}/{cleaned}"

    return f"s3://{path}?region={region}"
