"""
Resource naming conventions for consistent AWS resource names.

Follows pattern: {project}-{environment}-{resource}
"""

import re
from dataclasses import dataclass


@dataclass
class ResourceNamer:
    """
    Generates consistent resource names for AWS resources.

    Attributes:
        project: Project identifier
        environment: Deployment environment (dev, staging, prod)
    """
    project: str
    environment: str

    def name(self, resource: str) -> str:
        """
        Generate a resource name.

        Args:
            resource: Resource identifier (e.g., 'vpc', 'bastion-sg')

        Returns:
            Formatted resource name; an empty resource yields the stack prefix
        """
        if not resource:
            return f"{self.project}-{self.environment}"
        return f"{self.project}-{self.environment}-{resource}"

    def bucket_name(self, suffix: str) -> str:
        """
        Generate an S3 bucket name (must be globally unique).

        Bucket names only allow lowercase letters, digits, dots and hyphens.

        Args:
            suffix: Bucket suffix (e.g., 'state')

        Returns:
            Lowercase bucket name
        """
        raw = f"{self.project}-{self.environment}-{suffix}".lower()
        return re.sub(r"[^a-z0-9.-]", "-", raw)[:63]

    def identifier(self, resource: str) -> str:
        """
        Generate an identifier for services with short name limits.

        RDS, ElastiCache and Amazon MQ identifiers must start with a letter,
        contain no double hyphens and stay short. ElastiCache caps at 40.

        Args:
            resource: Resource identifier

        Returns:
            Identifier of at most 40 characters
        """
        raw = re.sub(r"-{2,}", "-", self.name(resource).lower())
        return raw[:40].rstrip("-")
