"""
Storage components for data services and remote state.

Components:
- RdsMysqlComponent: RDS MySQL database
- ElastiCacheComponent: ElastiCache Memcached cluster
- StateBucketComponent: S3 bucket for the Pulumi remote backend
"""

from IAC.components.storage.rds_mysql import RdsMysqlComponent, RdsOutputs
from IAC.components.storage.elasticache_memcached import ElastiCacheComponent, CacheOutputs
from IAC.components.storage.state_bucket import StateBucketComponent, StateBucketOutputs

__all__ = [
    "RdsMysqlComponent",
    "RdsOutputs",
    "ElastiCacheComponent",
    "CacheOutputs",
    "StateBucketComponent",
    "StateBucketOutputs",
]
