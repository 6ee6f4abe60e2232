"""
Pulumi component resources for the application stack.

Each submodule provides reusable ComponentResource classes:
- networking: VPC, subnets, NAT gateway, security groups
- security: Beanstalk IAM roles, EC2 key pair
- storage: RDS MySQL, ElastiCache Memcached, remote state bucket
- messaging: Amazon MQ broker
- compute: Elastic Beanstalk, bastion host
"""
