"""
Pulumi infrastructure-as-code for the application stack.

This package defines AWS infrastructure including:
- VPC with public/private subnets across three zones and a NAT gateway
- Elastic Beanstalk application tier behind an Application Load Balancer
- RDS MySQL, ElastiCache Memcached and Amazon MQ in private subnets
- Bastion host for SSH access and initial schema loading
- S3 bucket for the Pulumi remote state backend
"""
