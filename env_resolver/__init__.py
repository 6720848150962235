"""
Environment provider resolver.

Resolves a catalog environment into the ordered list of AWS providers
(account, region, VPC, subnets, cluster and deployment role) that
deployment templates target.
"""

__version__ = "1.0.0"
