"""
Core services shared by the vesting components: configuration, logging,
access control, checked arithmetic and the exception hierarchy.
"""
