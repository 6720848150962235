"""
Collaborator implementations for the resolver, grouped by cloud.
"""
