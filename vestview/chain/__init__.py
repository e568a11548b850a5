"""
Chain access module.

Address validation, the node connection client and the relay chain block
height cache.
"""
