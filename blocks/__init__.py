"""
Block catalogue: which AWS operations are exposed and how they are described.
"""
