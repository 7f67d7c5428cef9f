"""
Collaborators that act on the collected command list.
"""
