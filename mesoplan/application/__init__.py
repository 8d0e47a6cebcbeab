"""
Application layer: collaborator ports and planning errors.
"""
