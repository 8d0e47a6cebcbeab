"""
Domain layer: pure records with no persistence or transport concerns.
"""
