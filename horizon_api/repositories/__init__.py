"""
Repository layer - Data access abstractions.
"""
