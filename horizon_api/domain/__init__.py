"""
Domain layer - error taxonomy and pagination rules.

Independent of any infrastructure or framework concerns.
"""
