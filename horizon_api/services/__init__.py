"""
Service layer - use cases orchestrating repositories and the signer.
"""
