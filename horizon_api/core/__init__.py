"""
Core building blocks: address/amount codecs, message signing and rate limiting.
"""
