"""
Supporting services: digests and settings.
"""
