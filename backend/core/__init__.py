"""
Shared building blocks for the backend apps: the API exception taxonomy,
the DRF exception handler, request logging and the service base class.
"""
