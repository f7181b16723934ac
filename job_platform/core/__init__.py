"""
Core - configuration, logging, errors and authentication.
"""
