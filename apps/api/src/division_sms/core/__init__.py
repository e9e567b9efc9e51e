"""
Core module - settings, database and Redis connections, security, auth
dependencies, logging, rate limiting and email.
"""
