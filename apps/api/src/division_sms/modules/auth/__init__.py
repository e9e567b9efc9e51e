"""
Auth module - Staff login, token refresh and password changes.
"""
