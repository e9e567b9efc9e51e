"""
Users module - Staff accounts (division admins, school heads, registrars, teachers).
"""
