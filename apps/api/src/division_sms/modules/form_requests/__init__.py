"""
Form requests module - Public Form 137 and diploma requests.
"""
