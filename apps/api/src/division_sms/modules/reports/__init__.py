"""
Reports module - Division and school dashboard figures.
"""
