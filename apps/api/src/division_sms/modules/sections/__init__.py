"""
Sections module - Sections per grade level and school year, their rosters and subjects.
"""
