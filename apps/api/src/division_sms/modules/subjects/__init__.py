"""
Subjects module - Subjects offered per grade level.
"""
