"""
Grades module - Quarterly grades per section and subject.
"""
