"""
Schools module - DepEd division schools.
"""
