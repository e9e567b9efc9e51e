"""
Medical assistance module - Hospitals, assistance requests and guarantee letters.
"""
