"""
Books module - Textbook inventory and issuances to learners (SF3).
"""
