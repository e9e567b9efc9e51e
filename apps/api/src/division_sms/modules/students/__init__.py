"""
Students module - Learner records (SF1) identified by LRN.
"""
