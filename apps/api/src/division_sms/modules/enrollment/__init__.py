"""
Enrollment module - Enrollment records, GPA thresholds and section eligibility.
"""
