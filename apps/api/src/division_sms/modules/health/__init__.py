"""
Health module - Learner height, weight and nutritional status (SF8).
"""
