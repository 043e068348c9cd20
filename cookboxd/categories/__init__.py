"""
Recipe categories.
"""
