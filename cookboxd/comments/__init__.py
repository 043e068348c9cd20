"""
Comments: user remarks attached to recipes.
"""
