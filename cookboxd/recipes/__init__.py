"""
Recipes: listing, search, pagination and owner-guarded edits.
"""
