"""
Ingredients: per-recipe name/quantity rows with transactional batch writes.
"""
