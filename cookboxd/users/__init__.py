"""
User accounts: listing, admin management and password changes.
"""
