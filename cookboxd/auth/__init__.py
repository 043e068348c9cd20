"""
Authentication: password hashing, access tokens, request identity and
role/ownership checks.
"""
