"""
Read-only .xlsx access: sheet lookup, shared strings and raw row streaming.
"""
