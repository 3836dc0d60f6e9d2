"""
Utilities: config file parsing and date arithmetic.
"""
