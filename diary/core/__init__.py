"""
Core infrastructure: exceptions, paths, logging, validation and CLI helpers.
"""
