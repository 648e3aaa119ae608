"""
Cross-cutting infrastructure: configuration, logging, database access,
request middleware, date conversions and the exception hierarchy.
"""
