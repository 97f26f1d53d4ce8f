"""
Calcdesk: calculation engines for a catalog of calculator widgets.
"""
