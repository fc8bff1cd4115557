"""
Command line interface for company-map.
"""
