"""
CLI commands for company-map.
"""
