"""
Command-line client for the habit tracker API.
"""
