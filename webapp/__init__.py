"""
Flask web API for the habit tracker.
"""
