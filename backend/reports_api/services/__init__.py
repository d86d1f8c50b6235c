"""
Business logic for the reports API.
"""
