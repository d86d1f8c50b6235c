"""
Reports API - billing reports and dish analytics over order snapshots.
"""
