"""
Core Package

Configuration, database management and exceptions.
"""
