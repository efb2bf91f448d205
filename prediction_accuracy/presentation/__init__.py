"""
Presentation Layer Package

HTTP surface of the accuracy engine.
"""
