"""
Services package for the recurring charge detector.
"""
