"""
API Gateway handlers for the recurring charge detector.
"""
