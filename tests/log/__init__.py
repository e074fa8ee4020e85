"""
Logging tests.

Maps to: lenstr/_logging.py
"""
