"""
friday.core — Constants and logging shared by every layer.
"""
