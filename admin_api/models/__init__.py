"""
models/ - Domain Models
=======================
"""
