"""
services/ - Business Layer
==========================
Validation, defaults and not-found handling. Services raise the
exceptions from admin_api.errors and never touch HTTP.
"""
