"""
routes/ - Presentation Layer
============================
Flask blueprints. Each route reads the request, delegates to the
appropriate Service, and wraps the result in the response envelope.
No business logic lives here.
"""
