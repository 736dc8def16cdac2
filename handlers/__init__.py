"""
handlers/ - Presentation Layer
================================
HTTP trigger handlers. Each handler receives a request from the external
scheduler, delegates to the appropriate Service, and shapes the JSON
response. No business logic lives here.
"""
