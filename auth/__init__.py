"""
auth — User authentication module.

Provides:
  • Signed session token creation & verification
  • Password hashing (bcrypt, per-call salt)
  • Signup / Login / Profile / Change-password API routes
  • ``get_current_user`` FastAPI dependency (the auth gate)
"""
