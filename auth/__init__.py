"""
auth — User authentication module.

Provides:
  • Password hashing (bcrypt)
  • JWT access token creation & verification
  • Bearer-token access guard
  • Signup / login flows and their input validation
"""
