"""
Use Cases

Organized by domain folder:
- auth/: Login, signup and password reset
- sessions/: Session authentication and management
"""
