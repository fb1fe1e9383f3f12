# Supabase Auth
# This module uses Supabase's built-in authentication system
# No custom tables are required - Supabase Auth handles:
# - User login and session management
# - JWT token generation and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

Accounts are created by an administrator in the Supabase dashboard; this
service has no sign-up endpoint. Profile data lives in the profiles table
(see app/modules/profiles/models.py).
"""
