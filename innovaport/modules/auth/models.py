# Supabase Auth
# This module uses Supabase's built-in authentication system.
# Supabase Auth handles:
# - User registration (auth.users table)
# - User login and session management
# - JWT token generation and validation
# - Password hashing and security

"""
Supabase Auth provides:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users

Registration also writes a row in public.profiles keyed by the auth user id;
the username chosen at sign-up is the portfolio address (/<username>).
"""
