# Supabase Auth
# This module uses Supabase's built-in authentication system.
# Accounts are keyed by a pseudo-email derived from the phone number
# (see app.core.phone); there is no email address a person ever types.

"""
Supabase Auth provides:
- auth.sign_in_with_password() - Authenticate with pseudo-email + password
- auth.get_user() - Get current user from JWT token
- auth.sign_out() - Logout users
- auth.admin.create_user() / auth.admin.delete_user() - used by account provisioning

Identities live in Supabase's auth.users table. The application profile
(role, language, phone) lives in public.users, see app.modules.users.models.
"""
