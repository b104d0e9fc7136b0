# Admin operations work on existing tables:
# - profiles (see modules/profiles/models.py)
# - subscriptions (see modules/billing/models.py)
# Users themselves live in auth.users and are managed through the Supabase Auth admin API.
