# Supabase table: promo_codes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

promo_codes:
- id: uuid (primary key)
- code: text (unique, upper-case alphanumerics)
- discount_type: text (percentage | fixed)
- discount_value: numeric - percent (0-100] or USD amount
- valid_from, valid_until: timestamp (not null)
- max_uses: integer (nullable, null = unlimited)
- current_uses: integer (default 0) - incremented by the Stripe webhook
- applicable_plans: text[] (nullable, null = every paid plan)
- is_active: boolean (default true)
- created_by: uuid (nullable, references profiles.id)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
