# Supabase table: subscriptions
# This file documents the expected database schema
# Rows are written by the Stripe webhook, checkout upgrades and the admin re-sync

"""
Expected Supabase table structure:

subscriptions:
- id: uuid (primary key)
- user_id: uuid (references profiles.id)
- stripe_customer_id: text
- stripe_subscription_id: text (unique) - upsert key
- plan: text (pro | premium)
- status: text (active | trialing | past_due | canceled)
- current_period_start, current_period_end: timestamp
- cancel_at_period_end: boolean (default false)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

The effective plan of a user is profiles.subscription_tier, kept in sync with this table.
"""
