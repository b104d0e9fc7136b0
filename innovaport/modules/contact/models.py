# Supabase tables: contact_messages, newsletter_subscriptions
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

contact_messages:
- id: uuid (primary key)
- name, email: text (not null)
- subject: text (nullable)
- message: text (not null)
- status: text (new | read | replied, default new)
- replied_at: timestamp (nullable)
- created_at: timestamp (default: now())

newsletter_subscriptions:
- id: uuid (primary key)
- email: text (unique)
- source: text (nullable) - where the sign-up form was shown
- status: text (active | unsubscribed)
- subscribed_at: timestamp (default: now())
- unsubscribed_at: timestamp (nullable)
"""
