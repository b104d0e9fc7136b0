# Supabase tables: quotes, quote_reminder_settings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

quotes:
- id: uuid (primary key)
- user_id: uuid (references profiles.id) - the developer receiving the request
- name, email: text (not null) - client contact
- phone, company, location: text (nullable)
- project_type: text (not null)
- platforms: jsonb (default {}) - {"ios": bool, "android": bool}
- budget: text (not null) - budget code (small | medium | large | xl) or free text
- deadline: text (nullable)
- features: text[] (default [])
- design_pref: text (nullable)
- description: text (not null)
- has_vague_idea: boolean (default false)
- contact_pref: text (default 'Email')
- consent_contact, consent_privacy: boolean
- status: text (new | discussing | quoted | accepted | rejected, default new)
- internal_notes: text (nullable) - visible to the developer only
- last_reminder_sent_at: timestamp (nullable)
- reminders_count: integer (default 0)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

quote_reminder_settings:
- id: uuid (primary key)
- user_id: uuid (unique, references profiles.id)
- enabled: boolean (default true)
- reminder_days: integer[] (default {3,7,14})
- notify_on_status_change: boolean (default true)
- created_at, updated_at: timestamp
"""
