# Supabase table: profiles
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- username: text (unique, not null, ^[a-z0-9-]+$) - public portfolio address /<username>
- email: text (nullable) - synced from auth.users
- full_name, title, bio, avatar_url: text (nullable)
- role: text (developer | admin, default developer)
- subscription_tier: text (free | pro | premium, default free) - mirrored from Stripe by the webhook
- stripe_customer_id: text (nullable)
- available_for_work: boolean (default true)
- primary_color, secondary_color, template: text - portfolio appearance
- hero_*, cta_*, about_*, stats_*: portfolio copy (nullable)
- services, work_process: jsonb (nullable)
- technologies_list: text[] (nullable)
- linkedin_url, twitter_url, facebook_url, tiktok_url: text (nullable)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Note: Authentication data (password, tokens) is stored in auth.users table
managed by Supabase Auth. This table only stores profile information.
"""
