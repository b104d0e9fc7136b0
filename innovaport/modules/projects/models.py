# Supabase table: projects
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to profiles.id, not null)
- title: text (not null), title_en: text (nullable)
- slug: text (not null, unique per user_id)
- category: text (nullable)
- short_description / short_description_en: text (nullable)
- full_description / full_description_en: text (nullable)
- problem: text (nullable)
- technologies: text[] (default '{}')
- client_type: text (personal | professional | open_source, default personal)
- client_name: text (nullable)
- duration_value: int (nullable, 1..1000)
- duration_unit: text (weeks | months, default weeks)
- project_url: text (nullable)
- tags: text (nullable, comma separated)
- image_url: text (nullable, http(s) URL or data:image/ URI)
- screenshots_url: text[] (nullable, max 10)
- featured: boolean (default false)
- published: boolean (default false) - drafts are never shown on the portfolio
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
