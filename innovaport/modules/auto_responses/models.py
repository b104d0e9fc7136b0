# Supabase table: auto_response_templates
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

auto_response_templates:
- id: uuid (primary key)
- user_id: uuid (references profiles.id)
- name: text (not null)
- subject: text (not null) - may contain {{placeholders}}
- body_html: text (not null) - may contain {{placeholders}}
- enabled: boolean (default true)
- conditions: jsonb (nullable) - {"project_type": "...", "budget_range": {"min": 0, "max": 5000}}
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
