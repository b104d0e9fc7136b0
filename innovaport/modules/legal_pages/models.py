# Supabase table: legal_pages
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

legal_pages:
- id: uuid (primary key)
- slug: text (unique) - e.g. privacy-policy, terms-of-use
- title: text (not null)
- content: text (not null) - HTML or markdown
- meta_title, meta_description: text (nullable)
- status: text (draft | published, default draft)
- template_id: text (default 'default')
- published_at: timestamp (nullable) - stamped when the page is published
- last_updated_by: uuid (nullable, references profiles.id)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
