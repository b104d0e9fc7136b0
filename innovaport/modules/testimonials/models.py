# Supabase table: testimonials
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

testimonials:
- id: uuid (primary key)
- user_id: uuid (references profiles.id) - the developer the testimonial is about
- client_name: text (not null)
- client_email: text (not null) - never shown publicly
- client_company, client_position, client_avatar_url: text (nullable)
- rating: integer (nullable, 1..5)
- testimonial_text: text (not null, 10..1000 chars)
- project_name, project_url: text (nullable)
- approved: boolean (default false) - set by the developer
- featured: boolean (default false)
- created_at: timestamp (default: now())
"""
