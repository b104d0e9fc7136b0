# Supabase table: platform_testimonials
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

platform_testimonials:
- id: uuid (primary key)
- client_name, client_email: text (not null)
- client_company, client_position: text (nullable)
- rating: integer (nullable, 1..5)
- testimonial_text: text (not null, 10..1000 chars)
- project_name, project_url: text (nullable)
- approved: boolean (default false) - moderated by admins
- featured: boolean (default false) - shown on the landing page
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)
"""
