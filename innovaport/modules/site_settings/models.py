# Supabase table: site_settings
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

site_settings (single row, id = 1):
- id: integer (primary key, always 1)
- social_facebook_url, social_tiktok_url, social_twitter_url, social_linkedin_url,
  social_instagram_url, social_youtube_url, social_github_url: text (nullable)
- developer_testimonials_enabled: boolean (default true)
- maintenance_mode: boolean (default false)
- maintenance_message: text (nullable)
- updated_by: uuid (nullable, references profiles.id)
- updated_at: timestamp (nullable)
"""
