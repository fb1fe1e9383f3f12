# Supabase tables: profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- username: text (nullable)
- full_name: text (nullable)
- avatar_url: text (nullable)
- website: text (nullable)
- updated_at: timestamp (nullable)

A profile row may not exist until the user saves it for the first time,
so reads tolerate "no rows" and writes upsert.
"""
