# Supabase table: notifications
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

notifications:
- id: uuid (primary key)
- recipient_id: uuid (foreign key to profiles.id, not null)
- title: text (not null)
- message: text (nullable)
- type: text (nullable) - e.g. "job_update", "invoice"
- read: boolean (default: false)
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable) - maintained by a trigger, also set on every update
"""
