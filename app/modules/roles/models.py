# Supabase tables: profiles, auth.users
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in stores.py

"""
Expected Supabase table structure:

profiles:
- id: uuid (primary key, references auth.users.id)
- company_name: text (not null)
- contact_person: text (nullable)
- phone_number: text (nullable)
- address: text (nullable)
- role: text (not null, default 'subcontractor') - 'admin' | 'subcontractor'
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

auth.users (managed by Supabase Auth):
- id: uuid
- email: text
- raw_user_meta_data: jsonb - exposed as user_metadata; may carry a "role" hint

profiles.role is the source of truth. user_metadata.role is a mirror written
by the role reconciler and must agree with profiles.role once it has run.
"""

ROLE_ADMIN = "admin"
ROLE_SUBCONTRACTOR = "subcontractor"
ROLES = (ROLE_ADMIN, ROLE_SUBCONTRACTOR)
