# Supabase table: profiles
# Schema is documented in app/modules/roles/models.py (role lives on this table)
# Actual operations are handled via Supabase SDK in service.py

"""
Profiles are created at signup (app.modules.auth) and edited by their owner
through the settings endpoint. Only company details are user-editable; role
changes go through app.modules.roles.
"""