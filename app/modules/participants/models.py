# Supabase table: participants
# Created together with the participant's account by
# app.modules.users.provisioning; the column list is documented in
# app/modules/users/models.py.
# This module reads and edits existing rows only.
