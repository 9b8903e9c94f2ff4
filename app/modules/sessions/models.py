# Supabase tables: sessions, session_participants
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

sessions (one row per lesson occurrence):
- id: uuid (primary key)
- date: date (not null)
- time: time (not null)
- type: text (not null, default: 'Swim Lesson')
- created_at: timestamp (default: now())

session_participants (sign-ups and attendance):
- id: uuid (primary key)
- session_id: uuid (foreign key to sessions.id ON DELETE CASCADE)
- participant_id: uuid (foreign key to participants.id ON DELETE CASCADE)
- status: text (not null) - values: signed_up, present, absent, self_reported
- signed_up_at: timestamp (default: now())
- marked_at: timestamp (nullable)
- validated_by_volunteer_id: uuid (foreign key to users.id, nullable)
- notes: text (nullable)
- created_at, updated_at: timestamp
- unique constraint on (session_id, participant_id)
"""
