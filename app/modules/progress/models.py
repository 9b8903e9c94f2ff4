# Supabase tables: levels, skills, participant_progress
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

levels:
- id: uuid (primary key)
- name_en, name_id: text (not null)
- description_en, description_id: text (nullable)
- order_number: integer (not null)
- created_at: timestamp (default: now())

skills:
- id: uuid (primary key)
- level_id: uuid (foreign key to levels.id ON DELETE CASCADE)
- name_en, name_id: text (not null)
- description_en, description_id: text (nullable)
- order_number: integer (not null)
- created_at: timestamp (default: now())

participant_progress (one row per achieved skill or level):
- id: uuid (primary key)
- participant_id: uuid (foreign key to participants.id ON DELETE CASCADE)
- skill_id: uuid (foreign key to skills.id, nullable)
- level_id: uuid (foreign key to levels.id, nullable)
- achieved_date: date (nullable)
- validated_by_volunteer_id: uuid (foreign key to users.id, nullable)
- notes: text (nullable)
- created_at: timestamp (default: now())
- unique constraints on (participant_id, skill_id) and (participant_id, level_id)
"""
