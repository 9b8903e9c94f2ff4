# Supabase tables: auth.users, users, participants
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py and provisioning.py
# Authentication is handled by Supabase Auth (auth.users table)

"""
Expected Supabase table structure:

users:
- id: uuid (primary key, references auth.users.id ON DELETE CASCADE)
- role: text (not null) - values: admin, volunteer, participant
- preferred_language: text (not null, default: 'en') - values: en, id
- full_name: text (nullable)
- phone: text (unique) - normalized digits, see app.core.phone
- created_at: timestamp (default: now())

participants:
- id: uuid (primary key)
- user_id: uuid (unique, references users.id ON DELETE CASCADE)
- emergency_contact_name, emergency_contact_phone: text (nullable)
- shoe_size, clothing_size, age, village, number_of_children: text (nullable)
- respiratory_issues, diabetes, neurological_conditions, chronic_illnesses,
  head_injuries, hospitalizations, medications,
  medications_not_taking_during_program, medical_dietary_requirements,
  religious_personal_dietary_restrictions: text (nullable)
- swim_ability_calm, swim_ability_moving, surfing_experience: text (nullable) - none, poor, competent, advanced
- commitment_statement, acknowledgment_agreement_authorization,
  risks_release_indemnity_agreement, media_release_agreement: boolean (default false)
- hijab_photo_preference: text (nullable) - with_or_without, only_with
- signature: text (nullable)
- signature_date: date (nullable)
- notes: text (nullable)
- profile_photo_url: text (nullable)
- created_at: timestamp (default: now())

Deleting an auth.users row cascades to users, participants and every row
that references a participant (session_participants, participant_progress,
gear_assignments).
"""
