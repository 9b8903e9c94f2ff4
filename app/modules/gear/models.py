# Supabase tables: gear_types, gear_inventory, gear_assignments
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

gear_types:
- id: uuid (primary key)
- name: text (not null)
- sponsor_name: text (nullable)
- description: text (nullable)
- created_at: timestamp (default: now())

gear_inventory (stock of one gear type in one size):
- id: uuid (primary key)
- gear_type_id: uuid (foreign key to gear_types.id)
- size: text (not null)
- quantity_total: integer (not null)
- quantity_available: integer (not null) - starts at quantity_total
- notes: text (nullable)
- created_at: timestamp (default: now())

gear_assignments:
- id: uuid (primary key)
- participant_id: uuid (foreign key to participants.id ON DELETE CASCADE)
- gear_inventory_id: uuid (foreign key to gear_inventory.id)
- assigned_by_user_id: uuid (foreign key to users.id)
- assigned_date: date (not null)
- notes: text (nullable)
- created_at: timestamp (default: now())
"""
