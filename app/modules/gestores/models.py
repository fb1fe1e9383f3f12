# Supabase table: Gestores
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:

Gestores:
- id: bigint (primary key, identity)
- nome: text (not null)
- email: text (nullable)
- ativo: boolean (not null, default: true) - false means removed
- created_at: timestamp (default: now())
- updated_at: timestamp (nullable)

Rows are never deleted; deleting a gestor sets ativo = false so groups
that still reference the name keep displaying it.
"""
