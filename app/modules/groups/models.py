# Supabase tables: Lista_de_Grupos, Lista_de_Mensagens
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in store.py

"""
Expected Supabase table structure:

Lista_de_Grupos:
- id: bigint (primary key, identity)
- grupo: text (nullable) - WhatsApp group JID, joins with Lista_de_Mensagens.grupoJid
- nome_grupo: text (nullable) - display name
- status: text (nullable) - short label written by the analysis process
- resumo: text (nullable) - longer summary written by the analysis process
- squad: text (nullable)
- head: text (nullable)
- gestor: text (nullable)
- created_at: timestamp (default: now())

Lista_de_Mensagens:
- id: bigint (primary key, identity)
- grupoJid: text (not null) - group JID the message was sent to
- created_at: timestamp (default: now())

Notes:
- Message counts are not stored; they are recomputed from
  Lista_de_Mensagens on every full load.
- Rows are created by the ingestion/analysis process. This service only
  edits status/resumo/squad/head/gestor and passes inserts/deletes through.
"""

# Record field -> store column
GROUP_COLUMNS = {
    "id": "id",
    "group_key": "grupo",
    "name": "nome_grupo",
    "status": "status",
    "summary": "resumo",
    "squad": "squad",
    "head": "head",
    "gestor": "gestor",
}

MESSAGE_GROUP_KEY_COLUMN = "grupoJid"
