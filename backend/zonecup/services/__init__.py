"""
Services Layer

Pure business logic services that:
- Accept domain inputs (IDs, sessions, etc.)
- Return domain outputs (models, dicts, OperationResult)
- Do NOT depend on HTTP request/response objects
- Commit or roll back as a single unit of work per operation
"""
