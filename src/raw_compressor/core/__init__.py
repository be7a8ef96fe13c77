"""📦 core/ — Building blocks universales del sistema

✨ ¿Qué pertenece aquí?
   • Value Objects lógicos reusables en CUALQUIER dominio (PositiveValue)
   • Tipos primitivos validados

🚫 ¿Qué NO pertenece aquí?
   • Conceptos de archivado (Candidate, Outcome, AllowList)
   • Reglas de negocio (comprimir, reubicar originales)

✅ Lo específico del dominio vive en:
   → modules/compression/domain/
"""
