"""📦 modules/ — Bounded contexts específicos del negocio

📚 Contextos actuales:
   • compression/ → Compresión de archivos RAW y reubicación de originales

Cada módulo contiene sus propias capas Clean Architecture:
   • domain/        → Entidades, value objects, puertos y reglas puras
   • application/   → Casos de uso
   • infrastructure/→ Adaptadores concretos (OS, lzma, logging)
   • entry_points/  → CLI
"""
