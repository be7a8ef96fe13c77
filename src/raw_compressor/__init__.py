"""RAW Compressor: comprime archivos RAW de cámara a .xz y aparta los originales."""

__version__ = "0.1.0"
