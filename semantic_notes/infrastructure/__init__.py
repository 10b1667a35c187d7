"""Инфраструктурный слой: реализации интерфейсов.

Модули:
    storage
        SQLite-хранилище заметок.
    embeddings
        Бэкенды векторизации (локальная модель, Gemini).
"""
