"""Вспомогательные утилиты.

Модули:
    logger
        Структурированное логирование с эмодзи и маскированием секретов.
"""
